"""Shared fixtures for the runtime tests."""

from __future__ import annotations

import ctypes

import pytest
from llvmlite import binding as llvm
from llvmlite import ir


@pytest.fixture
def ir_function():
    """Factory building a one-argument function and a builder positioned in it."""
    module = ir.Module(name="casts")

    def make(arg_type: ir.Type, ret_type: ir.Type):
        fnty = ir.FunctionType(ret_type, [arg_type])
        fn = ir.Function(module, fnty, name=f"f{len(module.functions)}")
        builder = ir.IRBuilder(fn.append_basic_block("entry"))
        return module, builder, fn.args[0]

    return make


@pytest.fixture(scope="module")
def jit():
    """Compile an IR module natively and return its one-argument function via ctypes."""
    llvm.initialize_native_target()
    llvm.initialize_native_asmprinter()
    engines = []

    def compile_function(module: ir.Module, name: str, restype, argtype):
        # each MCJIT engine takes ownership of (and disposes) its target machine
        target_machine = llvm.Target.from_default_triple().create_target_machine()
        llmod = llvm.parse_assembly(str(module))
        llmod.triple = target_machine.triple
        llmod.verify()
        engine = llvm.create_mcjit_compiler(llmod, target_machine)
        engine.finalize_object()
        engines.append(engine)
        return ctypes.CFUNCTYPE(restype, argtype)(engine.get_function_address(name))

    return compile_function
