"""Runtime configuration (ddl.toml) loading and validation."""
from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric.widths import NATIVE_WORD_BITS

CONFIG_NAME = "ddl.toml"


@dataclass(frozen=True)
class RuntimeConfig:
    # width of the signed host word used by the BigInt -> sint fast path
    native_word_bits: int = NATIVE_WORD_BITS

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        bits = self.native_word_bits
        if isinstance(bits, bool) or not isinstance(bits, int) or bits < 2:
            raise_error("RE0011",
                        detail=f"native_word_bits must be an int >= 2, got {bits!r}")


DEFAULT_CONFIG = RuntimeConfig()


def load_config(directory: Path | None = None) -> RuntimeConfig:
    """Load ddl.toml from the given directory (default: cwd).

    A missing file yields the defaults.
    """
    if directory is None:
        directory = Path.cwd()
    config_path = directory / CONFIG_NAME
    if not config_path.exists():
        return DEFAULT_CONFIG
    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise_error("RE0011", detail=f"{config_path}: {e}")
    return _parse_config(data)


def load_config_from_string(text: str) -> RuntimeConfig:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise_error("RE0011", detail=str(e))
    return _parse_config(data)


def _parse_config(data: dict) -> RuntimeConfig:
    runtime = data.get("runtime", {})
    if not isinstance(runtime, dict):
        raise_error("RE0011", detail=f"[runtime] must be a table, got {type(runtime).__name__}")
    unknown = set(runtime) - {"native_word_bits"}
    if unknown:
        raise_error("RE0011", detail=f"unknown keys in [runtime]: {', '.join(sorted(unknown))}")
    return RuntimeConfig(
        native_word_bits=runtime.get("native_word_bits", NATIVE_WORD_BITS),
    )
