"""Run configuration: chunk size and worker count.

Explicit arguments win over the environment; the environment wins over the
built-in defaults. Recognised variables:

``PARAB64_CHUNK_SIZE``   bytes (encode) or characters (decode) per chunk
``PARAB64_MAX_THREADS``  size of the worker pool
``PARAB64_SILENT``       suppress progress output in the CLI
"""

import os
import typing
import warnings
from dataclasses import dataclass

ENCODE = "encode"
DECODE = "decode"
MODES = (ENCODE, DECODE)

STREAM_CHUNK_SIZE = 1 << 20  # 1 MiB streaming blocks
ENCODE_CHUNK_SIZE = STREAM_CHUNK_SIZE - STREAM_CHUNK_SIZE % 3


def _env_int(name: str) -> typing.Optional[int]:
    value = os.getenv(name)
    if not value:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    if parsed <= 0:
        return None
    return parsed


def _env_flag(name: str) -> bool:
    raw = os.getenv(name)
    if not raw:
        return False
    return raw.strip().lower() in ("1", "true", "yes", "on")


def cpu_count() -> int:
    override = _env_int("PARAB64_MAX_THREADS")
    if override is not None:
        return override
    return max(1, os.cpu_count() or 1)


def silent_mode() -> bool:
    return _env_flag("PARAB64_SILENT")


def _check_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown transcoding mode: {mode!r}")


def default_chunk_size(mode: str) -> int:
    _check_mode(mode)
    configured = _env_int("PARAB64_CHUNK_SIZE")
    if configured is None:
        return ENCODE_CHUNK_SIZE if mode == ENCODE else STREAM_CHUNK_SIZE
    if mode == ENCODE and configured % 3:
        aligned = max(3, configured - configured % 3)
        warnings.warn(
            f"PARAB64_CHUNK_SIZE={configured} is not a multiple of 3; using {aligned} for encoding",
            RuntimeWarning,
            stacklevel=2,
        )
        return aligned
    return configured


@dataclass(frozen=True)
class TranscodeConfig:
    chunk_size: int
    workers: int

    def validate(self, mode: str) -> "TranscodeConfig":
        _check_mode(mode)
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if not isinstance(self.workers, int) or self.workers < 1:
            raise ValueError(f"workers must be an integer >= 1, got {self.workers!r}")
        if mode == ENCODE and self.chunk_size % 3:
            raise ValueError(
                f"chunk_size must be a multiple of 3 when encoding, got {self.chunk_size}"
            )
        return self

    @classmethod
    def resolve(
        cls,
        mode: str,
        chunk_size: typing.Optional[int] = None,
        workers: typing.Optional[int] = None,
    ) -> "TranscodeConfig":
        return cls(
            chunk_size=default_chunk_size(mode) if chunk_size is None else chunk_size,
            workers=cpu_count() if workers is None else workers,
        ).validate(mode)


__all__ = [
    "DECODE",
    "ENCODE",
    "ENCODE_CHUNK_SIZE",
    "STREAM_CHUNK_SIZE",
    "TranscodeConfig",
    "cpu_count",
    "default_chunk_size",
    "silent_mode",
]
