from __future__ import annotations

from pathlib import Path
from sys import stdin

from click import UsageError

# prevent infinite loop on infinite input (like `yes | bedrock-subchunk`)
MAX_PIPE_SIZE = 100 * 1024 * 1024  # 100 MB


def load(path: Path | None, *, hex: bool = False) -> bytes:
    """Read one raw record from a file, or from stdin if no path is given."""
    data = _read_source(path)
    if hex:
        return _decode_hex(data)
    return data


def _read_source(path: Path | None) -> bytes:
    if path:
        return path.read_bytes()

    if stdin.isatty():
        raise UsageError(
            "Missing input: Either provide file path with --in, or pipe content to stdin.",
        )

    return stdin.buffer.read(MAX_PIPE_SIZE)


def _decode_hex(data: bytes) -> bytes:
    try:
        return bytes.fromhex(data.decode("ascii"))
    except (UnicodeDecodeError, ValueError):
        raise UsageError("Input is not valid hexadecimal text.")
