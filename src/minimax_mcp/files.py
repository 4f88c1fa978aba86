"""Output path handling for locally saved media."""

import asyncio
import re
import time
from pathlib import Path
from typing import Any

from minimax_mcp.errors import MinimaxRequestError


def default_base_path() -> Path:
    return Path.home() / "Desktop"


def file_stem(prefix: str, text: str, timestamp_ms: int | None = None) -> str:
    """``<prefix>_<first 20 chars of text, non-word chars replaced>_<ms>``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    snippet = re.sub(r"[^\w]", "_", text[:20])
    return f"{prefix}_{snippet}_{timestamp_ms}"


def build_output_file(
    name: str,
    output_directory: str | None,
    base_path: str | None,
    extension: str,
) -> Path:
    """Resolve where a generated file is written.

    Absolute ``output_directory`` values are used as-is; relative ones are
    joined to ``base_path`` (the desktop when unset). ``name`` may itself be
    an absolute path, in which case it wins.
    """
    file_name = name if Path(name).suffix else f"{name}.{extension}"
    if Path(file_name).is_absolute():
        return Path(file_name)

    base = Path(base_path).expanduser() if base_path else default_base_path()
    if output_directory:
        directory = Path(output_directory).expanduser()
        if not directory.is_absolute():
            directory = base / directory
    else:
        directory = base
    return directory / file_name


def save_bytes(path: Path, content: bytes) -> Path:
    """Write ``content`` to ``path``; no partial file survives a failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as e:
        if path.is_file():
            path.unlink()
        raise MinimaxRequestError(f"Failed to save file {path}: {e}") from e
    return path


async def write_file(path: Path, content: bytes) -> Path:
    """``save_bytes`` off the event loop."""
    return await asyncio.to_thread(save_bytes, path, content)


async def read_file(path: Path) -> bytes:
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        raise MinimaxRequestError(f"Failed to read file {path}: {e}") from e


class OutputFiles:
    """Files written during one adapter call.

    Used as a context manager; if the block raises, every file saved through
    it is removed again so a failed call leaves nothing behind.
    """

    def __init__(self) -> None:
        self.paths: list[Path] = []

    async def save(self, path: Path, content: bytes) -> Path:
        await write_file(path, content)
        self.paths.append(path)
        return path

    def discard(self) -> None:
        for path in reversed(self.paths):
            path.unlink(missing_ok=True)
        self.paths.clear()

    def __enter__(self) -> "OutputFiles":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is not None:
            self.discard()


def decode_hex(data: str) -> bytes:
    try:
        return bytes.fromhex(data)
    except ValueError as e:
        raise MinimaxRequestError(f"Could not decode audio data: {e}") from e
