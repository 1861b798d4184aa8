"""Locate, read and rewrite the .gitignore that holds the managed block."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .core import GitignoreError, logger

GITIGNORE = ".gitignore"
DEFAULT_MODE = 0o644


def locate_gitignore(directory: str | Path) -> Path:
    """Return the absolute path of the .gitignore inside *directory*."""
    root = Path(directory).resolve()
    if not root.exists():
        raise GitignoreError(f"{root} does not exist")
    if not root.is_dir():
        raise GitignoreError(f"{root} is not a directory")
    return root / GITIGNORE


def read_gitignore(path: Path) -> tuple[str, int]:
    """Return the content of *path* and its permission bits.

    A missing file reads as empty with the default mode.  The content is
    decoded without newline translation so CRLF files survive a rewrite.
    """
    try:
        raw = path.read_bytes()
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        logger.info(f"{path} does not exist, creating a new file")
        return "", DEFAULT_MODE
    except OSError as exc:
        raise GitignoreError(f"{path} not readable: {exc}") from exc

    try:
        return raw.decode(), mode
    except UnicodeDecodeError as exc:
        raise GitignoreError(f"{path} is not valid UTF-8: {exc}") from exc


def write_gitignore(path: Path, text: str, mode: int = DEFAULT_MODE) -> None:
    """Write *text* to *path* and apply *mode*."""
    try:
        path.write_bytes(text.encode())
        os.chmod(path, mode)
    except OSError as exc:
        raise GitignoreError(f"write to {path} failed: {exc}") from exc
    logger.debug(f"Wrote {path} (mode {mode:o})")
