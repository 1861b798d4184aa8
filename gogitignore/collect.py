"""Collector: discover build artifacts in a directory tree."""

from __future__ import annotations

import dataclasses
import os
import re
import stat
from collections.abc import Iterator
from pathlib import Path

from .core import GoParseError, PathResolutionError, logger

EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
SKIP_DIRS = {".git"}

_IDENT_RE = re.compile(r"[^\W\d]\w*")


@dataclasses.dataclass(frozen=True)
class FileRecord:
    """A regular file seen during the walk."""

    path: Path
    mode: int


def walk_files(root: Path) -> Iterator[FileRecord]:
    """Yield every regular file below *root*, skipping ``.git`` trees.

    Unreadable directories and entries that vanish mid-walk are logged and
    skipped.
    """

    def _on_error(exc: OSError) -> None:
        logger.warning(f"Skipping {exc.filename}: {exc.strerror or exc}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for name in sorted(filenames):
            path = Path(dirpath) / name
            try:
                st = path.lstat()
            except OSError as exc:
                _on_error(exc)
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            yield FileRecord(path=path, mode=st.st_mode)


def relative_entry(root: Path, path: Path) -> str:
    """Return *path* relative to *root* with forward slashes."""
    try:
        rel = os.path.relpath(path, root)
    except ValueError as exc:
        raise PathResolutionError(f"{path} is not relative to {root}: {exc}") from exc
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        raise PathResolutionError(f"{path} is outside {root}")
    return Path(rel).as_posix()


# ── Go package clause ────────────────────────────────────────────────


def _skip_space_and_comments(src: str, pos: int) -> int:
    while pos < len(src):
        if src[pos] in " \t\r\n":
            pos += 1
        elif src.startswith("//", pos):
            nl = src.find("\n", pos)
            pos = len(src) if nl < 0 else nl + 1
        elif src.startswith("/*", pos):
            close = src.find("*/", pos + 2)
            if close < 0:
                raise GoParseError("comment not terminated")
            pos = close + 2
        else:
            break
    return pos


def parse_package_name(src: str) -> str:
    """Return the package name declared by the Go source *src*.

    Only the package clause is examined; leading comments (including build
    constraints) are skipped.
    """
    src = src.removeprefix("\ufeff")
    pos = _skip_space_and_comments(src, 0)
    if not src.startswith("package", pos):
        raise GoParseError("expected 'package'")
    pos += len("package")
    after = _skip_space_and_comments(src, pos)
    if after == pos:
        raise GoParseError("expected package name")
    match = _IDENT_RE.match(src, after)
    if match is None:
        raise GoParseError("expected package name")
    name = match.group(0)
    if name == "_":
        raise GoParseError("invalid package name _")
    return name


def read_package_name(path: Path) -> str:
    try:
        src = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise GoParseError(f"invalid UTF-8 encoding: {exc}") from exc
    except OSError as exc:
        raise GoParseError(str(exc)) from exc
    return parse_package_name(src)


# ── Predicates ───────────────────────────────────────────────────────


def find_executable(root: Path, record: FileRecord) -> str | None:
    """Entry for a file with any executable permission bit set."""
    if record.mode & EXEC_BITS:
        return relative_entry(root, record.path)
    return None


def find_go_main(root: Path, record: FileRecord) -> str | None:
    """Entry for the binary ``go build`` produces from a ``main`` package.

    The binary is named after the package directory and placed inside it.
    """
    if record.path.suffix != ".go":
        return None
    if read_package_name(record.path) != "main":
        return None
    package_dir = record.path.parent
    return relative_entry(root, package_dir / package_dir.name)


def collect(
    root: str | Path,
    *,
    find_exec: bool = False,
    find_gomain: bool = True,
    gitignore: Path | None = None,
) -> list[str]:
    """Scan *root* and return the sorted, deduplicated artifact entries."""
    root = Path(root).resolve()
    skip_file = gitignore.resolve() if gitignore is not None else root / ".gitignore"
    entries: set[str] = set()

    for record in walk_files(root):
        if record.path == skip_file:
            continue

        entry: str | None = None
        try:
            if find_exec:
                entry = find_executable(root, record)
            # A Go main match overrides the permission bit.
            if find_gomain:
                entry = find_go_main(root, record) or entry
        except GoParseError as exc:
            logger.warning(f"{record.path}: parse error: {exc}")
            continue
        except PathResolutionError as exc:
            logger.warning(str(exc))
            continue

        if entry and entry not in entries:
            logger.info(f"Found: {entry}")
            entries.add(entry)

    return sorted(entries)
