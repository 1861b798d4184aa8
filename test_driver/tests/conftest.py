"""Shared fixtures for gogitignore tests."""

from __future__ import annotations

import io
import logging
import textwrap
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_log_level():
    """Restore the gogitignore logger level changed by ``--verbose``."""
    logger = logging.getLogger("gogitignore")
    saved = logger.level
    yield
    logger.setLevel(saved)


@pytest.fixture
def make_tree(tmp_path: Path):
    """Factory that creates a source tree from a ``{relpath: content}`` map.

    Usage::

        root = make_tree({
            "cmd/tool/main.go": "package main\\n",
            "bin/run.sh": ("#!/bin/sh\\n", 0o755),
        })

    A tuple value sets the file mode as well as the content.
    """
    _counter = 0

    def _make(files: dict[str, str | tuple[str, int]] | None = None) -> Path:
        nonlocal _counter
        root = tmp_path / f"tree_{_counter}"
        root.mkdir()
        _counter += 1

        for rel, value in (files or {}).items():
            content, mode = value if isinstance(value, tuple) else (value, 0o644)
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
            path.chmod(mode)

        return root

    return _make


@pytest.fixture
def capture_logs():
    """Capture gogitignore logger output into a StringIO buffer.

    The logger has propagate=False and its own StreamHandler that points
    at the original sys.stderr fd, so capsys/capfd/caplog cannot see it.
    This fixture adds a temporary StringIO handler.

    Usage::

        buf = capture_logs
        # ... run code that logs ...
        assert "expected" in buf.getvalue()
    """
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("gogitignore")
    logger.addHandler(handler)
    yield buf
    logger.removeHandler(handler)
