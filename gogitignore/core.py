"""Core: logger, error types, config loading, run options."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import yaml
from colorama import Fore, Style


# ── Logging ──────────────────────────────────────────────────────────


def _level_color(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return Fore.RED
    if levelno >= logging.WARNING:
        return Fore.YELLOW
    return Fore.CYAN


class ToolFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _level_color(record.levelno)
        message = record.getMessage()
        return f"{color}[{record.levelname.lower()}]{Style.RESET_ALL} {message}"


logger = logging.getLogger("gogitignore")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(ToolFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


# ── Errors ───────────────────────────────────────────────────────────


class GitignoreError(Exception):
    """Base class for every failure reported by gogitignore."""


class MalformedBlockError(GitignoreError):
    """The managed block markers are missing, duplicated or out of order."""


class PathResolutionError(GitignoreError):
    """A discovered path could not be expressed relative to the scan root."""


class GoParseError(GitignoreError):
    """The package clause of a Go source file could not be read."""


# ── Config ───────────────────────────────────────────────────────────

CONFIG_FILENAME = "gogitignore.yaml"

DEFAULTS: dict[str, Any] = {
    "exec": False,
    "gomain": True,
}


def load_config(directory: str | Path) -> dict[str, Any]:
    """Load gogitignore.yaml from *directory*."""
    config_path = Path(directory) / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{CONFIG_FILENAME} must contain a top-level mapping.")
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        logger.warning(f"Ignoring unknown keys in {config_path}: {', '.join(unknown)}")
    config = {k: v for k, v in data.items() if k in DEFAULTS}
    for k, v in config.items():
        if not isinstance(v, bool):
            raise TypeError(f"{CONFIG_FILENAME}: '{k}' must be true or false, got {v!r}.")
    return config


def merge_settings(config: dict[str, Any], cli_kwargs: dict[str, Any]) -> dict[str, Any]:
    """Merge: defaults < config file < explicit CLI flags."""
    settings: dict[str, Any] = {**DEFAULTS}
    for k, v in config.items():
        settings[k] = v
    for k, v in cli_kwargs.items():
        if v is not None:
            settings[k] = v
    return settings


# ── Options ──────────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True)
class Options:
    """Immutable settings for one run."""

    directory: Path
    find_exec: bool = False
    find_gomain: bool = True
    stdout: bool = False
    dry_run: bool = False
    clean: bool = False
