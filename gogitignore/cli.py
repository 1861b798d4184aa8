"""Entry point: the ``gogitignore`` click command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from .collect import collect
from .core import GitignoreError, Options, load_config, logger, merge_settings
from .gitignore import GITIGNORE, locate_gitignore, read_gitignore, write_gitignore
from .splice import clean, insert


def run(options: Options) -> str:
    """Compute the new .gitignore text and write it unless told otherwise.

    Returns the resulting text.
    """
    gitignore = locate_gitignore(options.directory)
    content, mode = read_gitignore(gitignore)

    if options.clean:
        result = clean(content)
    else:
        entries = collect(
            gitignore.parent,
            find_exec=options.find_exec,
            find_gomain=options.find_gomain,
            gitignore=gitignore,
        )
        logger.debug(f"{len(entries)} entries discovered")
        result = insert(content, "\n".join(entries))

    if options.stdout or options.dry_run:
        click.echo(result, nl=False)
        if options.dry_run:
            logger.info(f"Dry run complete. {gitignore} was not written.")
    else:
        write_gitignore(gitignore, result, mode)
        logger.info(f"Updated {gitignore}")
    return result


@click.command(
    name="gogitignore",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Keep build artifacts of a source tree listed in its .gitignore.",
)
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory holding .gitignore; its tree is scanned for artifacts.",
)
@click.option("--exec/--no-exec", "find_exec", default=None, help="Find all files with an executable bit set.")
@click.option(
    "--gomain/--no-gomain",
    "find_gomain",
    default=None,
    help="Add the binaries built from Go main packages (on by default).",
)
@click.option("--stdout", is_flag=True, help="Print the resulting .gitignore instead of updating it in place.")
@click.option("--dry-run", "--dryrun", "dry_run", is_flag=True, help="Print the result; no changes are made.")
@click.option("--clean", "clean_block", is_flag=True, help="Remove the managed block without scanning.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(
    directory: Path,
    find_exec: bool | None,
    find_gomain: bool | None,
    stdout: bool,
    dry_run: bool,
    clean_block: bool,
    verbose: bool,
) -> None:
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    try:
        config = load_config(directory)
    except (OSError, TypeError, yaml.YAMLError) as exc:
        logger.error(f"Invalid configuration in {directory}: {exc}")
        sys.exit(1)

    settings: dict[str, Any] = merge_settings(
        config, {"exec": find_exec, "gomain": find_gomain},
    )
    options = Options(
        directory=directory,
        find_exec=settings["exec"],
        find_gomain=settings["gomain"],
        stdout=stdout,
        dry_run=dry_run,
        clean=clean_block,
    )

    try:
        run(options)
    except GitignoreError as exc:
        action = "clean" if options.clean else "update"
        target = directory.resolve() / GITIGNORE
        logger.error(f"{action} of {target} failed: {exc}")
        sys.exit(1)
    except OSError as exc:
        logger.error(f"{exc.filename or directory}: {exc.strerror or exc}")
        sys.exit(1)


def main() -> None:
    """Console script entry point."""
    from colorama import init as colorama_init
    colorama_init()

    cli(prog_name="gogitignore", standalone_mode=True)


if __name__ == "__main__":
    main()
