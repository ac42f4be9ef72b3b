"""dirscan CLI: list and walk the files under a directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from dirscan.config import CONFIG_RELPATH, DirscanConfig
from dirscan.errors import DirscanError

app = typer.Typer(
    name="dirscan",
    help="dirscan: list and walk the files under a directory",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("dirscan.cli")

CONFIG_TEMPLATE = """\
# dirscan configuration
scan:
  recursive: true
  extensions: []        # e.g. [jpg, jpeg, png]
  max_file_size_kb: 0   # 0 = no limit
ignore:
  use_gitignore: true
  use_dirscanignore: true
  extra_patterns: []
logging:
  verbose: false
"""

IGNORE_TEMPLATE = """\
# dirscan custom ignore patterns
# Uses .gitignore syntax
*.tmp
*.bak
"""

# Options shared by list, walk and scan
_EXT = typer.Option(None, "--ext", "-e", help="Only report files with this extension (repeatable).")
_IGNORE = typer.Option(None, "--ignore", "-i", help="Extra gitignore-style pattern (repeatable).")
_MAX_SIZE = typer.Option(None, "--max-size-kb", help="Skip files larger than this (in KB).")
_RULES = typer.Option(None, "--rules", "-r", help="Directive file with scan rules.")
_NO_IGNORE_FILES = typer.Option(
    False,
    "--no-ignore-files",
    help="Don't read .gitignore or .dirscanignore.",
)
_VERBOSE = typer.Option(False, "--verbose", "-v", help="Log every skipped entry.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _scan(
    path: str,
    *,
    recursive: bool | None,
    ext: list[str] | None,
    ignore: list[str] | None,
    max_size_kb: int | None,
    rules: str | None,
    no_ignore_files: bool,
    verbose: bool,
) -> None:
    from dotenv import load_dotenv

    from dirscan.config_file import ScanRules
    from dirscan.paths import normalize_root
    from dirscan.traversal import list_dir, walk_dir

    try:
        root = normalize_root(path)
        load_dotenv(Path(root) / ".env")
        config = DirscanConfig.load(Path(root))
        config.root = os.path.abspath(root)

        _configure_logging(verbose or config.logging.verbose)

        if rules:
            ScanRules.read(rules).apply_to(config)
        config.scan.extensions.extend(ext or [])
        config.ignore.extra_patterns.extend(ignore or [])
        if max_size_kb is not None:
            config.scan.max_file_size_kb = max_size_kb
        if no_ignore_files:
            config.ignore.use_gitignore = False
            config.ignore.use_dirscanignore = False
        if recursive is None:
            recursive = config.scan.recursive

        traverse = walk_dir if recursive else list_dir
        logger.debug("%s %s", traverse.__name__, root)
        files = traverse(path, config.build_filter())
    except (DirscanError, ValidationError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    for file_name in files:
        console.print(file_name, markup=False, highlight=False, soft_wrap=True)

    logger.debug("%d files", len(files))


@app.command("list")
def list_command(
    path: str = typer.Argument(".", help="Directory to list."),
    ext: list[str] | None = _EXT,
    ignore: list[str] | None = _IGNORE,
    max_size_kb: int | None = _MAX_SIZE,
    rules: str | None = _RULES,
    no_ignore_files: bool = _NO_IGNORE_FILES,
    verbose: bool = _VERBOSE,
) -> None:
    """List the files directly inside a directory."""
    _scan(
        path,
        recursive=False,
        ext=ext,
        ignore=ignore,
        max_size_kb=max_size_kb,
        rules=rules,
        no_ignore_files=no_ignore_files,
        verbose=verbose,
    )


@app.command()
def walk(
    path: str = typer.Argument(".", help="Directory to walk."),
    ext: list[str] | None = _EXT,
    ignore: list[str] | None = _IGNORE,
    max_size_kb: int | None = _MAX_SIZE,
    rules: str | None = _RULES,
    no_ignore_files: bool = _NO_IGNORE_FILES,
    verbose: bool = _VERBOSE,
) -> None:
    """Walk a directory tree and list every file in it."""
    _scan(
        path,
        recursive=True,
        ext=ext,
        ignore=ignore,
        max_size_kb=max_size_kb,
        rules=rules,
        no_ignore_files=no_ignore_files,
        verbose=verbose,
    )


@app.command()
def scan(
    path: str = typer.Argument(".", help="Directory to scan."),
    ext: list[str] | None = _EXT,
    ignore: list[str] | None = _IGNORE,
    max_size_kb: int | None = _MAX_SIZE,
    rules: str | None = _RULES,
    no_ignore_files: bool = _NO_IGNORE_FILES,
    verbose: bool = _VERBOSE,
) -> None:
    """List or walk a directory, as set by scan.recursive in the config or rules."""
    _scan(
        path,
        recursive=None,
        ext=ext,
        ignore=ignore,
        max_size_kb=max_size_kb,
        rules=rules,
        no_ignore_files=no_ignore_files,
        verbose=verbose,
    )


@app.command()
def init(
    path: Path = typer.Argument(
        Path("."),
        help="Directory to initialize.",
    ),
) -> None:
    """Create a default dirscan configuration in a directory."""
    path = path.resolve()

    config_path = path / CONFIG_RELPATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    for dest, template in (
        (config_path, CONFIG_TEMPLATE),
        (path / ".dirscanignore", IGNORE_TEMPLATE),
    ):
        if dest.exists():
            console.print(f"  [yellow]exists[/yellow]  {dest.relative_to(path)}")
        else:
            dest.write_text(template)
            console.print(f"  [green]created[/green] {dest.relative_to(path)}")

    console.print(f"\n[bold green]dirscan initialized in {path}[/bold green]")
    console.print("Edit config/dirscan.yaml, then run: dirscan scan")


@app.command()
def status(
    path: Path = typer.Argument(
        Path("."),
        help="Directory whose configuration to show.",
    ),
) -> None:
    """Show the configuration a scan of this directory would use."""
    try:
        config = DirscanConfig.load(path.resolve())
    except (DirscanError, ValidationError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    table = Table(title="dirscan Status")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    max_kb = config.scan.max_file_size_kb
    table.add_row("Root", config.root)
    table.add_row("Recursive", "yes" if config.scan.recursive else "no")
    table.add_row("Extensions", ", ".join(config.scan.extensions) or "(all)")
    table.add_row("Max file size", f"{max_kb} KB" if max_kb > 0 else "no limit")
    table.add_row("Use .gitignore", "yes" if config.ignore.use_gitignore else "no")
    table.add_row("Use .dirscanignore", "yes" if config.ignore.use_dirscanignore else "no")
    table.add_row("Extra patterns", ", ".join(config.ignore.extra_patterns) or "(none)")
    console.print(table)


if __name__ == "__main__":
    app()
