"""
KATRIN command line interface.

Developer tooling around the core: check scripts for syntax and lint
problems, inspect the token stream, dump a parsed program as JSON.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from katrin import __version__
from katrin.core.errors import KatrinError, ParseError
from katrin.core.lexer import tokenize
from katrin.core.lint import lint_program
from katrin.core.manifest import MANIFEST_NAME, discover_scripts, load_manifest
from katrin.core.parser import parse_script

app = typer.Typer(
    help="KATRIN script tools",
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger("katrin.cli")


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"katrin {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """KATRIN script tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _read_script(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(code=1)


def _print_parse_error(error: ParseError, root: Path, format: str) -> None:
    """Print a parse error, in VS Code problem-matcher format when requested."""
    if format == "vscode" and error.context:
        file_path = error.context.file
        if file_path:
            try:
                file_path = Path(file_path).relative_to(root)
            except ValueError:
                pass
        typer.echo(
            f"{file_path or '<script>'}:{error.context.line}:{error.context.column}: "
            f"error: {error.message}",
            err=True,
        )
    else:
        typer.echo(f"Parse error: {error}", err=True)


def _resolve_files(files: list[Path] | None, manifest: Path) -> tuple[list[Path], Path]:
    if files:
        return files, Path.cwd()

    manifest_path = manifest.resolve()
    root = manifest_path.parent
    mf = load_manifest(manifest_path)

    scripts = discover_scripts(root, mf)
    entry = mf.entry_path
    if entry is not None and not entry.exists():
        raise KatrinError(f"Entry script {mf.entry} does not exist")
    return scripts, root


@app.command("check")
def check_command(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Scripts to check (default: discover via manifest)"),
    ] = None,
    manifest: Annotated[
        Path, typer.Option("--manifest", "-m", help=f"Path to {MANIFEST_NAME}")
    ] = Path(MANIFEST_NAME),
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: 'human' or 'vscode'")
    ] = "human",
) -> None:
    """
    Parse and lint scripts.

    Exits with code 1 on any parse error or lint error.
    """
    try:
        scripts, root = _resolve_files(files, manifest)
    except KatrinError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not scripts:
        typer.echo("No scripts found.", err=True)
        raise typer.Exit(code=1)

    failed = False
    for script in scripts:
        logger.debug("Checking %s", script)
        text = _read_script(script)
        try:
            program = parse_script(text, script)
        except ParseError as e:
            _print_parse_error(e, root, format)
            failed = True
            continue

        errors, warnings = lint_program(program)
        for err in errors:
            typer.echo(f"{script}: ERROR: {err}", err=True)
        for warn in warnings:
            typer.echo(f"{script}: WARNING: {warn}")
        failed = failed or bool(errors)

    if failed:
        raise typer.Exit(code=1)
    typer.echo(f"OK: {len(scripts)} script(s) checked.")


@app.command("tokens")
def tokens_command(
    file: Annotated[Path, typer.Argument(help="Script to tokenize")],
) -> None:
    """Print the token stream of a script."""
    text = _read_script(file)

    table = Table(title=str(file))
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Type")
    table.add_column("Value")
    for token in tokenize(text):
        table.add_row(str(token.line), str(token.column), token.type.name, repr(token.value))

    console.print(table)


@app.command("dump")
def dump_command(
    file: Annotated[Path, typer.Argument(help="Script to parse")],
) -> None:
    """Parse a script and print the program as JSON."""
    text = _read_script(file)
    try:
        program = parse_script(text, file)
    except ParseError as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(program.model_dump_json(indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
