"""Command line interface for browsing and checking style guides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from .ctx import StyleGuideLoaderContext
from .errors import StyleGuideError
from .guide import BUNDLED_GUIDE, StyleGuide
from .render import DEFAULT_TITLE, render_markdown
from .validation import EXPECTED_ENTRY_COUNT, validate_file

console = Console()
error_console = Console(stderr=True)

app = typer.Typer(
    name="styleguide",
    help="Browse, render and validate Ruby style guide entries",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

ProjectOption = Annotated[
    Path,
    typer.Option("--project", "-p", help="Project directory", file_okay=False),
]
UserDirOption = Annotated[
    Optional[Path],
    typer.Option("--user-dir", help="User guide directory (default: ~/.styleguide)"),
]


def print_error(message: str) -> None:
    error_console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def load(project: Path, user_dir: Optional[Path]) -> StyleGuide:
    """Load the merged guide for a project, exiting on errors."""
    try:
        ctx = StyleGuideLoaderContext(project, user_dir=user_dir, caching=False)
        return ctx.load_guide()
    except (StyleGuideError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output"),
    ] = False,
) -> None:
    """Ruby style guide tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("list")
def list_entries(
    project: ProjectOption = Path("."),
    user_dir: UserDirOption = None,
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-s", help="Only entries mentioning this text"),
    ] = None,
) -> None:
    """List guide entries."""
    guide = load(project, user_dir)
    numbered = list(enumerate(guide, start=1))
    if search:
        matches = guide.search(search)
        numbered = [(n, entry) for n, entry in numbered if entry in matches]

    if not numbered:
        console.print("[dim]No entries found[/dim]")
        return

    table = Table(title="Style guide", show_header=True, header_style="bold")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Rule")
    table.add_column("Example", style="green")
    for number, entry in numbered:
        table.add_row(str(number), escape(entry.rule), "yes" if entry.has_example else "-")
    console.print(table)


@app.command("show")
def show_entry(
    number: Annotated[int, typer.Argument(help="Entry number, starting at 1")],
    project: ProjectOption = Path("."),
    user_dir: UserDirOption = None,
) -> None:
    """Show one entry with its rationale and example."""
    guide = load(project, user_dir)
    if not 1 <= number <= len(guide):
        print_error(f"No entry {number}; the guide has {len(guide)} entries")
        raise typer.Exit(1)

    entry = guide[number - 1]
    console.print(f"[cyan]Rule:[/cyan] {escape(entry.rule)}")
    console.print(f"[cyan]Why:[/cyan] {escape(entry.why)}")
    if entry.example is not None:
        console.print("[cyan]Example:[/cyan]")
        console.print(Syntax(entry.example.rstrip(), "ruby"))


@app.command("validate")
def validate(
    paths: Annotated[
        Optional[list[Path]],
        typer.Argument(help="Guide files to check (default: the bundled guide)"),
    ] = None,
    expected: Annotated[
        Optional[int],
        typer.Option("--expected", "-e", help="Required number of entries per file"),
    ] = None,
) -> None:
    """Check guide files for missing or empty fields."""
    if not paths:
        paths = [BUNDLED_GUIDE]
        if expected is None:
            expected = EXPECTED_ENTRY_COUNT

    failed = False
    for path in paths:
        result = validate_file(path, expected_count=expected)
        for message in result.errors:
            print_error(message)
        for message in result.warnings:
            print_warning(message)
        if result.is_valid:
            console.print(
                f"[green]{escape(str(path))}: ok[/green] "
                f"({result.stats['entries']} entries, {result.stats['examples']} examples)"
            )
        else:
            failed = True

    if failed:
        raise typer.Exit(1)


@app.command("render")
def render(
    project: ProjectOption = Path("."),
    user_dir: UserDirOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write Markdown to this file"),
    ] = None,
    title: Annotated[str, typer.Option("--title", help="Document title")] = DEFAULT_TITLE,
) -> None:
    """Render the guide as Markdown."""
    markdown = render_markdown(load(project, user_dir), title=title)
    if output:
        try:
            output.write_text(markdown, encoding="utf-8")
        except OSError as e:
            print_error(f"Cannot write {output}: {e}")
            raise typer.Exit(1) from e
        console.print(f"[green]Wrote {escape(str(output))}[/green]")
    else:
        typer.echo(markdown, nl=False)


if __name__ == "__main__":
    app()
