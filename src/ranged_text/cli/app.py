"""
Main CLI application for ranged-text.

Provides a Typer-based command-line interface for converting HTML fragments
to range models and back, and for splitting and joining models.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import get_config_manager, load_config
from ..converters.model_to_tree import to_html
from ..converters.tree_to_model import from_html
from ..core.errors import RangedTextError
from ..core.range_model import RangeModel
from ..core.tree import SoupTreeAdapter
from ..editing.concat import concat as concat_models
from ..editing.split import split as split_model

# Initialize Typer app
app = typer.Typer(
    name="ranged-text",
    help="Convert inline HTML to flat text plus formatting ranges, and back",
    add_completion=False,
    rich_markup_mode="rich"
)

# Global console for rich output
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    Convert inline HTML to flat text plus formatting ranges, and back.
    """
    level = "DEBUG" if verbose else load_config().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_model(path: Path) -> RangeModel:
    """Load a model from a JSON file, or ingest it from an HTML file."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return RangeModel.from_json(content)

    config = load_config()
    return from_html(content, config.build_registry(), SoupTreeAdapter(config.parser))


def _write_or_print(content: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(content)
        return
    output.write_text(content + "\n", encoding="utf-8")
    err_console.print(f"[green]Wrote {output}[/green]")


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


@app.command()
def ingest(
    file_path: Path = typer.Argument(..., help="HTML fragment to convert"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the model JSON here"),
    parser: Optional[str] = typer.Option(None, "--parser", "-p", help="BeautifulSoup parser to use"),
) -> None:
    """
    Convert an HTML fragment into a range model (JSON).
    """
    config = load_config()
    adapter = SoupTreeAdapter(parser or config.parser)

    try:
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        model = from_html(file_path.read_text(encoding="utf-8"), config.build_registry(), adapter)
    except (RangedTextError, OSError) as e:
        _fail(str(e))

    _write_or_print(model.to_json(indent=config.json_indent), output)


@app.command()
def emit(
    file_path: Path = typer.Argument(..., help="Range model JSON to render"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the HTML here"),
) -> None:
    """
    Render a range model (JSON) back into an HTML fragment.
    """
    config = load_config()

    try:
        model = _read_model(file_path)
        html = to_html(model, config.build_registry(), SoupTreeAdapter(config.parser))
    except (RangedTextError, OSError) as e:
        _fail(str(e))

    _write_or_print(html, output)


@app.command()
def split(
    file_path: Path = typer.Argument(..., help="Range model JSON or HTML fragment"),
    at: int = typer.Option(..., "--at", "-a", help="Text offset to split at"),
    output_prefix: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write PREFIX.before.json and PREFIX.after.json"
    ),
) -> None:
    """
    Split a model into two at a text offset.
    """
    config = load_config()

    try:
        model = _read_model(file_path)
        before, after = split_model(model, at, config.build_registry())
    except (RangedTextError, OSError) as e:
        _fail(str(e))

    if output_prefix is None:
        console.print(Panel(Text(before.to_json(indent=config.json_indent)), title="Before", border_style="blue"))
        console.print(Panel(Text(after.to_json(indent=config.json_indent)), title="After", border_style="green"))
        return

    before_path = output_prefix.with_name(output_prefix.name + ".before.json")
    after_path = output_prefix.with_name(output_prefix.name + ".after.json")
    _write_or_print(before.to_json(indent=config.json_indent), before_path)
    _write_or_print(after.to_json(indent=config.json_indent), after_path)


@app.command()
def concat(
    before_path: Path = typer.Argument(..., help="Model that comes first"),
    after_path: Path = typer.Argument(..., help="Model that comes second"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the joined model here"),
) -> None:
    """
    Join two models end to end.
    """
    config = load_config()

    try:
        model = concat_models(_read_model(before_path), _read_model(after_path), config.build_registry())
    except (RangedTextError, OSError) as e:
        _fail(str(e))

    _write_or_print(model.to_json(indent=config.json_indent), output)


@app.command()
def check(
    file_path: Path = typer.Argument(..., help="Range model JSON or HTML fragment"),
) -> None:
    """
    Show statistics for a model and report any broken invariants.
    """
    config = load_config()
    registry = config.build_registry()

    try:
        model = _read_model(file_path)
    except (RangedTextError, OSError) as e:
        _fail(str(e))

    stats = model.get_stats(registry)

    info_table = Table(title="Model Information", show_header=False)
    info_table.add_column("Property", style="cyan")
    info_table.add_column("Value", style="green")

    info_table.add_row("File", str(file_path))
    info_table.add_row("Characters", str(stats['character_count']))
    info_table.add_row("Words", str(stats['word_count']))
    for name, count in stats['range_counts'].items():
        info_table.add_row(f"Ranges: {name}", str(count))

    console.print(info_table)

    issues = model.validate_integrity(registry)
    if issues:
        console.print("\n[yellow]Integrity Issues:[/yellow]")
        for issue in issues:
            console.print(f"  • {issue}", markup=False)
        raise typer.Exit(1)

    console.print("\n[green]Model is consistent[/green]")


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    create_default: bool = typer.Option(False, "--create-default", help="Create default config file"),
) -> None:
    """
    Manage ranged-text configuration.
    """
    config_manager = get_config_manager()

    if create_default:
        path = config_manager.create_default_config()
        console.print(f"[green]Created default configuration at {path}[/green]")
        return

    if show:
        config_info = config_manager.get_config_info()

        config_display = f"""[bold]ranged-text Configuration[/bold]

[bold cyan]Conversion:[/bold cyan]
• Parser: {config_info['parser']}
• JSON Indent: {config_info['json_indent']}
• Log Level: {config_info['log_level']}

[bold blue]Registry:[/bold blue]
• Extra Aliases: {', '.join(f'{k}→{v}' for k, v in config_info['aliases'].items()) or 'none'}
• Extra Opaque Tags: {', '.join(config_info['opaque_tags']) or 'none'}

[bold magenta]Files:[/bold magenta]
• Config File: {config_info['config_file']}
• Exists: {'Yes' if config_info['config_exists'] else 'No'}"""

        console.print(Panel(config_display, border_style="green"))
        return

    # Default: show basic info
    console.print("Use [cyan]ranged-text config --show[/cyan] to see full configuration")
    console.print("Use [cyan]ranged-text config --create-default[/cyan] to create a default config file")


if __name__ == "__main__":
    app()
