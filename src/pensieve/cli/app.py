"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..notebook import Notebook
from ..thoughts import dump_history, filter_history
from ..ui.themes import PALETTE
from ..ui.widgets import format_thought_time
from .providers import get_config, get_notebook

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="pensieve",
    help="A personal notebook of timestamped thoughts",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _require_writable(notebook: Notebook) -> None:
    """Refuse to modify a notebook whose store would drop the write."""
    if not notebook.store.accepts_writes:
        console.print(
            f"[red]Error: the {notebook.store.backend_type} store is signed out; "
            "set PENSIEVE_USER_ID to save changes.[/red]"
        )
        raise typer.Exit(code=1)


async def _finish(notebook: Notebook) -> None:
    """Close the notebook, failing the command if a write was lost."""
    await notebook.close()
    if notebook.failed_writes:
        console.print(f"[red]Error: {notebook.last_write_error}[/red]")
        raise typer.Exit(code=1)


@app.command()
def tui():
    """Open the interactive notebook."""
    from ..ui import run_textual_tui

    config = get_config(console)
    notebook = get_notebook(console, config=config)
    asyncio.run(run_textual_tui(notebook, log_level=config.log_level))


@app.command()
def add(
    text: str = typer.Argument(..., help="Thought to save")
):
    """Save a thought."""
    async def _add():
        notebook = get_notebook(console, seed_welcome=False)
        try:
            await notebook.open()
            _require_writable(notebook)
            before = len(notebook.history)
            notebook.edit(text)
            notebook.save()

            if len(notebook.history) > before:
                console.print("[green]Thought saved.[/green]")
            else:
                console.print("[yellow]Nothing to save: the thought is empty.[/yellow]")
        finally:
            await _finish(notebook)

    asyncio.run(_add())


@app.command(name="list")
def list_thoughts(
    search: str = typer.Option(
        "",
        "--search",
        "-s",
        help="Only show thoughts containing this text (case-insensitive)"
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-l",
        min=1,
        help="Maximum number of thoughts to show"
    )
):
    """List thoughts, newest first."""
    async def _list():
        notebook = get_notebook(console, seed_welcome=False)
        try:
            await notebook.open()
            history = notebook.history
            matches = filter_history(history, search)

            if not matches:
                console.print("[yellow]No thoughts found[/yellow]")
                return

            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("#", style="dim", width=4)
            table.add_column("Created", style="green", no_wrap=True)
            table.add_column("Thought")

            for i, thought in enumerate(matches[:limit], 1):
                table.add_row(str(i), format_thought_time(thought.created_at), thought.thought)

            console.print(table)
            if len(matches) > limit:
                console.print(f"[dim]{len(matches) - limit} more not shown[/dim]")
        finally:
            await _finish(notebook)

    asyncio.run(_list())


@app.command()
def export():
    """Print the full history as JSON records, newest first."""
    async def _export():
        notebook = get_notebook(console, seed_welcome=False)
        try:
            await notebook.open()
            console.print_json(data=dump_history(notebook.history))
        finally:
            await _finish(notebook)

    asyncio.run(_export())


@app.command()
def purge(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    )
):
    """Delete every thought and the colour choice."""
    async def _purge():
        notebook = get_notebook(console, seed_welcome=False)
        try:
            await notebook.open()
            _require_writable(notebook)
            count = len(notebook.history)

            if not yes:
                console.print(f"[yellow]WARNING: This will delete {count} thought(s)![/yellow]")
                confirm = typer.confirm("Are you sure you want to continue?")
                if not confirm:
                    console.print("[dim]Aborted.[/dim]")
                    return

            notebook.modes.request_purge_confirm()
            notebook.confirm_purge()
            console.print(f"[green]Purged {count} thought(s).[/green]")
        finally:
            await _finish(notebook)

    asyncio.run(_purge())


@app.command()
def color(
    name: str = typer.Argument(..., help=f"One of: {', '.join(PALETTE)}")
):
    """Choose the theme colour."""
    if name not in PALETTE:
        console.print(f"[red]Error: unknown colour {name!r}. Choose one of: {', '.join(PALETTE)}[/red]")
        raise typer.Exit(code=1)

    async def _color():
        notebook = get_notebook(console, seed_welcome=False)
        try:
            await notebook.open()
            _require_writable(notebook)
            notebook.choose_color(name)
            console.print(f"[green]Colour set to {name}.[/green]")
        finally:
            await _finish(notebook)

    asyncio.run(_color())


if __name__ == "__main__":
    app()
