"""Notebook factory functions for CLI.

Centralizes creation of configuration and notebooks from environment variables.
Hides configuration details from command implementations.
"""

from typing import Any

from rich.console import Console

from ..config import PensieveConfig, load_config
from ..notebook import Notebook

# Default console for output
_console = Console()

_LEVEL_STYLES = {
    "warning": "yellow",
    "error": "red",
}


def get_config(console: Console | None = None) -> PensieveConfig:
    """Load configuration from environment variables.

    Raises:
        SystemExit: If a variable holds an invalid value
    """
    import typer

    con = console or _console
    try:
        return load_config()
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def console_logger(console: Console | None = None) -> Any:
    """Debug callback printing warnings and errors to a Rich console.

    Returns:
        Callable(level: str, component: str, message: str)
    """
    con = console or _console

    def _log(level: str, component: str, message: str) -> None:
        style = _LEVEL_STYLES.get(level)
        if style:
            con.print(f"[{style}]{component}: {message}[/{style}]")

    return _log


def get_notebook(
    console: Console | None = None,
    config: PensieveConfig | None = None,
    seed_welcome: bool | None = None,
) -> Notebook:
    """Create a notebook for the configured backend.

    Args:
        console: Optional Rich console for output
        config: Configuration to use instead of the environment
        seed_welcome: Override the welcome-thought setting

    Returns:
        Notebook (not yet opened)
    """
    con = console or _console
    cfg = config or get_config(con)
    if seed_welcome is not None:
        cfg = cfg.model_copy(update={"seed_welcome": seed_welcome})

    try:
        store = cfg.create_store()
    except ValueError as e:
        import typer

        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    notebook = Notebook(store, cfg)
    notebook.set_debug_callback(console_logger(con))
    return notebook
