"""Console output and logging helpers shared by the commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

if TYPE_CHECKING:
    from rich.status import Status

console = Console()
err_console = Console(stderr=True)

# Loggers that report every HTTP request at INFO level
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(log_level: str, log_file: str | None, *, quiet: bool) -> None:
    """Configure the root logger.

    Logs go to stderr through Rich unless `quiet` is set, and additionally to
    `log_file` in plain text when given.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = []

    if not quiet:
        handler = RichHandler(
            console=err_console,
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        )
        handlers.append(file_handler)

    if not handlers:
        # Keeps logging.lastResort from writing warnings to stderr
        handlers.append(logging.NullHandler())

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def print_error_message(message: str) -> None:
    """Print a one-line error to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)


def print_output_panel(text: str, title: str = "Output", subtitle: str | None = None) -> None:
    """Print text in a green panel."""
    console.print(Panel(escape(text), title=title, subtitle=subtitle, border_style="green"))


def print_with_style(message: str, style: str = "bold green") -> None:
    """Print a single styled line."""
    console.print(f"[{style}]{escape(message)}[/{style}]")


def create_status(message: str, style: str = "bold yellow") -> Status:
    """Create a spinner for long-running work."""
    return console.status(f"[{style}]{escape(message)}[/{style}]")
