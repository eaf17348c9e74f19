"""Shared CLI functionality for the srt-bullet-summarizer tools."""

from __future__ import annotations

import dotenv
import typer

from .config import command_defaults, load_config

app = typer.Typer(
    name="srt-bullet-summarizer",
    help="Summarize .srt subtitles or .txt files into bullet points with a local LLM.",
    add_completion=False,
)

watch_app = typer.Typer(
    name="srt-bullet-watch",
    help="Watch a directory and summarize new subtitle files as they arrive.",
    add_completion=False,
)


def set_config_defaults(ctx: typer.Context, config_file: str | None) -> None:
    """Set the default values for the CLI based on the config file."""
    config = load_config(config_file)
    ctx.default_map = command_defaults(config, ctx.command.name)


def config_callback(ctx: typer.Context, value: str | None) -> str | None:
    """Load `.env` and the config file before the other options are resolved."""
    dotenv.load_dotenv()
    set_config_defaults(ctx, value)
    return value


# Import commands from other modules to register them
from .agents import summarize, watch  # noqa: E402, F401
