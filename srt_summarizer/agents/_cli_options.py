"""Shared CLI options for the summarizer commands."""

from __future__ import annotations

import typer

from srt_summarizer import constants
from srt_summarizer.cli import config_callback

# --- LLM Options ---
OPENAI_BASE_URL = typer.Option(
    constants.DEFAULT_OPENAI_BASE_URL,
    "--openai-base-url",
    envvar="OPENAI_BASE_URL",
    help="Base URL of the OpenAI-compatible completion API (Ollama's /v1 by default).",
    rich_help_panel="LLM Configuration",
)
MODEL = typer.Option(
    constants.DEFAULT_MODEL,
    "--model",
    "-m",
    envvar="SRT_SUMMARIZER_MODEL",
    help="Name of the model to use.",
    rich_help_panel="LLM Configuration",
)
OPENAI_API_KEY = typer.Option(
    None,
    "--openai-api-key",
    envvar="OPENAI_API_KEY",
    help="API key for the completion endpoint (not needed for local servers).",
    rich_help_panel="LLM Configuration",
)
TIMEOUT = typer.Option(
    constants.DEFAULT_TIMEOUT,
    "--timeout",
    help="Timeout in seconds for a single completion call.",
    rich_help_panel="LLM Configuration",
)

# --- Chunking Options ---
CHUNK_WORDS = typer.Option(
    constants.DEFAULT_CHUNK_WORDS,
    "--chunk-words",
    help="Number of words per chunk sent to the model.",
    rich_help_panel="Chunking Options",
)
OVERLAP_WORDS = typer.Option(
    constants.DEFAULT_OVERLAP_WORDS,
    "--overlap-words",
    help="Words shared between consecutive chunks (must be less than --chunk-words).",
    rich_help_panel="Chunking Options",
)
MAX_CONCURRENT = typer.Option(
    constants.DEFAULT_MAX_CONCURRENT_CHUNKS,
    "--max-concurrent",
    help="Maximum number of chunks summarized in parallel.",
    rich_help_panel="Chunking Options",
)

# --- Retry Options ---
MAX_ATTEMPTS = typer.Option(
    constants.DEFAULT_MAX_ATTEMPTS,
    "--max-attempts",
    help="Attempts per completion call before the job fails.",
    rich_help_panel="Retry Options",
)
RETRY_BASE_DELAY = typer.Option(
    constants.DEFAULT_RETRY_BASE_DELAY,
    "--retry-delay",
    help="Initial backoff in seconds, doubled after each failed attempt.",
    rich_help_panel="Retry Options",
)

# --- General Options ---
LOG_LEVEL = typer.Option(
    "WARNING",
    "--log-level",
    help="Set the log level (e.g., DEBUG, INFO, WARNING).",
    rich_help_panel="General Options",
)
LOG_FILE = typer.Option(
    None,
    "--log-file",
    help="Path to a file to write logs to.",
    rich_help_panel="General Options",
)
QUIET = typer.Option(
    False,  # noqa: FBT003
    "--quiet",
    "-q",
    help="Suppress all output except for the final summary.",
    rich_help_panel="General Options",
)
CONFIG_FILE = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a TOML config file.",
    is_eager=True,
    callback=config_callback,
    rich_help_panel="General Options",
)
