"""Watch a directory and summarize every new subtitle file.

Usage:
    srt-bullet-watch [DIRECTORY] [--archive-dir DIR]

Each file is summarized to `<name>_summary.txt`; on success both files are
moved to the archive directory (`DIRECTORY/srt` by default). Failed files are
left in place and reported.
"""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

import typer

import srt_summarizer.agents._cli_options as opts
from srt_summarizer import constants
from srt_summarizer.agents._command_setup import setup_command
from srt_summarizer.cli import watch_app
from srt_summarizer.core.utils import print_error_message, print_with_style
from srt_summarizer.watcher import SubtitleWatcher

if TYPE_CHECKING:
    from srt_summarizer.summarizer.models import PipelineFailure, SummaryResult


def _report_result(result: SummaryResult) -> None:
    print_with_style(f"✅ Success: {result.output_path.name} ({result.chunk_count} chunks)")


def _report_failure(path: Path, error: PipelineFailure) -> None:
    print_error_message(f"Failed to process {path.name}: {error}")


@watch_app.command("watch")
def watch_command(
    *,
    directory: Path = typer.Argument(  # noqa: B008
        Path.home() / "Downloads",  # noqa: B008
        help="Directory to watch for new files.",
        file_okay=False,
    ),
    archive_dir: Path | None = typer.Option(  # noqa: B008
        None,
        "--archive-dir",
        "-a",
        help="Where processed files and summaries are moved. Defaults to DIRECTORY/srt.",
        file_okay=False,
    ),
    suffix: list[str] = typer.Option(  # noqa: B008
        [constants.SUBTITLE_SUFFIX],
        "--suffix",
        "-s",
        help="File suffix to pick up (repeat for several).",
    ),
    # --- LLM Configuration ---
    openai_base_url: str = opts.OPENAI_BASE_URL,
    model: str = opts.MODEL,
    openai_api_key: str | None = opts.OPENAI_API_KEY,
    timeout: float = opts.TIMEOUT,
    # --- Chunking Options ---
    chunk_words: int = opts.CHUNK_WORDS,
    overlap_words: int = opts.OVERLAP_WORDS,
    max_concurrent: int = opts.MAX_CONCURRENT,
    # --- Retry Options ---
    max_attempts: int = opts.MAX_ATTEMPTS,
    retry_delay: float = opts.RETRY_BASE_DELAY,
    # --- General Options ---
    log_level: str = opts.LOG_LEVEL,
    log_file: str | None = opts.LOG_FILE,
    quiet: bool = opts.QUIET,
    config_file: str | None = opts.CONFIG_FILE,  # noqa: ARG001
) -> None:
    """Watch DIRECTORY and summarize subtitle files as they arrive.

    Files already present are processed first, then new files are picked up
    one at a time in arrival order. Stop with Ctrl+C.
    """
    command_cfg = setup_command(
        openai_base_url=openai_base_url,
        model=model,
        openai_api_key=openai_api_key,
        timeout=timeout,
        chunk_words=chunk_words,
        overlap_words=overlap_words,
        max_concurrent_chunks=max_concurrent,
        max_attempts=max_attempts,
        retry_base_delay=retry_delay,
        log_level=log_level,
        log_file=log_file,
        quiet=quiet,
    )
    if command_cfg is None:
        raise typer.Exit(1)

    directory = directory.expanduser()
    if not directory.is_dir():
        print_error_message(f"Directory not found: {directory}")
        raise typer.Exit(1)

    suffixes = tuple(s if s.startswith(".") else f".{s}" for s in suffix)
    watcher = SubtitleWatcher(
        directory,
        archive_dir or directory / "srt",
        command_cfg.summarizer_cfg,
        suffixes=suffixes,
        on_result=None if quiet else _report_result,
        on_failure=_report_failure,
    )

    if not quiet:
        print_with_style(f"🟢 Watching {watcher.watch_dir} for {', '.join(suffixes)} files...")
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(watcher.run())
    if not quiet:
        print_with_style("🛑 Monitor stopped.", style="bold yellow")
