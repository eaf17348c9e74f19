"""Summarize a subtitle or text file into bullet points.

Usage:
    srt-bullet-summarizer INPUT_PATH [OUTPUT_PATH]

Environment variables:
    OPENAI_BASE_URL: Completion endpoint. Default is "http://localhost:11434/v1".
    SRT_SUMMARIZER_MODEL: Model name. Default is "llama3.2".
    OPENAI_API_KEY: Only needed for hosted endpoints.

Example:
    srt-bullet-summarizer ./example.srt
    srt-bullet-summarizer ./notes.txt ./output/summary.txt

"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

import typer

import srt_summarizer.agents._cli_options as opts
from srt_summarizer.agents._command_setup import setup_command
from srt_summarizer.cli import app
from srt_summarizer.core.utils import (
    create_status,
    print_error_message,
    print_output_panel,
)
from srt_summarizer.summarizer.models import PipelineFailure, PipelineStage
from srt_summarizer.summarizer.pipeline import SummaryPipeline

if TYPE_CHECKING:
    from srt_summarizer.summarizer.models import ChunkSummary, SummarizerConfig, SummaryResult

logger = logging.getLogger(__name__)

STAGE_MESSAGES = {
    PipelineStage.READ_INPUT: "Reading input...",
    PipelineStage.NORMALIZE: "Cleaning text...",
    PipelineStage.CHUNK: "Splitting into chunks...",
    PipelineStage.MAP: "Summarizing chunks...",
    PipelineStage.REDUCE: "Combining chunk summaries...",
    PipelineStage.WRITE: "Saving summary...",
}


def _display_result(result: SummaryResult, *, quiet: bool) -> None:
    """Display the final summary."""
    if quiet:
        print(result.summary)
        return

    print_output_panel(
        result.summary,
        title="Summary",
        subtitle=(
            f"[dim]{result.word_count:,} words | {result.chunk_count} chunks | "
            f"{result.elapsed_seconds:.2f}s[/dim]"
        ),
    )
    print(f"Summary saved to {result.output_path}")


async def _async_summarize(
    input_path: Path,
    output_path: Path | None,
    summarizer_cfg: SummarizerConfig,
    *,
    quiet: bool,
) -> SummaryResult:
    """Run the pipeline, showing progress unless quiet."""
    if quiet:
        return await SummaryPipeline(summarizer_cfg).run(input_path, output_path)

    status = create_status(f"Summarizing {input_path.name} with {summarizer_cfg.model}...")
    done_chunks = 0

    def on_stage(stage: PipelineStage) -> None:
        if stage in STAGE_MESSAGES:
            status.update(STAGE_MESSAGES[stage])

    def on_chunk_done(_summary: ChunkSummary) -> None:
        nonlocal done_chunks
        done_chunks += 1
        status.update(f"Summarized {done_chunks} chunks...")

    pipeline = SummaryPipeline(summarizer_cfg, on_stage=on_stage, on_chunk_done=on_chunk_done)
    with status:
        return await pipeline.run(input_path, output_path)


@app.command("summarize")
def summarize_command(
    *,
    input_path: Path = typer.Argument(  # noqa: B008
        ...,
        help="The .srt or .txt file to summarize.",
        show_default=False,
    ),
    output_path: Path | None = typer.Argument(  # noqa: B008
        None,
        help="Where to write the summary. Defaults to <input>_summary.txt next to the input.",
        show_default=False,
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
    """Summarize a subtitle or text file into a bullet list.

    Subtitle files are stripped of indices and timestamps, the text is split
    into overlapping word chunks, each chunk is summarized by the model, and
    the chunk summaries are merged into one final bullet list.
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

    try:
        result = asyncio.run(
            _async_summarize(
                input_path,
                output_path,
                command_cfg.summarizer_cfg,
                quiet=command_cfg.general_cfg.quiet,
            ),
        )
    except PipelineFailure as e:
        if e.stage in (PipelineStage.MAP, PipelineStage.REDUCE):
            logger.info(
                "Check that your LLM server is running at %s",
                command_cfg.summarizer_cfg.openai_base_url,
            )
        print_error_message(str(e))
        raise typer.Exit(1) from e

    _display_result(result, quiet=command_cfg.general_cfg.quiet)
