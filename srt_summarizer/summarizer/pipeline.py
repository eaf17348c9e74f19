"""Orchestration of one summarization job.

The job moves strictly forward through

    READ_INPUT -> NORMALIZE -> CHUNK -> MAP -> REDUCE -> WRITE -> DONE

and any error moves it to FAILED. There is no resume: a failed job is rerun
from the start. The summary file is only written after a successful reduce.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from srt_summarizer.summarizer._retry import retry
from srt_summarizer.summarizer.chunker import chunk_words, split_words
from srt_summarizer.summarizer.completion import bind_completion
from srt_summarizer.summarizer.map_reduce import map_chunks, reduce_summaries
from srt_summarizer.summarizer.models import (
    EmptyInputError,
    PipelineFailure,
    PipelineStage,
    SummarizationError,
    SummaryResult,
)
from srt_summarizer.summarizer.normalizer import normalize, read_document
from srt_summarizer.summarizer.output import resolve_output_path, write_summary

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from srt_summarizer.summarizer.completion import CompletionFn
    from srt_summarizer.summarizer.models import Chunk, ChunkSummary, SummarizerConfig

logger = logging.getLogger(__name__)


class SummaryPipeline:
    """Runs one input document through normalize, chunk, map, reduce and write.

    Args:
        config: Summarizer configuration, read once and never mutated.
        complete: Completion function (prompt in, text out). Defaults to the
            OpenAI-compatible client bound to `config`. It is wrapped in the
            retry policy from `config` either way.
        on_stage: Called with each new stage, for progress display.
        on_chunk_done: Called with each chunk summary as it arrives.

    """

    def __init__(
        self,
        config: SummarizerConfig,
        complete: CompletionFn | None = None,
        *,
        on_stage: Callable[[PipelineStage], None] | None = None,
        on_chunk_done: Callable[[ChunkSummary], None] | None = None,
    ) -> None:
        """Bind the configuration and the retry-wrapped completion function."""
        self.config = config
        self.stage = PipelineStage.READ_INPUT
        self._on_stage = on_stage
        self._on_chunk_done = on_chunk_done
        self._complete = retry(
            max_attempts=config.max_attempts,
            base_delay=config.retry_base_delay,
            max_delay=config.retry_max_delay,
            jitter=config.retry_jitter,
        )(complete or bind_completion(config))

    def _enter(self, stage: PipelineStage) -> None:
        self.stage = stage
        logger.debug("Entering stage %s", stage.value)
        if self._on_stage is not None:
            self._on_stage(stage)

    async def run(self, input_path: Path, output_path: Path | None = None) -> SummaryResult:
        """Summarize `input_path` and write the result.

        Args:
            input_path: A `.srt` or `.txt` file.
            output_path: Explicit destination; defaults to
                `<input_stem>_summary.txt` next to the input.

        Returns:
            SummaryResult with the final summary and job statistics.

        Raises:
            PipelineFailure: Wrapping the first error, tagged with its stage.

        """
        start_time = time.monotonic()
        try:
            self._enter(PipelineStage.READ_INPUT)
            document = read_document(input_path)
            logger.info("Processing file: %s (%s)", input_path, document.kind.value)

            self._enter(PipelineStage.NORMALIZE)
            kind = document.kind
            text = normalize(document)
            word_count = len(split_words(text))

            chunks, chunk_summaries, summary = await self._summarize(text)

            self._enter(PipelineStage.WRITE)
            target = write_summary(summary, resolve_output_path(input_path, output_path))
        except SummarizationError as e:
            failed_stage = self.stage
            self.stage = PipelineStage.FAILED
            logger.debug("Job failed in stage %s", failed_stage.value, exc_info=True)
            raise PipelineFailure(failed_stage, e) from e

        self._enter(PipelineStage.DONE)
        elapsed = time.monotonic() - start_time
        logger.info("Total processing time: %.2fs", elapsed)
        return SummaryResult(
            input_path=input_path,
            output_path=target,
            kind=kind,
            word_count=word_count,
            chunk_count=len(chunks),
            chunk_summaries=[s.text for s in chunk_summaries],
            summary=summary,
            elapsed_seconds=elapsed,
        )

    async def summarize_text(self, text: str) -> tuple[list[Chunk], list[ChunkSummary], str]:
        """Chunk, map and reduce already normalized text.

        Raises:
            PipelineFailure: Wrapping the first error, tagged with its stage.

        """
        try:
            return await self._summarize(text)
        except SummarizationError as e:
            failed_stage = self.stage
            self.stage = PipelineStage.FAILED
            raise PipelineFailure(failed_stage, e) from e

    async def _summarize(self, text: str) -> tuple[list[Chunk], list[ChunkSummary], str]:
        self._enter(PipelineStage.CHUNK)
        chunks = chunk_words(text, self.config.chunk_words, self.config.overlap_words)
        if not chunks:
            msg = "No words left to summarize"
            raise EmptyInputError(msg)
        logger.info("Split into %d chunks", len(chunks))

        self._enter(PipelineStage.MAP)
        map_start = time.monotonic()
        chunk_summaries = await map_chunks(
            chunks,
            self._complete,
            max_concurrent=self.config.max_concurrent_chunks,
            on_chunk_done=self._on_chunk_done,
        )
        logger.info("Map step completed in %.2fs", time.monotonic() - map_start)

        # Always reduce, even for a single chunk, so every summary gets the
        # same final formatting pass.
        self._enter(PipelineStage.REDUCE)
        summary = await reduce_summaries(chunk_summaries, self._complete)
        return chunks, chunk_summaries, summary


async def summarize_file(
    input_path: Path,
    config: SummarizerConfig,
    output_path: Path | None = None,
    complete: CompletionFn | None = None,
) -> SummaryResult:
    """One-shot convenience wrapper around SummaryPipeline.

    Example:
        result = await summarize_file(Path("talk.srt"), SummarizerConfig())
        print(result.output_path)

    """
    return await SummaryPipeline(config, complete).run(input_path, output_path)
