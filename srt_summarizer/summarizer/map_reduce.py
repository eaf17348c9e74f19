"""Map and reduce stages of the bullet-point summarizer.

1. Map: every chunk is summarized on its own, concurrently up to a limit
2. Reduce: the chunk summaries, in chunk order, are merged by one more call

A chunk that keeps failing aborts the job: a missing chunk summary would leave
a hole in the reduce input.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from srt_summarizer.summarizer._prompts import format_map_prompt, format_reduce_prompt
from srt_summarizer.summarizer.models import (
    ChunkSummary,
    CompletionError,
    MapStageError,
    ReduceStageError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from srt_summarizer.summarizer.completion import CompletionFn
    from srt_summarizer.summarizer.models import Chunk

logger = logging.getLogger(__name__)


async def summarize_chunk(chunk: Chunk, total_chunks: int, complete: CompletionFn) -> ChunkSummary:
    """Summarize a single chunk.

    Raises:
        MapStageError: If the completion call fails.

    """
    prompt = format_map_prompt(chunk.text, chunk.index, total_chunks)
    try:
        text = await complete(prompt)
    except CompletionError as e:
        raise MapStageError(chunk.index, e) from e
    logger.debug("Chunk %d/%d summarized", chunk.index + 1, total_chunks)
    return ChunkSummary(index=chunk.index, text=text.strip())


async def map_chunks(
    chunks: Sequence[Chunk],
    complete: CompletionFn,
    *,
    max_concurrent: int = 1,
    on_chunk_done: Callable[[ChunkSummary], None] | None = None,
) -> list[ChunkSummary]:
    """Summarize each chunk with at most `max_concurrent` calls in flight.

    Returns:
        One summary per chunk, sorted by chunk index.

    Raises:
        MapStageError: For the first chunk that fails; the remaining calls
            are cancelled.

    """
    semaphore = asyncio.Semaphore(max_concurrent)
    total = len(chunks)

    async def run_chunk(chunk: Chunk) -> ChunkSummary:
        async with semaphore:
            summary = await summarize_chunk(chunk, total, complete)
        if on_chunk_done is not None:
            on_chunk_done(summary)
        return summary

    logger.info("Map phase: processing %d chunks (max %d concurrent)", total, max_concurrent)
    tasks = [asyncio.create_task(run_chunk(chunk)) for chunk in chunks]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return sorted(results, key=lambda s: s.index)


async def reduce_summaries(summaries: Sequence[ChunkSummary], complete: CompletionFn) -> str:
    """Merge chunk summaries into the final bullet list with one call.

    Raises:
        ReduceStageError: If the completion call fails.

    """
    ordered = [s.text for s in sorted(summaries, key=lambda s: s.index)]
    logger.info("Reduce phase: merging %d chunk summaries", len(ordered))
    try:
        text = await complete(format_reduce_prompt(ordered))
    except CompletionError as e:
        raise ReduceStageError(e) from e
    return text.strip()
