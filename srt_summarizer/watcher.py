"""Summarize subtitle files as they appear in a directory.

Every new file gets its own SummaryPipeline run; the only state shared between
runs is the ordered work queue. Successful inputs are archived together with
their summaries, failed ones stay where they are.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from typing import TYPE_CHECKING

from srt_summarizer import constants
from srt_summarizer.core.watch import is_candidate, watch_directory
from srt_summarizer.summarizer.models import PipelineFailure
from srt_summarizer.summarizer.pipeline import SummaryPipeline

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from watchfiles import Change

    from srt_summarizer.summarizer.completion import CompletionFn
    from srt_summarizer.summarizer.models import SummarizerConfig, SummaryResult

logger = logging.getLogger(__name__)


class SubtitleWatcher:
    """Queue matching files from `watch_dir` and summarize them one at a time.

    Args:
        watch_dir: Directory to scan and watch (not recursive).
        archive_dir: Where inputs and summaries are moved after success.
        config: Summarizer configuration shared by every run.
        suffixes: File suffixes to pick up.
        complete: Optional completion function passed to each pipeline.
        on_result: Called with each successful SummaryResult.
        on_failure: Called with the input path and the failure.

    """

    def __init__(
        self,
        watch_dir: Path,
        archive_dir: Path,
        config: SummarizerConfig,
        *,
        suffixes: Iterable[str] = (constants.SUBTITLE_SUFFIX,),
        complete: CompletionFn | None = None,
        on_result: Callable[[SummaryResult], None] | None = None,
        on_failure: Callable[[Path, PipelineFailure], None] | None = None,
    ) -> None:
        """Set up the queue; nothing is read until `run` or `scan_existing`."""
        self.watch_dir = watch_dir.expanduser().resolve()
        self.archive_dir = archive_dir.expanduser().resolve()
        self.config = config
        self.suffixes = tuple(suffixes)
        self.queue: asyncio.Queue[Path] = asyncio.Queue()
        self._pending: set[Path] = set()
        self._complete = complete
        self._on_result = on_result
        self._on_failure = on_failure

    def enqueue(self, path: Path) -> bool:
        """Queue a file unless it is already waiting. Returns True if queued."""
        # Our own output must never be fed back in
        if path in self._pending or path.name.endswith(constants.SUMMARY_SUFFIX):
            return False
        self._pending.add(path)
        self.queue.put_nowait(path)
        logger.info("Queued %s", path.name)
        return True

    def scan_existing(self) -> int:
        """Queue matching files already in the directory, sorted by name."""
        count = 0
        for path in sorted(self.watch_dir.iterdir()):
            if path.is_file() and is_candidate(path, self.watch_dir, self.suffixes):
                count += self.enqueue(path)
        return count

    def _on_change(self, _change: Change, path: Path) -> None:
        if path.exists():
            self.enqueue(path)

    def archive(self, result: SummaryResult) -> list[Path]:
        """Move the input and its summary into the archive directory."""
        self.archive_dir.mkdir(parents=True, exist_ok=True)
        moved = []
        for path in (result.input_path, result.output_path):
            if not path.exists():
                logger.warning("%s not found, nothing to archive", path)
                continue
            destination = self.archive_dir / path.name
            shutil.move(path, destination)
            moved.append(destination)
        return moved

    async def process(self, path: Path) -> SummaryResult | None:
        """Summarize and archive one file. Returns None if either step failed."""
        pipeline = SummaryPipeline(self.config, self._complete)
        try:
            result = await pipeline.run(path)
        except PipelineFailure as e:
            logger.error("Failed to process %s: %s", path.name, e)  # noqa: TRY400
            if self._on_failure is not None:
                self._on_failure(path, e)
            return None
        finally:
            self._pending.discard(path)

        try:
            self.archive(result)
        except OSError:
            logger.exception("Summarized %s but could not archive it to %s", path.name, self.archive_dir)
            return None
        logger.info("Summarized and archived %s", path.name)
        if self._on_result is not None:
            self._on_result(result)
        return result

    async def drain(self) -> None:
        """Process queued files until the queue is empty."""
        while not self.queue.empty():
            await self._process_next()

    async def _process_next(self) -> None:
        path = await self.queue.get()
        try:
            if path.exists():
                await self.process(path)
            else:
                self._pending.discard(path)
                logger.warning("%s disappeared before processing", path.name)
        finally:
            self.queue.task_done()

    async def _worker(self) -> None:
        while True:
            try:
                await self._process_next()
            except Exception:  # noqa: BLE001
                logger.exception("Unexpected error while processing a queued file")

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Process existing files, then watch for new ones until stopped."""
        logger.info("Watching %s for %s files", self.watch_dir, ", ".join(self.suffixes))
        self.scan_existing()
        worker = asyncio.create_task(self._worker())
        try:
            await watch_directory(
                self.watch_dir,
                self._on_change,
                suffixes=self.suffixes,
                stop_event=stop_event,
            )
        finally:
            worker.cancel()
            await asyncio.gather(worker, return_exceptions=True)
