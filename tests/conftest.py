"""Shared test fixtures and configuration."""

from __future__ import annotations

import contextlib
import io
import logging
from typing import TYPE_CHECKING

import pytest
from rich.console import Console
from rich.logging import RichHandler

from srt_summarizer.summarizer.models import SummarizerConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

# Three cues, 12 + 14 + 14 = 40 words
SAMPLE_SRT = """\
1
00:00:01,000 --> 00:00:04,000
Welcome everyone to the first session
about planning a small vegetable garden.

2
00:00:04,500 --> 00:00:08,000
We will cover soil preparation, watering schedules
and choosing seeds that suit your climate.

3
00:00:08,500 --> 00:00:12,250
Finally we discuss pests, companion planting
and how to harvest at the right time.
"""


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Set default timeout for all tests."""
    for item in items:
        with contextlib.suppress(AttributeError):
            item.add_marker(pytest.mark.timeout(5))


class FakeCompletion:
    """Completion test double that records every prompt it receives.

    `responder` maps a prompt to either the text to return or an exception
    to raise. It may be a coroutine function to control completion order.
    """

    def __init__(self, responder: Callable[[str], object]) -> None:
        self.responder = responder
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        result = self.responder(prompt)
        if hasattr(result, "__await__"):
            result = await result
        if isinstance(result, Exception):
            raise result
        return str(result)

    @property
    def map_prompts(self) -> list[str]:
        return [p for p in self.prompts if "FINAL SUMMARY:" not in p]

    @property
    def reduce_prompts(self) -> list[str]:
        return [p for p in self.prompts if "FINAL SUMMARY:" in p]


def scenario_responder(prompt: str) -> str:
    """Answers for the sample subtitle split into two chunks."""
    if "FINAL SUMMARY:" in prompt:
        return "- A\n- B"
    if "Welcome" in prompt:
        return "- point A"
    return "- point B"


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo logging setup done by CLI invocations."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, (RichHandler, logging.FileHandler)) or type(handler) is logging.NullHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def mock_console() -> Console:
    """Provide a console that writes to a StringIO for testing."""
    return Console(file=io.StringIO(), width=80, force_terminal=True)


@pytest.fixture
def config() -> SummarizerConfig:
    """Small chunks and no backoff delay."""
    return SummarizerConfig(
        openai_base_url="http://localhost:11434/v1",
        model="llama3.2",
        chunk_words=30,
        overlap_words=5,
        max_concurrent_chunks=4,
        max_attempts=3,
        retry_base_delay=0.0,
        retry_jitter=0.0,
    )


@pytest.fixture
def srt_text() -> str:
    """Contents of the sample subtitle file."""
    return SAMPLE_SRT


@pytest.fixture
def sample_srt(tmp_path: Path) -> Path:
    """The sample subtitle file on disk."""
    path = tmp_path / "sample.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def make_completion() -> type[FakeCompletion]:
    """The FakeCompletion class, for tests that need their own responder."""
    return FakeCompletion


@pytest.fixture
def fake_completion() -> FakeCompletion:
    """Completion double for the two-chunk sample scenario."""
    return FakeCompletion(scenario_responder)
