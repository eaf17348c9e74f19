"""Data models and errors for map-reduce summarization."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path  # noqa: TC003

from pydantic import BaseModel, Field

from srt_summarizer import constants

# --- Errors ---


class SummarizationError(Exception):
    """Base class for every failure of a summarization job."""


class ReadError(SummarizationError):
    """Raised when the input file is missing or cannot be read."""


class DecodeError(SummarizationError):
    """Raised when the input file is not valid UTF-8 text."""


class EmptyInputError(SummarizationError):
    """Raised when normalization leaves no words to summarize."""


class CompletionError(SummarizationError):
    """Raised when a single call to the completion endpoint fails."""

    def __init__(self, reason: str) -> None:
        """Store the failure reason."""
        super().__init__(reason)
        self.reason = reason


class MapStageError(SummarizationError):
    """Raised when a chunk could not be summarized after all retries."""

    def __init__(self, chunk_index: int, cause: Exception) -> None:
        """Store the failing chunk index and the underlying error."""
        super().__init__(f"chunk {chunk_index} failed: {cause}")
        self.chunk_index = chunk_index
        self.cause = cause


class ReduceStageError(SummarizationError):
    """Raised when the chunk summaries could not be merged after all retries."""

    def __init__(self, cause: Exception) -> None:
        """Store the underlying error."""
        super().__init__(f"merging chunk summaries failed: {cause}")
        self.cause = cause


class WriteError(SummarizationError):
    """Raised when the final summary cannot be written."""


class PipelineStage(str, Enum):
    """States of a single summarization job."""

    READ_INPUT = "read_input"
    NORMALIZE = "normalize"
    CHUNK = "chunk"
    MAP = "map"
    REDUCE = "reduce"
    WRITE = "write"
    DONE = "done"
    FAILED = "failed"


class PipelineFailure(SummarizationError):
    """Terminal failure of a job, tagged with the stage it happened in."""

    def __init__(self, stage: PipelineStage, cause: SummarizationError) -> None:
        """Store the failing stage and its cause."""
        super().__init__(
            f"{stage.value} stage failed: {type(cause).__name__}: {cause}".replace("\n", " "),
        )
        self.stage = stage
        self.cause = cause


# --- Documents and chunks ---


class DocumentKind(str, Enum):
    """Kind of input document, decided by file extension."""

    SUBTITLE = "subtitle"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class RawDocument:
    """Unmodified file contents plus the detected kind."""

    path: Path
    text: str
    kind: DocumentKind


@dataclass(frozen=True)
class Chunk:
    """A word-aligned window of the normalized text."""

    index: int
    words: tuple[str, ...]

    @property
    def text(self) -> str:
        """The chunk's words joined by single spaces."""
        return " ".join(self.words)


@dataclass(frozen=True)
class ChunkSummary:
    """Map stage output for one chunk."""

    index: int
    text: str


# --- Configuration ---


@dataclass
class SummarizerConfig:
    """Configuration for summarization jobs.

    Example:
        config = SummarizerConfig(
            openai_base_url="http://localhost:11434/v1",
            model="llama3.2",
            chunk_words=2000,
            overlap_words=200,
        )
        result = await SummaryPipeline(config).run(Path("talk.srt"))

    """

    openai_base_url: str = constants.DEFAULT_OPENAI_BASE_URL
    model: str = constants.DEFAULT_MODEL
    api_key: str | None = None
    chunk_words: int = constants.DEFAULT_CHUNK_WORDS
    overlap_words: int = constants.DEFAULT_OVERLAP_WORDS
    max_concurrent_chunks: int = constants.DEFAULT_MAX_CONCURRENT_CHUNKS
    timeout: float = constants.DEFAULT_TIMEOUT
    temperature: float = constants.DEFAULT_TEMPERATURE
    max_attempts: int = constants.DEFAULT_MAX_ATTEMPTS
    retry_base_delay: float = constants.DEFAULT_RETRY_BASE_DELAY
    retry_max_delay: float = constants.DEFAULT_RETRY_MAX_DELAY
    retry_jitter: float = constants.DEFAULT_RETRY_JITTER

    def __post_init__(self) -> None:
        """Normalize the base URL and validate sizes."""
        self.openai_base_url = self.openai_base_url.rstrip("/")
        if not self.api_key:
            self.api_key = constants.DEFAULT_API_KEY
        if self.chunk_words < 1:
            msg = f"chunk_words must be at least 1, got {self.chunk_words}"
            raise ValueError(msg)
        if not 0 <= self.overlap_words < self.chunk_words:
            msg = (
                f"overlap_words must be in [0, chunk_words), "
                f"got {self.overlap_words} with chunk_words={self.chunk_words}"
            )
            raise ValueError(msg)
        if self.max_concurrent_chunks < 1:
            msg = f"max_concurrent_chunks must be at least 1, got {self.max_concurrent_chunks}"
            raise ValueError(msg)
        if self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ValueError(msg)


# --- Results ---


class SummaryResult(BaseModel):
    """Result of one summarization job."""

    input_path: Path = Field(..., description="The summarized input file")
    output_path: Path = Field(..., description="Where the summary was written")
    kind: DocumentKind = Field(..., description="Detected kind of the input")
    word_count: int = Field(..., ge=0, description="Words in the normalized text")
    chunk_count: int = Field(..., ge=1, description="Number of chunks sent to the map stage")
    chunk_summaries: list[str] = Field(
        default_factory=list,
        description="Map stage outputs in ascending chunk order",
    )
    summary: str = Field(..., description="The final bullet-point summary")
    elapsed_seconds: float = Field(default=0.0, ge=0.0, description="Wall-clock duration")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when summary was created",
    )
