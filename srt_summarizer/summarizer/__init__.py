"""Map-reduce bullet-point summarization of subtitle and text files.

1. Normalize: strip subtitle indices, cue timings and styling
2. Chunk: split into overlapping word windows
3. Map: summarize each chunk into bullets, concurrently up to a limit
4. Reduce: merge the ordered chunk summaries into one bullet list

Example:
    from srt_summarizer.summarizer import SummarizerConfig, summarize_file

    config = SummarizerConfig(
        openai_base_url="http://localhost:11434/v1",
        model="llama3.2",
    )
    result = await summarize_file(Path("talk.srt"), config)
    print(result.summary)

"""

from srt_summarizer.summarizer.models import (
    CompletionError,
    DecodeError,
    EmptyInputError,
    MapStageError,
    PipelineFailure,
    PipelineStage,
    ReadError,
    ReduceStageError,
    SummarizationError,
    SummarizerConfig,
    SummaryResult,
    WriteError,
)
from srt_summarizer.summarizer.pipeline import SummaryPipeline, summarize_file

__all__ = [
    "CompletionError",
    "DecodeError",
    "EmptyInputError",
    "MapStageError",
    "PipelineFailure",
    "PipelineStage",
    "ReadError",
    "ReduceStageError",
    "SummarizationError",
    "SummarizerConfig",
    "SummaryPipeline",
    "SummaryResult",
    "WriteError",
    "summarize_file",
]
