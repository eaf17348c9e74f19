"""Split normalized text into overlapping word windows."""

from __future__ import annotations

from srt_summarizer.summarizer.models import Chunk


def split_words(text: str) -> list[str]:
    """Split on any Unicode whitespace."""
    return text.split()


def chunk_words(text: str, chunk_words: int, overlap_words: int) -> list[Chunk]:
    """Split text into overlapping chunks of whole words.

    Each chunk holds up to `chunk_words` words and starts
    `chunk_words - overlap_words` words after its predecessor, so the last
    `overlap_words` words of a chunk open the next one. The final chunk keeps
    whatever is left, and text shorter than one chunk yields a single chunk.

    Args:
        text: The normalized text.
        chunk_words: Target word count per chunk.
        overlap_words: Words shared with the previous chunk.

    Returns:
        Chunks in order, indexed from zero. Empty text gives an empty list.

    """
    if chunk_words < 1:
        msg = f"chunk_words must be at least 1, got {chunk_words}"
        raise ValueError(msg)
    if not 0 <= overlap_words < chunk_words:
        msg = f"overlap_words must be in [0, {chunk_words}), got {overlap_words}"
        raise ValueError(msg)

    words = split_words(text)
    step = chunk_words - overlap_words
    chunks: list[Chunk] = []
    start = 0

    while start < len(words):
        end = min(start + chunk_words, len(words))
        chunks.append(Chunk(index=len(chunks), words=tuple(words[start:end])))
        if end == len(words):
            break
        start += step

    return chunks
