"""Reading input files and stripping subtitle artifacts."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from srt_summarizer import constants
from srt_summarizer.summarizer.models import (
    DecodeError,
    DocumentKind,
    EmptyInputError,
    RawDocument,
    ReadError,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Subtitle index lines: "12"
SEQUENCE_RE = re.compile(r"^\d+$")
# Cue timing lines: "00:01:02,500 --> 00:01:04,000" (some tools write '.' for ',')
TIMESTAMP_RE = re.compile(r"\d{1,2}:\d{2}:\d{2}[,.]\d{3}\s*-->\s*\d{1,2}:\d{2}:\d{2}[,.]\d{3}")
# Inline styling such as <i>, </font> and ASS overrides like {\an8}
TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>|\{\\[^}]*\}")
WHITESPACE_RE = re.compile(r"[^\S\n]+")


def detect_kind(path: Path) -> DocumentKind:
    """Decide the document kind from the file extension."""
    suffix = path.suffix.lower()
    if suffix == constants.SUBTITLE_SUFFIX:
        return DocumentKind.SUBTITLE
    if suffix != ".txt":
        logger.warning("Unknown extension %r for %s, treating it as plain text", suffix, path)
    return DocumentKind.PLAIN_TEXT


def read_document(path: Path) -> RawDocument:
    """Read and decode an input file.

    Raises:
        ReadError: If the file does not exist or cannot be read.
        DecodeError: If the contents are not valid UTF-8.

    """
    if not path.is_file():
        msg = f"File not found: {path}"
        raise ReadError(msg)
    try:
        data = path.read_bytes()
    except OSError as e:
        msg = f"Could not read {path}: {e}"
        raise ReadError(msg) from e

    try:
        # utf-8-sig drops the BOM that many subtitle editors prepend
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        msg = f"{path} is not valid UTF-8 text: {e}"
        raise DecodeError(msg) from e

    return RawDocument(path=path, text=text, kind=detect_kind(path))


def normalize_line_endings(text: str) -> str:
    """Convert Windows and old Mac line endings to '\\n'."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_text(text: str) -> str:
    """Plain text passes through unchanged apart from line endings."""
    return normalize_line_endings(text)


def _is_caption_noise(line: str) -> bool:
    return bool(SEQUENCE_RE.match(line) or TIMESTAMP_RE.search(line))


def normalize_srt(text: str) -> str:
    """Strip indices, cue timings and styling from subtitle text.

    Caption lines of one cue are joined with spaces and cues are separated by
    single newlines, so the result never contains blank-line runs.
    """
    blocks: list[str] = []
    current: list[str] = []

    for raw_line in normalize_line_endings(text).split("\n"):
        line = raw_line.strip()
        if not line:
            if current:
                blocks.append(" ".join(current))
                current = []
            continue
        if _is_caption_noise(line):
            continue
        line = WHITESPACE_RE.sub(" ", TAG_RE.sub("", line)).strip()
        if line:
            current.append(line)

    if current:
        blocks.append(" ".join(current))

    return "\n".join(blocks)


def normalize(document: RawDocument) -> str:
    """Turn a raw document into cleaned natural-language text.

    Raises:
        EmptyInputError: If nothing but whitespace is left.

    """
    if document.kind is DocumentKind.SUBTITLE:
        text = normalize_srt(document.text)
    else:
        text = normalize_text(document.text)

    if not text.split():
        msg = f"No words left to summarize in {document.path}"
        raise EmptyInputError(msg)

    logger.debug("Normalized %s (%s): %d characters", document.path, document.kind.value, len(text))
    return text
