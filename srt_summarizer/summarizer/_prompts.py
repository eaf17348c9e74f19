"""Prompt templates for map-reduce bullet summaries.

Both prompts ask for '-' bullets only, which keeps the reduce input and the
final output in the same shape.
"""

SYSTEM_PROMPT = "You are a concise summarizer. Output only the bullet points, no preamble."

# MAP - one call per chunk
MAP_PROMPT = """Write a detailed summary of this text section in bullet points.
Use '-' for bullet points and answer only the bullet points.

Section {chunk_number} of {total_chunks}:
{text}

SUMMARY:""".strip()

# REDUCE - one call merging every chunk summary
REDUCE_PROMPT = """Combine these summaries into a final summary in bullet points.
Merge duplicate points, keep the order in which topics first appear, and stay concise.
Use '-' for bullet points and answer only the bullet points.

Summaries:
{summaries}

FINAL SUMMARY:""".strip()


def format_map_prompt(text: str, chunk_index: int, total_chunks: int) -> str:
    """Fill the map template for one chunk (chunk_index is zero-based)."""
    return MAP_PROMPT.format(
        chunk_number=chunk_index + 1,
        total_chunks=total_chunks,
        text=text,
    )


def format_summaries_for_reduce(summaries: list[str]) -> str:
    """Format ordered chunk summaries for the reduce prompt."""
    formatted = []
    for i, summary in enumerate(summaries, 1):
        formatted.append(f"[Section {i}]\n{summary}")
    return "\n\n".join(formatted)


def format_reduce_prompt(summaries: list[str]) -> str:
    """Fill the reduce template."""
    return REDUCE_PROMPT.format(summaries=format_summaries_for_reduce(summaries))
