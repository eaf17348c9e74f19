"""Common command setup for the summarizer commands."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import ValidationError

from srt_summarizer import config
from srt_summarizer.core.utils import print_error_message, setup_logging
from srt_summarizer.summarizer.models import SummarizerConfig


class CommandConfig(NamedTuple):
    """Configuration for a command."""

    general_cfg: config.General
    summarizer_cfg: SummarizerConfig


def build_summarizer_config(
    llm_cfg: config.LLM,
    chunking_cfg: config.Chunking,
    retry_cfg: config.Retry,
) -> SummarizerConfig:
    """Turn the per-panel CLI models into one SummarizerConfig."""
    return SummarizerConfig(
        openai_base_url=llm_cfg.openai_base_url,
        model=llm_cfg.model,
        api_key=llm_cfg.openai_api_key,
        timeout=llm_cfg.timeout,
        chunk_words=chunking_cfg.chunk_words,
        overlap_words=chunking_cfg.overlap_words,
        max_concurrent_chunks=chunking_cfg.max_concurrent_chunks,
        max_attempts=retry_cfg.max_attempts,
        retry_base_delay=retry_cfg.retry_base_delay,
    )


def setup_command(
    *,
    # LLM options
    openai_base_url: str,
    model: str,
    openai_api_key: str | None,
    timeout: float,
    # Chunking options
    chunk_words: int,
    overlap_words: int,
    max_concurrent_chunks: int,
    # Retry options
    max_attempts: int,
    retry_base_delay: float,
    # General options
    log_level: str,
    log_file: str | None,
    quiet: bool,
) -> CommandConfig | None:
    """Configure logging and validate all options.

    Returns:
        CommandConfig, or None after printing an error if an option is invalid.

    """
    try:
        general_cfg = config.General(log_level=log_level, log_file=log_file, quiet=quiet)
        setup_logging(general_cfg.log_level, general_cfg.log_file, quiet=general_cfg.quiet)
        summarizer_cfg = build_summarizer_config(
            config.LLM(
                openai_base_url=openai_base_url,
                model=model,
                openai_api_key=openai_api_key,
                timeout=timeout,
            ),
            config.Chunking(
                chunk_words=chunk_words,
                overlap_words=overlap_words,
                max_concurrent_chunks=max_concurrent_chunks,
            ),
            config.Retry(max_attempts=max_attempts, retry_base_delay=retry_base_delay),
        )
    except (ValidationError, ValueError) as e:
        print_error_message(f"Invalid configuration: {e}".replace("\n", " "))
        return None

    return CommandConfig(general_cfg=general_cfg, summarizer_cfg=summarizer_cfg)
