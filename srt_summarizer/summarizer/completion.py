"""Client for the OpenAI-compatible completion endpoint."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from srt_summarizer.summarizer._prompts import SYSTEM_PROMPT
from srt_summarizer.summarizer.models import CompletionError

if TYPE_CHECKING:
    from pydantic_ai import Agent

    from srt_summarizer.summarizer.models import SummarizerConfig

logger = logging.getLogger(__name__)

CompletionFn = Callable[[str], Awaitable[str]]
"""Prompt in, generated text out. Raises CompletionError on failure."""


def _build_agent(config: SummarizerConfig, system_prompt: str = SYSTEM_PROMPT) -> Agent[None, str]:
    """Create a pydantic-ai agent for the configured endpoint and model."""
    from pydantic_ai import Agent  # noqa: PLC0415
    from pydantic_ai.models.openai import OpenAIChatModel  # noqa: PLC0415
    from pydantic_ai.providers.openai import OpenAIProvider  # noqa: PLC0415
    from pydantic_ai.settings import ModelSettings  # noqa: PLC0415

    provider = OpenAIProvider(api_key=config.api_key, base_url=config.openai_base_url)
    model = OpenAIChatModel(
        model_name=config.model,
        provider=provider,
        settings=ModelSettings(
            temperature=config.temperature,
            timeout=config.timeout,
        ),
    )
    return Agent(model=model, system_prompt=system_prompt)


async def _run_agent(agent: Agent[None, str], prompt: str, model_name: str) -> str:
    logger.debug("Completion request to %s (%d prompt chars)", model_name, len(prompt))
    try:
        result = await agent.run(prompt)
    except Exception as e:
        msg = f"{type(e).__name__}: {e}"
        raise CompletionError(msg) from e

    output = result.output
    if not isinstance(output, str):
        msg = f"unexpected response type {type(output).__name__}"
        raise CompletionError(msg)
    text = output.strip()
    if not text:
        msg = "empty response"
        raise CompletionError(msg)
    return text


async def complete(
    prompt: str,
    config: SummarizerConfig,
    *,
    system_prompt: str = SYSTEM_PROMPT,
) -> str:
    """Send one prompt to the model and return the generated text.

    Args:
        prompt: The user prompt.
        config: Summarizer configuration (endpoint, model, timeout).
        system_prompt: Instructions sent ahead of the prompt.

    Returns:
        The generated text with surrounding whitespace removed.

    Raises:
        CompletionError: On network failure, non-success status, or an
            empty or malformed response.

    """
    return await _run_agent(_build_agent(config, system_prompt), prompt, config.model)


def bind_completion(config: SummarizerConfig) -> CompletionFn:
    """Return a single-argument completion function bound to `config`.

    The agent and its HTTP client are created once and reused by every call,
    retries included.
    """
    agent = _build_agent(config)

    async def _complete(prompt: str) -> str:
        return await _run_agent(agent, prompt, config.model)

    return _complete
