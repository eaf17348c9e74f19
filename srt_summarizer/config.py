"""Pydantic models for command configuration and config file loading."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from srt_summarizer.core.utils import print_error_message

# --- Config File Loading ---

CONFIG_PATH = Path.home() / ".config" / "srt-bullet-summarizer" / "config.toml"
CONFIG_PATH_2 = Path("srt-bullet-summarizer.toml")


def _replace_dashed_keys(cfg: dict[str, Any]) -> dict[str, Any]:
    """Replace dashed keys with underscores in the config options."""
    return {k.replace("-", "_"): v for k, v in cfg.items()}


def load_config(config_path_str: str | None = None) -> dict[str, Any]:
    """Load the TOML configuration file, keyed by section."""
    # Determine which config path to use
    if config_path_str:
        config_path = Path(config_path_str).expanduser()
    elif CONFIG_PATH.exists():
        config_path = CONFIG_PATH
    elif CONFIG_PATH_2.exists():
        config_path = CONFIG_PATH_2
    else:
        return {}

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                cfg = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            print_error_message(f"Error parsing config file {config_path}: {e}")
            return {}
        return {k: _replace_dashed_keys(v) for k, v in cfg.items() if isinstance(v, dict)}

    # Report error only if an explicit path was given
    print_error_message(f"Config file not found at {config_path_str}")
    return {}


def command_defaults(config: dict[str, Any], command_name: str | None) -> dict[str, Any]:
    """Merge the `[defaults]` section with the section for `command_name`."""
    defaults = dict(config.get("defaults", {}))
    if command_name:
        defaults.update(config.get(command_name, {}))
    return defaults


# --- Pydantic Models for Configuration ---

# --- Panel: LLM Configuration ---


class LLM(BaseModel):
    """Connection settings for the OpenAI-compatible completion endpoint."""

    openai_base_url: str
    model: str
    openai_api_key: str | None = None
    timeout: float

    @field_validator("openai_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


# --- Panel: Chunking Options ---


class Chunking(BaseModel):
    """Word-window and concurrency settings for the map stage."""

    chunk_words: int
    overlap_words: int
    max_concurrent_chunks: int

    @field_validator("chunk_words", "max_concurrent_chunks")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            msg = "must be at least 1"
            raise ValueError(msg)
        return v

    @field_validator("overlap_words")
    @classmethod
    def _not_negative(cls, v: int) -> int:
        if v < 0:
            msg = "must not be negative"
            raise ValueError(msg)
        return v


# --- Panel: Retry Options ---


class Retry(BaseModel):
    """Retry policy for failed completion calls."""

    max_attempts: int
    retry_base_delay: float


# --- Panel: General Options ---


class General(BaseModel):
    """General configuration parameters for logging and I/O."""

    log_level: str
    log_file: str | None = None
    quiet: bool

    @field_validator("log_file", mode="before")
    @classmethod
    def _expand_user_path(cls, v: str | None) -> str | None:
        if v:
            return str(Path(v).expanduser())
        return None
