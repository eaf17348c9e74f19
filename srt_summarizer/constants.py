"""Default configuration settings for the srt-bullet-summarizer package."""

from __future__ import annotations

# --- LLM Configuration ---
DEFAULT_OPENAI_BASE_URL = "http://localhost:11434/v1"  # Ollama's OpenAI-compatible API
DEFAULT_MODEL = "llama3.2"
DEFAULT_API_KEY = "not-needed"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TIMEOUT = 120.0  # seconds, per completion call

# --- Chunking Configuration ---
DEFAULT_CHUNK_WORDS = 2000
DEFAULT_OVERLAP_WORDS = 200
DEFAULT_MAX_CONCURRENT_CHUNKS = 4

# --- Retry Configuration ---
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_RETRY_MAX_DELAY = 30.0
DEFAULT_RETRY_JITTER = 0.1

# --- Files ---
SUBTITLE_SUFFIX = ".srt"
SUMMARY_SUFFIX = "_summary.txt"
