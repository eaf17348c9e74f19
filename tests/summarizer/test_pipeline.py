"""Tests for the summarization pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import patch

import pytest

from srt_summarizer.summarizer import summarize_file
from srt_summarizer.summarizer.models import (
    CompletionError,
    DecodeError,
    DocumentKind,
    EmptyInputError,
    MapStageError,
    PipelineFailure,
    PipelineStage,
    ReadError,
    ReduceStageError,
    SummarizerConfig,
    WriteError,
)
from srt_summarizer.summarizer.pipeline import SummaryPipeline

if TYPE_CHECKING:
    from pathlib import Path


class TestPipelineRun:
    """End-to-end runs with a fake completion function."""

    @pytest.mark.asyncio
    async def test_two_chunk_subtitle(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        fake_completion: Any,
    ) -> None:
        """Two map calls, one reduce call, summary written next to the input."""
        stages: list[PipelineStage] = []
        pipeline = SummaryPipeline(config, fake_completion, on_stage=stages.append)

        result = await pipeline.run(sample_srt)

        target = sample_srt.with_name("sample_summary.txt")
        assert result.output_path == target
        assert target.read_text(encoding="utf-8") == "- A\n- B"
        assert result.summary == "- A\n- B"
        assert result.kind is DocumentKind.SUBTITLE
        assert result.word_count == 40
        assert result.chunk_count == 2
        assert result.chunk_summaries == ["- point A", "- point B"]

        assert len(fake_completion.map_prompts) == 2
        assert len(fake_completion.reduce_prompts) == 1
        reduce_prompt = fake_completion.reduce_prompts[0]
        assert reduce_prompt.index("- point A") < reduce_prompt.index("- point B")
        for prompt in fake_completion.map_prompts:
            assert "-->" not in prompt
            assert "00:00" not in prompt

        assert stages == [
            PipelineStage.READ_INPUT,
            PipelineStage.NORMALIZE,
            PipelineStage.CHUNK,
            PipelineStage.MAP,
            PipelineStage.REDUCE,
            PipelineStage.WRITE,
            PipelineStage.DONE,
        ]
        assert pipeline.stage is PipelineStage.DONE

    @pytest.mark.asyncio
    async def test_single_chunk_text_still_reduces(
        self,
        tmp_path: Path,
        config: SummarizerConfig,
        make_completion: Any,
    ) -> None:
        """Short input makes one map call and one reduce call."""
        path = tmp_path / "notes.txt"
        path.write_text("Short notes about the weekly meeting.", encoding="utf-8")
        fake = make_completion(lambda p: "- final" if "FINAL SUMMARY:" in p else "- chunk")

        result = await SummaryPipeline(config, fake).run(path, tmp_path / "out" / "result.txt")

        assert len(fake.prompts) == 2
        assert "Short notes about the weekly meeting." in fake.map_prompts[0]
        assert result.chunk_count == 1
        assert result.kind is DocumentKind.PLAIN_TEXT
        assert (tmp_path / "out" / "result.txt").read_text(encoding="utf-8") == "- final"

    @pytest.mark.asyncio
    async def test_retry_recovers_transient_failure(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        make_completion: Any,
    ) -> None:
        failures = {"harvest": 2}

        def responder(prompt: str) -> str | Exception:
            if "FINAL SUMMARY:" not in prompt and "harvest" in prompt and failures["harvest"]:
                failures["harvest"] -= 1
                return CompletionError("HTTP 503")
            return "- ok"

        fake = make_completion(responder)
        result = await SummaryPipeline(config, fake).run(sample_srt)

        assert result.summary == "- ok"
        assert len(fake.map_prompts) == 4

    @pytest.mark.asyncio
    async def test_idempotent_naming(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        make_completion: Any,
    ) -> None:
        """Rerunning replaces the summary instead of creating a new file."""
        await SummaryPipeline(config, make_completion(lambda _p: "- first")).run(sample_srt)
        await SummaryPipeline(config, make_completion(lambda _p: "- second")).run(sample_srt)

        assert sorted(p.name for p in sample_srt.parent.iterdir()) == [
            "sample.srt",
            "sample_summary.txt",
        ]
        assert sample_srt.with_name("sample_summary.txt").read_text(encoding="utf-8") == "- second"


class TestPipelineFailures:
    """Each error is reported with the stage it happened in."""

    @pytest.mark.asyncio
    async def test_missing_input(self, tmp_path: Path, config: SummarizerConfig, make_completion: Any) -> None:
        pipeline = SummaryPipeline(config, make_completion(lambda _p: "- x"))
        with pytest.raises(PipelineFailure) as exc_info:
            await pipeline.run(tmp_path / "missing.srt")
        assert exc_info.value.stage is PipelineStage.READ_INPUT
        assert isinstance(exc_info.value.cause, ReadError)
        assert pipeline.stage is PipelineStage.FAILED

    @pytest.mark.asyncio
    async def test_undecodable_input(
        self,
        tmp_path: Path,
        config: SummarizerConfig,
        make_completion: Any,
    ) -> None:
        path = tmp_path / "bad.srt"
        path.write_bytes(b"\xff\xfe\x00bad")
        fake = make_completion(lambda _p: "- x")
        with pytest.raises(PipelineFailure) as exc_info:
            await SummaryPipeline(config, fake).run(path)
        assert isinstance(exc_info.value.cause, DecodeError)
        assert fake.prompts == []

    @pytest.mark.asyncio
    async def test_empty_input(self, tmp_path: Path, config: SummarizerConfig, make_completion: Any) -> None:
        path = tmp_path / "empty.srt"
        path.write_text("1\n00:00:01,000 --> 00:00:02,000\n\n", encoding="utf-8")
        fake = make_completion(lambda _p: "- x")
        with pytest.raises(PipelineFailure) as exc_info:
            await SummaryPipeline(config, fake).run(path)
        assert exc_info.value.stage is PipelineStage.NORMALIZE
        assert isinstance(exc_info.value.cause, EmptyInputError)
        assert fake.prompts == []
        assert not tmp_path.joinpath("empty_summary.txt").exists()

    @pytest.mark.asyncio
    async def test_map_failure_after_retries(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        make_completion: Any,
    ) -> None:
        """A chunk that fails every attempt aborts the job before reduce."""

        def responder(prompt: str) -> str | Exception:
            if "harvest" in prompt and "FINAL SUMMARY:" not in prompt:
                return CompletionError("HTTP 500")
            return "- ok"

        fake = make_completion(responder)
        with pytest.raises(PipelineFailure) as exc_info:
            await SummaryPipeline(config, fake).run(sample_srt)

        failure = exc_info.value
        assert failure.stage is PipelineStage.MAP
        assert isinstance(failure.cause, MapStageError)
        assert failure.cause.chunk_index == 1
        assert "map stage failed: MapStageError: chunk 1 failed: HTTP 500" in str(failure)
        assert sum("harvest" in p for p in fake.map_prompts) == config.max_attempts
        assert fake.reduce_prompts == []
        assert not sample_srt.with_name("sample_summary.txt").exists()

    @pytest.mark.asyncio
    async def test_reduce_failure(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        make_completion: Any,
    ) -> None:
        def responder(prompt: str) -> str | Exception:
            if "FINAL SUMMARY:" in prompt:
                return CompletionError("timeout")
            return "- ok"

        fake = make_completion(responder)
        with pytest.raises(PipelineFailure) as exc_info:
            await SummaryPipeline(config, fake).run(sample_srt)

        assert exc_info.value.stage is PipelineStage.REDUCE
        assert isinstance(exc_info.value.cause, ReduceStageError)
        assert len(fake.reduce_prompts) == config.max_attempts
        assert not sample_srt.with_name("sample_summary.txt").exists()

    @pytest.mark.asyncio
    async def test_write_failure(
        self,
        sample_srt: Path,
        tmp_path: Path,
        config: SummarizerConfig,
        fake_completion: Any,
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(PipelineFailure) as exc_info:
            await SummaryPipeline(config, fake_completion).run(sample_srt, blocker / "out.txt")
        assert exc_info.value.stage is PipelineStage.WRITE
        assert isinstance(exc_info.value.cause, WriteError)


class TestSummarizeText:
    """Tests for summarizing text that is already in memory."""

    @pytest.mark.asyncio
    async def test_summarize_text(self, config: SummarizerConfig, make_completion: Any) -> None:
        fake = make_completion(lambda p: "- all" if "FINAL SUMMARY:" in p else "- part")
        chunks, summaries, summary = await SummaryPipeline(config, fake).summarize_text(
            " ".join(f"w{i}" for i in range(50)),
        )
        assert len(chunks) == 2
        assert [s.index for s in summaries] == [0, 1]
        assert summary == "- all"

    @pytest.mark.asyncio
    async def test_blank_text(self, config: SummarizerConfig, make_completion: Any) -> None:
        pipeline = SummaryPipeline(config, make_completion(lambda _p: "- x"))
        with pytest.raises(PipelineFailure) as exc_info:
            await pipeline.summarize_text("   ")
        assert exc_info.value.stage is PipelineStage.CHUNK


class TestSummarizeFile:
    """Tests for the summarize_file helper."""

    @pytest.mark.asyncio
    async def test_uses_injected_completion(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        fake_completion: Any,
    ) -> None:
        result = await summarize_file(sample_srt, config, complete=fake_completion)
        assert result.summary == "- A\n- B"

    @pytest.mark.asyncio
    async def test_defaults_to_endpoint_client(
        self,
        sample_srt: Path,
        config: SummarizerConfig,
        fake_completion: Any,
    ) -> None:
        with patch(
            "srt_summarizer.summarizer.pipeline.bind_completion",
            return_value=fake_completion,
        ) as bind:
            await summarize_file(sample_srt, config)
        bind.assert_called_once_with(config)
