"""Output path resolution and writing of the final summary."""

from __future__ import annotations

import contextlib
import logging
import tempfile
from pathlib import Path

from srt_summarizer import constants
from srt_summarizer.summarizer.models import WriteError

logger = logging.getLogger(__name__)


def default_output_path(input_path: Path) -> Path:
    """`<dir>/<stem>_summary.txt` next to the input file."""
    return input_path.with_name(f"{input_path.stem}{constants.SUMMARY_SUFFIX}")


def resolve_output_path(input_path: Path, output_path: Path | None = None) -> Path:
    """Use the explicit output path if given, otherwise derive one."""
    if output_path is not None:
        return output_path.expanduser()
    return default_output_path(input_path)


def write_summary(summary: str, target: Path) -> Path:
    """Write the summary verbatim as UTF-8, replacing any existing file.

    The text goes to a temporary file in the target directory first and is
    then moved into place, so a failed write never leaves a partial file.

    Raises:
        WriteError: On permission, disk-space or other OS errors.

    """
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(summary)
        # mkstemp creates 0600 files
        Path(tmp_name).chmod(0o644)
        Path(tmp_name).replace(target)
    except OSError as e:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                Path(tmp_name).unlink(missing_ok=True)
        msg = f"Could not write summary to {target}: {e}"
        raise WriteError(msg) from e

    logger.info("Summary saved to %s", target)
    return target
