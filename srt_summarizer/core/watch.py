"""Shared watchfiles helper."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from pathlib import Path

from watchfiles import Change, awatch

ChangeHandler = Callable[[Change, Path], None]


def is_candidate(path: Path, root: Path, suffixes: Iterable[str] | None = None) -> bool:
    """True for visible files directly inside `root` with a matching suffix.

    Any suffix matches when `suffixes` is None.
    """
    if path.parent != root or path.name.startswith("."):
        return False
    if suffixes is None:
        return True
    return path.suffix.lower() in {s.lower() for s in suffixes}


async def watch_directory(
    root: Path,
    handler: ChangeHandler,
    *,
    suffixes: Iterable[str] | None = None,
    changes: Iterable[Change] = (Change.added, Change.modified),
    stop_event: asyncio.Event | None = None,
    use_executor: bool = False,
) -> None:
    """Watch `root` (not its subdirectories) and invoke handler(change, path).

    Only candidate files (see `is_candidate`) with one of the given change
    types are reported, in path order within each batch.
    """
    loop = asyncio.get_running_loop()
    wanted = set(changes)
    suffixes = tuple(suffixes) if suffixes is not None else None

    async for batch in awatch(root, stop_event=stop_event):
        for change_type, file_path_str in sorted(batch, key=lambda c: c[1]):
            path = Path(file_path_str)
            if change_type not in wanted or path.is_dir():
                continue
            if not is_candidate(path, root, suffixes):
                continue

            if use_executor:
                await loop.run_in_executor(None, handler, change_type, path)
            else:
                handler(change_type, path)
