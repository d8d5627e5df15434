"""Materialise a generated document set on disk.

Emission is not transactional: when a write fails the operation is reported
as failed, but files that were already written stay where they are and the
operator has to remove the half-created package by hand.

The emission is driven by a single asyncio event loop, but each blocking
``mkdir`` and write call runs on a worker thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from .errors import EmissionError, TargetExistsError
from .schema import GeneratedDocument

LOGGER = logging.getLogger(__name__)

__all__ = ["EmissionResult", "FileEmitter"]


REQUIRED_SUBDIRECTORIES = ("tests", "src")


@dataclass(slots=True)
class EmissionResult:
    """Paths created by a successful emission, in completion order."""

    target_dir: Path
    written: list[Path] = field(default_factory=list)


@dataclass(slots=True)
class _EmissionState:
    result: EmissionResult
    failed: bool = False


class FileEmitter:
    """Create a package directory and write its documents concurrently.

    The target directory is created first and must not exist yet. Documents
    at the package root are written straight away, while documents inside a
    first-level subdirectory wait for that directory to be created. All
    writes share a single barrier; the first failure is raised as
    :class:`EmissionError` and writes that have not started yet are skipped.
    """

    def __init__(self, subdirectories: Iterable[str] = REQUIRED_SUBDIRECTORIES) -> None:
        self.subdirectories = tuple(subdirectories)

    async def make_directory(self, path: Path) -> None:
        await asyncio.to_thread(path.mkdir)

    async def write_file(self, path: Path, text: str) -> None:
        await asyncio.to_thread(path.write_bytes, text.encode("utf-8"))

    async def emit(
        self,
        target_dir: str | Path,
        documents: Mapping[str, GeneratedDocument],
    ) -> EmissionResult:
        target = Path(target_dir)
        await self._create_target(target)

        grouped: dict[str | None, list[GeneratedDocument]] = defaultdict(list)
        for document in documents.values():
            grouped[document.directory].append(document)

        state = _EmissionState(result=EmissionResult(target_dir=target))
        pending = [self._write(target, document, state) for document in grouped.pop(None, [])]
        for subdirectory in (*self.subdirectories, *sorted(set(grouped) - set(self.subdirectories))):
            pending.append(self._populate(target, subdirectory, grouped.get(subdirectory, []), state))

        await asyncio.gather(*pending)
        LOGGER.info("wrote %d files to %s", len(state.result.written), target)
        return state.result

    async def _create_target(self, target: Path) -> None:
        try:
            await self.make_directory(target)
        except FileExistsError as exc:
            raise TargetExistsError(target) from exc
        except OSError as exc:
            raise EmissionError(f"cannot create {target}", path=target) from exc
        LOGGER.debug("created %s", target)

    async def _populate(
        self,
        target: Path,
        subdirectory: str,
        documents: list[GeneratedDocument],
        state: _EmissionState,
    ) -> None:
        path = target / subdirectory
        try:
            await self.make_directory(path)
        except OSError as exc:
            state.failed = True
            raise EmissionError(f"cannot create {path}", path=path) from exc
        LOGGER.debug("created %s", path)

        await asyncio.gather(*(self._write(target, document, state) for document in documents))

    async def _write(self, target: Path, document: GeneratedDocument, state: _EmissionState) -> None:
        path = target / document.relative_path
        if state.failed:
            LOGGER.debug("skipping %s after an earlier failure", path)
            return

        try:
            await self.write_file(path, document.render())
        except OSError as exc:
            state.failed = True
            raise EmissionError(f"cannot write {path}", path=path) from exc

        LOGGER.debug("wrote %s", path)
        state.result.written.append(path)
