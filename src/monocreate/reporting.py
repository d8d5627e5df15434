"""Operator-facing progress and outcome reporting."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence, TextIO


class Reporter(ABC):
    """Sink for the messages shown while a package is created."""

    @abstractmethod
    def about_to_write(self, path: Path) -> None:
        """Announce the manifest path before anything is written."""

    @abstractmethod
    def manifest_preview(self, text: str) -> None:
        """Show the generated manifest."""

    @abstractmethod
    def success(self, name: str, relative_dir: str, manifest_path: Path) -> None:
        """Report that the package was created."""

    @abstractmethod
    def failure(self, name: str, error: BaseException) -> None:
        """Report that creation failed after validation passed."""

    @abstractmethod
    def invalid_name(self, name: str, violations: Sequence[str]) -> None:
        """Report every naming rule ``name`` violates."""


class ConsoleReporter(Reporter):
    """Write plain-text messages to the terminal."""

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def about_to_write(self, path: Path) -> None:
        print(f"About to write to {path}", file=self.stdout)
        print("", file=self.stdout)

    def manifest_preview(self, text: str) -> None:
        self.stdout.write(text)
        if not text.endswith("\n"):
            self.stdout.write("\n")

    def success(self, name: str, relative_dir: str, manifest_path: Path) -> None:
        print(f"success create New package {name} created at {relative_dir}.", file=self.stdout)
        print("", file=self.stdout)
        print(f"  Update the package.json here: {manifest_path}", file=self.stdout)

    def failure(self, name: str, error: BaseException) -> None:
        print(f"error: {error}", file=self.stderr)
        if error.__cause__ is not None:
            print(f"  caused by: {error.__cause__}", file=self.stderr)
        print("", file=self.stdout)
        print(f"fail create New package {name} not created. See error above.", file=self.stdout)

    def invalid_name(self, name: str, violations: Sequence[str]) -> None:
        print(f'ERROR! the name "{name}" is not a valid npm package name:', file=self.stderr)
        for violation in violations:
            print(f"  - {violation}", file=self.stderr)


class RecordingReporter(Reporter):
    """Keep every reported event in memory; useful for tests and embedding."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def about_to_write(self, path: Path) -> None:
        self.events.append(("about_to_write", path))

    def manifest_preview(self, text: str) -> None:
        self.events.append(("manifest_preview", text))

    def success(self, name: str, relative_dir: str, manifest_path: Path) -> None:
        self.events.append(("success", (name, relative_dir, manifest_path)))

    def failure(self, name: str, error: BaseException) -> None:
        self.events.append(("failure", (name, error)))

    def invalid_name(self, name: str, violations: Sequence[str]) -> None:
        self.events.append(("invalid_name", (name, tuple(violations))))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


__all__ = ["ConsoleReporter", "RecordingReporter", "Reporter"]
