"""Custom exception types raised by the scaffolding pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ScaffoldError(RuntimeError):
    """Base class for failures that abort package creation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidPackageNameError(ScaffoldError):
    """Raised when a requested name violates the registry naming rules."""

    def __init__(self, name: str, violations: Sequence[str]) -> None:
        self.name = name
        self.violations = tuple(violations)
        details = "\n".join(f"  - {violation}" for violation in self.violations)
        super().__init__(f'the name "{name}" is not a valid npm package name:\n{details}')


class WorkspaceError(ScaffoldError):
    """Raised when a required workspace file is missing or unreadable."""


class TargetExistsError(ScaffoldError):
    """Raised when the package directory is already present on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path} already exists")


class EmissionError(ScaffoldError):
    """Raised when a directory or file of the new package cannot be written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class FormattingError(ScaffoldError):
    """Raised when the formatter service rejects a document."""


__all__ = [
    "EmissionError",
    "FormattingError",
    "InvalidPackageNameError",
    "ScaffoldError",
    "TargetExistsError",
    "WorkspaceError",
]
