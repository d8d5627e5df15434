"""Core data schemas passed between the pipeline stages."""

from __future__ import annotations

import json
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, JsonValue, model_validator

JSONValue = JsonValue


class DocumentKind(str, Enum):
    """How a :class:`GeneratedDocument` is turned into bytes on disk."""

    TEXT = "text"
    JSON = "json"


class PackageRequest(BaseModel):
    """Operator input describing the package to create."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    raw_name: str = Field(..., description="Unscoped package name as typed by the operator.")
    folder: Optional[str] = Field(None, description="Directory name override for the new package.")

    @property
    def folder_name(self) -> str:
        """Directory name under the packages area."""

        return self.folder or self.raw_name


class NameValidation(BaseModel):
    """Outcome of checking a name against the registry naming rules."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="The name that was checked.")
    errors: List[str] = Field(default_factory=list, description="Violations that block any package.")
    warnings: List[str] = Field(default_factory=list, description="Violations that only block new packages.")

    @property
    def violations(self) -> list[str]:
        return [*self.errors, *self.warnings]

    @property
    def valid_for_new_packages(self) -> bool:
        return not self.errors and not self.warnings


class GeneratedDocument(BaseModel):
    """A single file of the generated package, held in memory."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    relative_path: str = Field(..., description="POSIX path relative to the package directory.")
    kind: DocumentKind = Field(default=DocumentKind.TEXT, description="Serialization strategy.")
    content: Union[str, Dict[str, JSONValue]] = Field(..., description="Text or JSON-compatible mapping.")
    parser: Optional[str] = Field(
        None,
        description="Formatter hint for text documents; None means the text is written verbatim.",
    )

    @model_validator(mode="after")
    def _check_content_matches_kind(self) -> "GeneratedDocument":
        if self.kind is DocumentKind.JSON and not isinstance(self.content, dict):
            raise ValueError("json documents require mapping content")
        if self.kind is DocumentKind.TEXT and not isinstance(self.content, str):
            raise ValueError("text documents require string content")
        return self

    @property
    def directory(self) -> str | None:
        """First-level subdirectory holding this document, if any."""

        head, sep, _ = self.relative_path.partition("/")
        return head if sep else None

    def render(self) -> str:
        """Return the exact text written to disk."""

        if self.kind is DocumentKind.JSON:
            return json.dumps(self.content, indent=2, ensure_ascii=False) + "\n"
        return str(self.content)


DocumentSet = Dict[str, GeneratedDocument]


__all__ = [
    "DocumentKind",
    "DocumentSet",
    "GeneratedDocument",
    "JSONValue",
    "NameValidation",
    "PackageRequest",
]
