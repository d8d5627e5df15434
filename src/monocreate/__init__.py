"""Scaffold new packages inside a JavaScript monorepo workspace.

The package validates a proposed package name, builds the manifest, build
config, stubs and metadata files for it, formats them and writes them into a
fresh directory below the workspace's ``packages`` area. The pipeline can be
used programmatically or through the ``monocreate`` command line interface.
"""

from __future__ import annotations

from .builder import TemplateBuilder
from .config import GenerationContext, Workspace, WorkspaceConfig
from .emitter import EmissionResult, FileEmitter
from .errors import (
    EmissionError,
    FormattingError,
    InvalidPackageNameError,
    ScaffoldError,
    TargetExistsError,
    WorkspaceError,
)
from .naming import require_valid_name, to_code_identifier, validate_package_name
from .scaffold import CreationResult, PackageScaffolder, create_package
from .schema import GeneratedDocument, NameValidation, PackageRequest

__all__ = [
    "CreationResult",
    "EmissionError",
    "EmissionResult",
    "FileEmitter",
    "FormattingError",
    "GeneratedDocument",
    "GenerationContext",
    "InvalidPackageNameError",
    "NameValidation",
    "PackageRequest",
    "PackageScaffolder",
    "ScaffoldError",
    "TargetExistsError",
    "TemplateBuilder",
    "Workspace",
    "WorkspaceConfig",
    "WorkspaceError",
    "create_package",
    "require_valid_name",
    "to_code_identifier",
    "validate_package_name",
]

__version__ = "0.1.0"
