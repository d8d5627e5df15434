"""Workspace configuration and the derived generation context."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Mapping

from .errors import WorkspaceError
from .identity import git_user_name
from .naming import scoped_name
from .schema import PackageRequest

LOGGER = logging.getLogger(__name__)

__all__ = ["GenerationContext", "Workspace", "WorkspaceConfig"]


DEFAULT_KEYWORDS = (
    "ethereum",
    "evm",
    "blockchain",
    "smart contracts",
    "dapps",
    "solidity",
    "vyper",
    "fe",
    "web3",
    "tooling",
    "truffle",
)

DEV_DEPENDENCY_KEYS = (
    "@types/mocha",
    "cross-env",
    "mocha",
    "nyc",
    "ts-node",
    "typescript",
)


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Fixed policy of the monorepo the packages are created in.

    Attributes
    ----------
    scope:
        Registry organisation every generated package is published under.
        It doubles as the product keyword added to each manifest.
    repository:
        ``owner/name`` of the hosting GitHub repository, used for the
        homepage, repository and bugs URLs.
    branch:
        Default branch the homepage URL points into.
    packages_dir:
        Directory below the workspace root that holds every package.
    base_tsconfig:
        Shared compiler configuration that package build configs extend. It
        lives directly inside :attr:`packages_dir`.
    version:
        Initial version written to every new manifest and lockfile stub.
    license:
        License identifier for the manifest and the entry file header.
    keywords:
        Manifest keywords; the scoped package keyword is inserted second.
    dev_dependency_keys:
        Root manifest ``devDependencies`` copied into each new manifest.
    """

    scope: str = "ganache"
    repository: str = "trufflesuite/ganache"
    branch: str = "develop"
    packages_dir: str = "packages"
    base_tsconfig: str = "tsconfig-base.json"
    version: str = "0.1.0"
    license: str = "MIT"
    keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    dev_dependency_keys: tuple[str, ...] = DEV_DEPENDENCY_KEYS

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.repository}"


def _read_license(root: Path) -> str:
    path = root / "LICENSE"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WorkspaceError(f"cannot read workspace license at {path}") from exc


def _read_root_manifest(root: Path) -> dict[str, Any]:
    path = root / "package.json"
    try:
        manifest = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise WorkspaceError(f"cannot read workspace manifest at {path}") from exc
    except json.JSONDecodeError as exc:
        raise WorkspaceError(f"workspace manifest at {path} is not valid JSON") from exc

    if not isinstance(manifest, dict):
        raise WorkspaceError(f"workspace manifest at {path} must be a JSON object")
    return manifest


@dataclass(frozen=True, slots=True)
class Workspace:
    """Ambient facts about the monorepo, read once at startup."""

    root: Path
    license_text: str
    root_manifest: Mapping[str, Any]
    user_name: str | None = None
    config: WorkspaceConfig = field(default_factory=WorkspaceConfig)

    @classmethod
    def load(
        cls,
        root: str | Path,
        *,
        identity: Callable[[], str | None] | None = None,
        config: WorkspaceConfig | None = None,
    ) -> "Workspace":
        """Read the workspace license and root manifest below ``root``.

        ``identity`` is consulted exactly once; by default it asks git for the
        configured user name.
        """

        root_path = Path(root).expanduser().resolve()
        license_text = _read_license(root_path)
        root_manifest = _read_root_manifest(root_path)
        lookup = identity if identity is not None else (lambda: git_user_name(root_path))
        user_name = lookup()
        LOGGER.debug("loaded workspace root=%s user=%s", root_path, user_name)

        return cls(
            root=root_path,
            license_text=license_text,
            root_manifest=root_manifest,
            user_name=user_name,
            config=config or WorkspaceConfig(),
        )

    @property
    def packages_path(self) -> Path:
        return self.root / self.config.packages_dir

    @property
    def default_author(self) -> Any:
        return self.root_manifest.get("author")

    @property
    def dev_dependencies(self) -> Mapping[str, Any]:
        value = self.root_manifest.get("devDependencies") or {}
        return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True, slots=True)
class GenerationContext:
    """Every derived value the package templates are built from."""

    raw_name: str
    package_name: str
    folder_name: str
    version: str
    author: Any
    license_text: str
    root_dev_dependencies: Mapping[str, Any]
    workspace_root: Path
    target_dir: Path
    config: WorkspaceConfig = field(default_factory=WorkspaceConfig)

    @classmethod
    def from_request(cls, request: PackageRequest, workspace: Workspace) -> "GenerationContext":
        """Derive the context for ``request`` inside ``workspace``.

        The package name is always scoped from the raw name; the folder
        override only moves the directory.
        """

        config = workspace.config
        folder_name = request.folder_name
        return cls(
            raw_name=request.raw_name,
            package_name=scoped_name(config.scope, request.raw_name),
            folder_name=folder_name,
            version=config.version,
            author=workspace.user_name or workspace.default_author,
            license_text=workspace.license_text,
            root_dev_dependencies=dict(workspace.dev_dependencies),
            workspace_root=workspace.root,
            target_dir=workspace.packages_path / folder_name,
            config=config,
        )

    @property
    def package_path(self) -> str:
        """POSIX path of the package relative to the workspace root."""

        return str(PurePosixPath(self.config.packages_dir, self.folder_name))

    @property
    def relative_path_to_packages(self) -> str:
        """``../`` segments leading from the package back to the packages area."""

        return "../" * len(PurePosixPath(self.folder_name).parts)

    @property
    def author_label(self) -> str:
        """Author rendered as plain text for comment headers, with ``*/`` escaped."""

        if isinstance(self.author, Mapping):
            label = str(self.author.get("name", ""))
        else:
            label = "" if self.author is None else str(self.author)
        return label.replace("*/", "*\\/")
