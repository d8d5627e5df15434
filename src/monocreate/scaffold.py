"""Package scaffolding pipeline."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .builder import TemplateBuilder
from .config import GenerationContext, Workspace
from .emitter import FileEmitter
from .errors import InvalidPackageNameError
from .formatting import Formatter, StyleConfig, default_formatter, format_documents, resolve_style_config
from .naming import require_valid_name, validate_package_name
from .reporting import ConsoleReporter, Reporter
from .schema import NameValidation, PackageRequest

LOGGER = logging.getLogger(__name__)

__all__ = ["CreationResult", "PackageScaffolder", "create_package"]


@dataclass(slots=True)
class CreationResult:
    """Outcome of a single ``create`` invocation."""

    request: PackageRequest
    ok: bool
    target_dir: Path | None = None
    written: list[Path] = field(default_factory=list)
    error: BaseException | None = None


class PackageScaffolder:
    """Create a new package inside a loaded :class:`Workspace`."""

    def __init__(
        self,
        workspace: Workspace,
        *,
        builder: TemplateBuilder | None = None,
        formatter: Formatter | None = None,
        style_config: StyleConfig | None = None,
        emitter: FileEmitter | None = None,
        reporter: Reporter | None = None,
        validator: Callable[[str], NameValidation] = validate_package_name,
    ) -> None:
        self.workspace = workspace
        self.builder = builder or TemplateBuilder()
        self.formatter = formatter or default_formatter()
        self.style_config = style_config
        self.emitter = emitter or FileEmitter()
        self.reporter = reporter or ConsoleReporter()
        self.validator = validator

    def context(self, request: PackageRequest) -> GenerationContext:
        return GenerationContext.from_request(request, self.workspace)

    async def create(self, request: PackageRequest) -> CreationResult:
        """Validate, build, format and write the package for ``request``.

        Errors propagate to the caller; see :func:`create_package` for the
        variant that reports them instead.
        """

        require_valid_name(request.raw_name, self.validator)
        ctx = self.context(request)
        documents = format_documents(self.builder.build(ctx), self.formatter, self.style_config)

        manifest_path = ctx.target_dir / "package.json"
        self.reporter.about_to_write(manifest_path)
        LOGGER.info("creating %s in %s", ctx.package_name, ctx.target_dir)
        emitted = await self.emitter.emit(ctx.target_dir, documents)

        self.reporter.manifest_preview(documents["package.json"].render())
        self.reporter.success(
            request.raw_name,
            os.path.join(".", self.workspace.config.packages_dir, ctx.folder_name),
            manifest_path,
        )
        return CreationResult(request=request, ok=True, target_dir=ctx.target_dir, written=emitted.written)


def create_package(
    request: PackageRequest,
    workspace_root: str | Path,
    *,
    reporter: Reporter | None = None,
    formatter: Formatter | None = None,
    identity: Callable[[], str | None] | None = None,
    style_resolver: Callable[[Path], StyleConfig | None] = resolve_style_config,
    emitter: FileEmitter | None = None,
    cwd: str | Path | None = None,
    validator: Callable[[str], NameValidation] = validate_package_name,
) -> CreationResult:
    """Run the whole pipeline and report, rather than raise, any failure.

    The name is validated before the workspace is read, so an invalid name
    never touches the filesystem. Nothing is retried or rolled back.
    """

    reporter = reporter or ConsoleReporter()
    try:
        require_valid_name(request.raw_name, validator)
        workspace = Workspace.load(workspace_root, identity=identity)
        scaffolder = PackageScaffolder(
            workspace,
            formatter=formatter,
            style_config=style_resolver(Path(cwd) if cwd is not None else Path.cwd()),
            emitter=emitter,
            reporter=reporter,
            validator=validator,
        )
        return asyncio.run(scaffolder.create(request))
    except InvalidPackageNameError as exc:
        LOGGER.info("rejected package name %r", exc.name)
        reporter.invalid_name(exc.name, exc.violations)
        return CreationResult(request=request, ok=False, error=exc)
    except Exception as exc:
        LOGGER.exception("package %s not created", request.raw_name)
        reporter.failure(request.raw_name, exc)
        return CreationResult(request=request, ok=False, error=exc)
