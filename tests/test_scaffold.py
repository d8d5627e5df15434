from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import pytest

from monocreate.config import Workspace
from monocreate.errors import InvalidPackageNameError, TargetExistsError, WorkspaceError
from monocreate.formatting import PassthroughFormatter, StyleConfig
from monocreate.reporting import RecordingReporter
from monocreate.scaffold import PackageScaffolder, create_package
from monocreate.schema import NameValidation, PackageRequest


def _create(request: PackageRequest, root: Path, reporter: RecordingReporter, **kwargs):
    kwargs.setdefault("identity", lambda: "Ada Tester")
    kwargs.setdefault("formatter", PassthroughFormatter())
    kwargs.setdefault("style_resolver", lambda cwd: None)
    return create_package(request, root, reporter=reporter, cwd=root, **kwargs)


def test_create_package_without_folder_override(workspace_root: Path):
    reporter = RecordingReporter()

    result = _create(PackageRequest(raw_name="widgets"), workspace_root, reporter)

    target = workspace_root.resolve() / "packages" / "widgets"
    assert result.ok
    assert result.target_dir == target
    manifest = json.loads((target / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "@ganache/widgets"
    assert manifest["version"] == "0.1.0"
    assert len(result.written) == 9
    assert reporter.kinds() == ["about_to_write", "manifest_preview", "success"]


def test_create_package_with_folder_override(workspace_root: Path):
    reporter = RecordingReporter()

    result = _create(PackageRequest(raw_name="widgets", folder="widgets-pkg"), workspace_root, reporter)

    target = workspace_root.resolve() / "packages" / "widgets-pkg"
    assert result.ok
    assert not (workspace_root / "packages" / "widgets").exists()
    manifest = json.loads((target / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "@ganache/widgets"
    assert manifest["repository"]["directory"] == "packages/widgets-pkg"

    name, relative_dir, manifest_path = dict(reporter.events)["success"]
    assert name == "widgets"
    assert Path(relative_dir) == Path(".", "packages", "widgets-pkg")
    assert manifest_path == target / "package.json"


def test_invalid_name_creates_nothing(workspace_root: Path):
    reporter = RecordingReporter()
    before = sorted(workspace_root.rglob("*"))

    result = _create(PackageRequest(raw_name="Invalid Name!"), workspace_root, reporter)

    assert not result.ok
    assert isinstance(result.error, InvalidPackageNameError)
    assert sorted(workspace_root.rglob("*")) == before
    [(kind, (name, violations))] = reporter.events
    assert kind == "invalid_name"
    assert name == "Invalid Name!"
    assert len(violations) == 3


def test_invalid_name_is_rejected_before_reading_workspace(tmp_path: Path):
    reporter = RecordingReporter()

    result = _create(PackageRequest(raw_name="_bad"), tmp_path / "nowhere", reporter)

    assert isinstance(result.error, InvalidPackageNameError)
    assert reporter.kinds() == ["invalid_name"]


def test_existing_target_is_a_precondition_failure(workspace_root: Path, caplog: pytest.LogCaptureFixture):
    target = workspace_root / "packages" / "widgets"
    target.mkdir()
    reporter = RecordingReporter()

    with caplog.at_level(logging.ERROR, logger="monocreate.scaffold"):
        result = _create(PackageRequest(raw_name="widgets"), workspace_root, reporter)

    assert not result.ok
    assert isinstance(result.error, TargetExistsError)
    assert list(target.iterdir()) == []
    assert reporter.kinds() == ["about_to_write", "failure"]
    assert "package widgets not created" in caplog.text


def test_missing_license_is_reported(workspace_root: Path):
    (workspace_root / "LICENSE").unlink()
    reporter = RecordingReporter()

    result = _create(PackageRequest(raw_name="widgets"), workspace_root, reporter)

    assert isinstance(result.error, WorkspaceError)
    assert reporter.kinds() == ["failure"]
    assert not (workspace_root / "packages" / "widgets").exists()


def test_unexpected_errors_are_reported_not_raised(workspace_root: Path):
    reporter = RecordingReporter()

    def broken_identity() -> str:
        raise RuntimeError("identity service down")

    result = _create(PackageRequest(raw_name="widgets"), workspace_root, reporter, identity=broken_identity)

    assert not result.ok
    assert str(result.error) == "identity service down"
    assert reporter.kinds() == ["failure"]


def test_style_config_is_resolved_once_and_forwarded(workspace_root: Path):
    style = StyleConfig(path=workspace_root / ".prettierrc", options={})
    resolved_from: list[Path] = []
    seen: list[StyleConfig | None] = []

    class _Formatter(PassthroughFormatter):
        def format(self, text, *, parser, style_config=None):
            seen.append(style_config)
            return super().format(text, parser=parser, style_config=style_config)

    def resolver(cwd: Path) -> StyleConfig:
        resolved_from.append(cwd)
        return style

    result = _create(
        PackageRequest(raw_name="widgets"),
        workspace_root,
        RecordingReporter(),
        formatter=_Formatter(),
        style_resolver=resolver,
    )

    assert result.ok
    assert resolved_from == [workspace_root]
    assert seen and all(config is style for config in seen)


def test_formatted_text_is_written(workspace: Workspace):
    scaffolder = PackageScaffolder(workspace, formatter=PassthroughFormatter(), reporter=RecordingReporter())

    result = asyncio.run(scaffolder.create(PackageRequest(raw_name="widgets")))

    readme = (result.target_dir / "README.md").read_text(encoding="utf-8")
    assert readme == "# `@ganache/widgets`\n> TODO: description\n"
    assert (result.target_dir / "LICENSE").read_text(encoding="utf-8") == workspace.license_text


def test_scaffolder_create_raises_for_invalid_names(workspace: Workspace):
    scaffolder = PackageScaffolder(workspace, formatter=PassthroughFormatter(), reporter=RecordingReporter())

    with pytest.raises(InvalidPackageNameError):
        asyncio.run(scaffolder.create(PackageRequest(raw_name="node_modules")))

    assert not (workspace.packages_path / "node_modules").exists()


def _reject_everything(name: str) -> NameValidation:
    return NameValidation(name=name, errors=["custom rule"])


def test_injected_validator_violations_are_reported(workspace_root: Path):
    reporter = RecordingReporter()
    before = sorted(workspace_root.rglob("*"))

    result = _create(PackageRequest(raw_name="widgets"), workspace_root, reporter, validator=_reject_everything)

    assert isinstance(result.error, InvalidPackageNameError)
    assert reporter.events == [("invalid_name", ("widgets", ("custom rule",)))]
    assert sorted(workspace_root.rglob("*")) == before


def test_scaffolder_uses_injected_validator(workspace: Workspace):
    scaffolder = PackageScaffolder(
        workspace,
        formatter=PassthroughFormatter(),
        reporter=RecordingReporter(),
        validator=_reject_everything,
    )

    with pytest.raises(InvalidPackageNameError) as excinfo:
        asyncio.run(scaffolder.create(PackageRequest(raw_name="widgets")))

    assert excinfo.value.violations == ("custom rule",)
    assert not (workspace.packages_path / "widgets").exists()
