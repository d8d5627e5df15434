from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from monocreate.config import Workspace  # noqa: E402 (import after sys.path setup)

LICENSE_TEXT = "MIT License\n\nCopyright (c) Example Authors\n"

ROOT_MANIFEST = {
    "name": "root",
    "private": True,
    "author": "Workspace Default <default@example.com>",
    "devDependencies": {
        "@types/mocha": "10.0.1",
        "cross-env": "7.0.3",
        "mocha": "10.1.0",
        "nyc": "15.1.0",
        "ts-node": "10.9.1",
        "typescript": "4.9.4",
        "prettier": "2.8.1",
    },
}


@pytest.fixture()
def workspace_root(tmp_path: Path) -> Path:
    """A minimal monorepo with a license, root manifest and packages area."""

    root = tmp_path / "workspace"
    (root / "packages").mkdir(parents=True)
    (root / "LICENSE").write_text(LICENSE_TEXT, encoding="utf-8")
    (root / "package.json").write_text(json.dumps(ROOT_MANIFEST, indent=2), encoding="utf-8")
    return root


@pytest.fixture()
def workspace(workspace_root: Path) -> Workspace:
    return Workspace.load(workspace_root, identity=lambda: "Ada Tester")
