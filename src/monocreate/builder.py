"""Construction of every document that makes up a new package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .config import GenerationContext
from .schema import DocumentKind, DocumentSet, GeneratedDocument
from .template import TemplateRenderer

__all__ = ["TemplateBuilder"]


INDEX_TEMPLATE = """export default {
  // TODO
}
"""

# Bundlers keep ``/*!`` comments, which preserves the license attribution.
HEADERDOC_TEMPLATE = """/*!
  * {{ package_name }}
  *
  * @author {{ author }}
  * @license {{ license }}
*/

"""

TEST_TEMPLATE = """import assert from "assert";
import {{ raw_name|identifier }} from "../src/";

describe({{ package_name|json }}, () => {
  it("needs tests");
})"""

README_TEMPLATE = """# `{{ package_name }}`
> TODO: description"""

NPMIGNORE_ENTRIES = (
    "/index.ts",
    "/tests",
    "/.nyc_output",
    "/coverage",
    "/scripts",
    "/src",
    "/tsconfig.json",
    "/typedoc.json",
)

LOCKFILE_VERSION = 1

MOCHA_COMMAND = (
    "cross-env TS_NODE_FILES=true mocha --exit --check-leaks --throw-deprecation "
    "--trace-warnings --require ts-node/register 'tests/**/*.test.ts'"
)


@dataclass(slots=True)
class TemplateBuilder:
    """Build the in-memory document set for a :class:`GenerationContext`.

    The output depends on nothing but the context, so building twice yields
    identical documents.
    """

    renderer: TemplateRenderer

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def build(self, ctx: GenerationContext) -> DocumentSet:
        documents = [
            self._json("package.json", self.manifest(ctx)),
            self._json("tsconfig.json", self.build_config(ctx)),
            self._json("npm-shrinkwrap.json", self.lockfile(ctx)),
            self._text("index.ts", self.header(ctx) + INDEX_TEMPLATE, parser="typescript"),
            self._text("src/index.ts", INDEX_TEMPLATE, parser="typescript"),
            self._text("tests/index.test.ts", self._render(TEST_TEMPLATE, ctx), parser="typescript"),
            self._text("README.md", self._render(README_TEMPLATE, ctx), parser="markdown"),
            self._text(".npmignore", "".join(f"{entry}\n" for entry in NPMIGNORE_ENTRIES)),
            self._text("LICENSE", ctx.license_text),
        ]
        return {document.relative_path: document for document in documents}

    def manifest(self, ctx: GenerationContext) -> dict[str, Any]:
        """Return the ``package.json`` object for the new package."""

        config = ctx.config
        manifest: dict[str, Any] = {
            "name": ctx.package_name,
            "publishConfig": {"access": "public"},
            "version": ctx.version,
            "description": "",
        }
        if ctx.author is not None:
            manifest["author"] = ctx.author
        manifest.update(
            {
                "homepage": f"{config.repository_url}/tree/{config.branch}/{ctx.package_path}#readme",
                "license": config.license,
                "main": "lib/index.js",
                "typings": "typings",
                "source": "index.ts",
                "directories": {"lib": "lib", "test": "tests"},
                "files": ["lib", "typings"],
                "repository": {
                    "type": "git",
                    "url": f"{config.repository_url}.git",
                    "directory": ctx.package_path,
                },
                "scripts": {
                    "tsc": "ttsc --build",
                    "test": "nyc npm run mocha",
                    "mocha": MOCHA_COMMAND,
                },
                "bugs": {"url": f"{config.repository_url}/issues"},
                "keywords": [config.scope, f"{config.scope}-{ctx.raw_name}", *config.keywords],
                "devDependencies": {
                    key: ctx.root_dev_dependencies[key]
                    for key in config.dev_dependency_keys
                    if ctx.root_dev_dependencies.get(key) is not None
                },
            }
        )
        return manifest

    def build_config(self, ctx: GenerationContext) -> dict[str, Any]:
        return {
            "extends": f"{ctx.relative_path_to_packages}{ctx.config.base_tsconfig}",
            "compilerOptions": {"outDir": "lib", "declarationDir": "typings"},
            "include": ["src", "index.ts"],
        }

    def lockfile(self, ctx: GenerationContext) -> dict[str, Any]:
        return {"name": ctx.package_name, "version": ctx.version, "lockfileVersion": LOCKFILE_VERSION}

    def header(self, ctx: GenerationContext) -> str:
        return self._render(HEADERDOC_TEMPLATE, ctx)

    def _render(self, template: str, ctx: GenerationContext) -> str:
        context = {
            "package_name": ctx.package_name,
            "raw_name": ctx.raw_name,
            "author": ctx.author_label,
            "license": ctx.config.license,
        }
        return self.renderer.render_string(template, context)

    @staticmethod
    def _json(relative_path: str, content: dict[str, Any]) -> GeneratedDocument:
        return GeneratedDocument(relative_path=relative_path, kind=DocumentKind.JSON, content=content)

    @staticmethod
    def _text(relative_path: str, content: str, *, parser: str | None = None) -> GeneratedDocument:
        return GeneratedDocument(relative_path=relative_path, content=content, parser=parser)
