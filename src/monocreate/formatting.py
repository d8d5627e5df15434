"""Code-style formatting of generated text documents."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .errors import FormattingError
from .schema import DocumentKind, DocumentSet

LOGGER = logging.getLogger(__name__)

__all__ = [
    "Formatter",
    "PassthroughFormatter",
    "PrettierFormatter",
    "StyleConfig",
    "default_formatter",
    "format_documents",
    "resolve_style_config",
]


STYLE_CONFIG_FILES = (".prettierrc", ".prettierrc.json")


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Formatter options and the file they were read from."""

    path: Path
    options: Mapping[str, Any]


def _load_options(path: Path) -> Mapping[str, Any] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        LOGGER.warning("ignoring unreadable style config %s", path)
        return None
    return data if isinstance(data, dict) else None


def resolve_style_config(cwd: str | Path) -> StyleConfig | None:
    """Find the formatter configuration governing ``cwd``.

    Walks from ``cwd`` up to the filesystem root and returns the first
    ``.prettierrc``/``.prettierrc.json`` file or ``prettier`` key of a
    ``package.json``.
    """

    start = Path(cwd).expanduser().resolve()
    for directory in (start, *start.parents):
        for name in STYLE_CONFIG_FILES:
            candidate = directory / name
            if candidate.is_file():
                options = _load_options(candidate)
                if options is not None:
                    return StyleConfig(path=candidate, options=options)

        manifest = directory / "package.json"
        if manifest.is_file():
            data = _load_options(manifest)
            if data is not None and isinstance(data.get("prettier"), dict):
                return StyleConfig(path=manifest, options=data["prettier"])
    return None


class Formatter(ABC):
    """Service that restyles source text for a given parser."""

    @abstractmethod
    def format(self, text: str, *, parser: str, style_config: StyleConfig | None = None) -> str:
        """Return ``text`` formatted according to ``style_config``."""


class PassthroughFormatter(Formatter):
    """Leave text untouched apart from normalising the final newline."""

    def format(self, text: str, *, parser: str, style_config: StyleConfig | None = None) -> str:
        return text.rstrip("\n") + "\n"


class PrettierFormatter(Formatter):
    """Pipe text through a ``prettier`` executable."""

    def __init__(self, executable: str = "prettier") -> None:
        self.executable = executable

    def format(self, text: str, *, parser: str, style_config: StyleConfig | None = None) -> str:
        command = [self.executable, "--parser", parser]
        if style_config is not None:
            if style_config.path.name == "package.json":
                command.extend(_options_to_flags(style_config.options))
            else:
                command.extend(["--config", str(style_config.path)])

        try:
            result = subprocess.run(
                command,
                input=text,
                capture_output=True,
                check=True,
                text=True,
            )
        except OSError as exc:
            raise FormattingError(f"cannot run {self.executable}") from exc
        except subprocess.CalledProcessError as exc:
            raise FormattingError(f"{self.executable} failed: {exc.stderr.strip()}") from exc
        return result.stdout


def _options_to_flags(options: Mapping[str, Any]) -> list[str]:
    flags: list[str] = []
    for key, value in options.items():
        flag = "--" + "".join(f"-{char.lower()}" if char.isupper() else char for char in key)
        if value is True:
            flags.append(flag)
        elif value is False:
            flags.append(f"--no-{flag[2:]}")
        elif isinstance(value, (str, int, float)):
            flags.extend([flag, str(value)])
    return flags


def default_formatter() -> Formatter:
    """Use prettier when it is installed, otherwise pass text through."""

    executable = shutil.which("prettier")
    if executable is None:
        LOGGER.info("prettier not found on PATH; generated files are left unformatted")
        return PassthroughFormatter()
    return PrettierFormatter(executable)


def format_documents(
    documents: DocumentSet,
    formatter: Formatter,
    style_config: StyleConfig | None = None,
) -> DocumentSet:
    """Return ``documents`` with every hinted text document formatted."""

    formatted: DocumentSet = {}
    for path, document in documents.items():
        if document.kind is DocumentKind.TEXT and document.parser is not None:
            LOGGER.debug("formatting %s with parser=%s", path, document.parser)
            text = formatter.format(str(document.content), parser=document.parser, style_config=style_config)
            document = document.model_copy(update={"content": text})
        formatted[path] = document
    return formatted
