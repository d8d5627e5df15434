"""Placeholder templating used for the generated text documents."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping

from .naming import to_code_identifier

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")
_MISSING_POLICIES = frozenset({"keep", "empty", "error"})


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot evaluate a placeholder."""


def _resolve_value(context: Mapping[str, Any], dotted_path: str) -> Any:
    value: Any = context
    for segment in dotted_path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                raise KeyError(segment)
            value = value[segment]
            continue
        if hasattr(value, segment):
            value = getattr(value, segment)
            continue
        raise KeyError(segment)
    return value


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ placeholder|filters }}`` expressions.

    The default filters cover what the package templates need: ``identifier``
    camel-cases a package name into a code identifier and ``json`` quotes a
    value as a JavaScript string literal.
    """

    filters: MutableMapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.filters:
            self.filters.update(
                {
                    "identifier": lambda value: to_code_identifier(str(value)),
                    "json": lambda value: json.dumps(value),
                    "lower": lambda value: str(value).lower(),
                    "strip": lambda value: str(value).strip(),
                }
            )

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str = "error",
    ) -> str:
        """Render ``template`` using ``context``.

        Parameters
        ----------
        template:
            The template string to evaluate.
        context:
            Mapping providing values for placeholders. Dotted paths descend
            into nested mappings and object attributes.
        missing:
            Controls what happens when a placeholder cannot be resolved:
            ``"error"`` raises :class:`TemplateRenderingError`, ``"keep"``
            leaves the placeholder untouched and ``"empty"`` drops it.
        """

        if missing not in _MISSING_POLICIES:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

        def substitute(match: re.Match[str]) -> str:
            parts = [part.strip() for part in match.group("expression").split("|") if part.strip()]
            if not parts:
                return match.group(0)

            key, *filter_names = parts
            try:
                value = _resolve_value(context, key)
            except KeyError:
                if missing == "keep":
                    return match.group(0)
                if missing == "empty":
                    return ""
                raise TemplateRenderingError(f"missing value for '{key}'")

            for filter_name in filter_names:
                try:
                    filter_func = self.filters[filter_name]
                except KeyError as exc:
                    raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc
                value = filter_func(value)

            return str(value)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)
