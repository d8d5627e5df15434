"""Package name validation and identifier casing helpers."""

from __future__ import annotations

import re
from typing import Any, Callable

from .errors import InvalidPackageNameError
from .schema import NameValidation

__all__ = ["require_valid_name", "scoped_name", "to_code_identifier", "validate_package_name"]


MAX_NAME_LENGTH = 214
BLACKLISTED_NAMES = ("node_modules", "favicon.ico")
CORE_MODULE_NAMES = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

# Characters left untouched by JavaScript's encodeURIComponent.
_URL_SAFE = re.compile(r"[A-Za-z0-9\-_.!~*'()]*")
_SCOPED_PACKAGE = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_SPECIAL_CHARACTERS = re.compile(r"[~'!()*]")
_WORD_SEPARATORS = re.compile(r"[\s\-_.]+")
_INVALID_IDENTIFIER = re.compile(r"[^0-9a-zA-Z_$]")


def _is_url_safe(value: str) -> bool:
    return bool(_URL_SAFE.fullmatch(value))


def validate_package_name(name: Any) -> NameValidation:
    """Check ``name`` against the npm registry naming rules.

    Every violated rule is reported, not only the first one. ``errors`` make a
    name unusable for any package while ``warnings`` only block new packages,
    so a name is acceptable here only when both lists are empty.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(name, str):
        errors.append("name must be a string")
        return NameValidation(name=str(name), errors=errors)

    if not name:
        errors.append("name length must be greater than zero")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    for blacklisted in BLACKLISTED_NAMES:
        if name.lower() == blacklisted:
            errors.append(f"{blacklisted} is a blacklisted name")

    if name.lower() in CORE_MODULE_NAMES:
        warnings.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        warnings.append("name can no longer contain capital letters")
    if _SPECIAL_CHARACTERS.search(name.split("/")[-1]):
        warnings.append('name can no longer contain special characters ("~\'!()*")')

    if not _is_url_safe(name):
        match = _SCOPED_PACKAGE.match(name)
        scope_ok = (
            match is not None
            and match.group(1) is not None
            and _is_url_safe(match.group(1))
            and _is_url_safe(match.group(2))
        )
        if not scope_ok:
            errors.append("name can only contain URL-friendly characters")

    return NameValidation(name=name, errors=errors, warnings=warnings)


def require_valid_name(
    name: str,
    validator: Callable[[str], NameValidation] | None = None,
) -> NameValidation:
    """Validate ``name`` and raise :class:`InvalidPackageNameError` if it is unusable.

    ``validator`` replaces :func:`validate_package_name` when given.
    """

    validation = (validator or validate_package_name)(name)
    if not validation.valid_for_new_packages:
        raise InvalidPackageNameError(validation.name, validation.violations)
    return validation


def scoped_name(scope: str, name: str) -> str:
    """Return ``name`` inside the ``@scope`` organisation."""

    return f"@{scope}/{name}"


def _camel_word(word: str, *, first: bool) -> str:
    if word.isupper():
        word = word.lower()
    head = word[0].lower() if first else word[0].upper()
    return head + word[1:]


def to_code_identifier(name: str) -> str:
    """Return a camel-cased JavaScript identifier derived from ``name``.

    ``"json-rpc"`` becomes ``"jsonRpc"``; characters that cannot appear in an
    identifier are dropped and a leading digit is prefixed with ``_``.
    """

    words = [word for word in _WORD_SEPARATORS.split(name.strip()) if word]
    candidate = "".join(_camel_word(word, first=index == 0) for index, word in enumerate(words))
    candidate = _INVALID_IDENTIFIER.sub("", candidate)

    if not candidate:
        return "pkg"

    if candidate[0].isdigit():
        candidate = f"_{candidate}"

    return candidate
