"""Command line interface for creating workspace packages."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, NoReturn, Sequence

from .reporting import ConsoleReporter
from .scaffold import create_package
from .schema import PackageRequest

COMMAND_NAME = "create"


class _ReportingParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors without a failing exit status.

    Wrapping tools such as ``npm run`` print a large error of their own for a
    non-zero status, so argument errors end the process with status ``0``.
    """

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        print(file=sys.stderr)
        print(f"ERROR! {message}", file=sys.stderr)
        raise SystemExit(0)


def resolve_argv(argv: Sequence[str] | None, env: Mapping[str, str]) -> list[str]:
    """Return the arguments to parse, always starting with the command name.

    ``npm run create <name>`` exposes its original arguments through
    ``npm_config_argv``, which already starts with the command name; otherwise
    the command name is prepended to the process arguments, so a package may
    itself be called ``create``.
    """

    if argv is None:
        npm_argv = env.get("npm_config_argv")
        if npm_argv:
            try:
                original = json.loads(npm_argv)["original"]
            except (ValueError, KeyError, TypeError):
                original = None
            if isinstance(original, list) and original:
                return [str(arg) for arg in original[1:]]
        argv = sys.argv[1:]

    return [COMMAND_NAME, *argv]


def build_parser() -> argparse.ArgumentParser:
    parser = _ReportingParser(prog="monocreate", description="Create packages inside a monorepo workspace")
    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=_ReportingParser)

    create_parser = subparsers.add_parser(COMMAND_NAME, help="create a new package with the provided name")
    create_parser.add_argument("name", help="The name for the new package")
    create_parser.add_argument(
        "-f",
        "--folder",
        help="Optional override for the folder name of the package instead of using <name>",
    )
    create_parser.add_argument(
        "-w",
        "--workspace",
        type=Path,
        default=Path.cwd(),
        help="Root of the monorepo holding LICENSE, package.json and the packages directory",
    )
    create_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def _handle_create(args: argparse.Namespace) -> int:
    request = PackageRequest(raw_name=args.name, folder=args.folder)
    create_package(request, args.workspace, reporter=ConsoleReporter())
    return 0


def main(argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    environment: Mapping[str, str] = env if env is not None else os.environ
    parser = build_parser()
    args = parser.parse_args(resolve_argv(argv, environment))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return _handle_create(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
