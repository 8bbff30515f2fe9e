"""Command-line entry point implementing the mdBook preprocessor protocol.

mdBook runs the preprocessor twice:

- ``mathfence supports <renderer>``: exit status 0 if the renderer is
  supported, 1 otherwise.
- ``mathfence``: ``[context, book]`` JSON on stdin, processed book JSON on
  stdout.

Logs go to stderr; stdout carries only the book.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, TextIO

from mathfence.errors import MathfenceError, PreprocessorError
from mathfence.preprocess import MathPreprocessor
from mathfence.utils.logger import LOG_ENV_VAR, configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathfence",
        description="mdBook preprocessor rendering math to MathML or escaping it for KaTeX.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"DEBUG, INFO, WARNING or ERROR (default: ${LOG_ENV_VAR} or INFO)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="number of chapter worker threads",
    )
    subparsers = parser.add_subparsers(dest="command")
    supports = subparsers.add_parser(
        "supports",
        help="check whether a renderer is supported by this preprocessor",
    )
    supports.add_argument("renderer")
    return parser


def read_input(stream: TextIO) -> tuple[dict[str, Any], dict[str, Any]]:
    """Read the ``[context, book]`` pair mdBook writes to stdin.

    Raises:
        PreprocessorError: If the input is not a JSON pair of objects
    """
    try:
        data = json.load(stream)
    except json.JSONDecodeError as exc:
        raise PreprocessorError(f"input is not valid JSON: {exc}") from exc

    if (
        not isinstance(data, list)
        or len(data) != 2
        or not all(isinstance(part, dict) for part in data)
    ):
        raise PreprocessorError("expected a JSON array [context, book] on stdin")
    context, book = data
    return context, book


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run the preprocessor. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    preprocessor = MathPreprocessor(max_workers=args.jobs)

    if args.command == "supports":
        supported = preprocessor.supports_renderer(args.renderer)
        if not supported:
            logger.info("Renderer %r is not supported", args.renderer)
        return 0 if supported else 1

    try:
        context, book = read_input(stdin or sys.stdin)
        logger.debug(
            "mdBook %s, renderer %s",
            context.get("mdbook_version", "?"),
            context.get("renderer", "?"),
        )
        processed = preprocessor.run(context, book)
    except MathfenceError as exc:
        logger.error("%s", exc)
        return 1

    out = stdout or sys.stdout
    json.dump(processed, out, ensure_ascii=False)
    out.flush()
    return 0
