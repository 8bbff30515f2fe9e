"""TeX macro definitions: loading and expansion.

A macro file holds one definition per line::

    \\grad:\\nabla
    \\R:\\mathbb{R}^{#1}

Only lines starting with a backslash are read; each is split on its first
colon. Expansion happens before the math engine sees the source, so every
engine gets the same macro support.
"""

from __future__ import annotations

from pathlib import Path

from mathfence.errors import MacroFileError, RenderError
from mathfence.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_EXPAND = 1000


def parse_macros(text: str, path: str | None = None) -> dict[str, str]:
    """Parse macro definitions.

    Args:
        text: Macro file contents
        path: File path, for error messages only

    Returns:
        Mapping of control sequence (with backslash) to expansion

    Raises:
        MacroFileError: If a definition line has no colon
    """
    macros: dict[str, str] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        # only consider lines starting with a backslash
        if not line.startswith("\\"):
            continue
        name, sep, expansion = line.rstrip("\r").partition(":")
        if not sep:
            raise MacroFileError(f"expected '\\name:expansion', got {line!r}", path, lineno)
        macros[name] = expansion
    return macros


def get_macro_path(root: str | Path, macros_path: str | None) -> Path | None:
    """Absolute path of the macro file, relative paths taken from ``root``."""
    if macros_path is None:
        return None
    return Path(root) / macros_path


def load_macros(root: str | Path, macros_path: str | None) -> dict[str, str]:
    """Load macros from ``root``/``macros_path``.

    Returns an empty mapping when no macro file is configured.

    Raises:
        MacroFileError: If the file cannot be read or is malformed
    """
    path = get_macro_path(root, macros_path)
    if path is None:
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MacroFileError(f"couldn't read macro file: {exc}", str(path)) from exc

    macros = parse_macros(text, str(path))
    logger.debug("Loaded %d macros from %s", len(macros), path)
    return macros


# =============================================================================
# Expansion
# =============================================================================


def _control_sequence_end(source: str, start: int) -> int:
    """End of the control sequence whose backslash is at ``start``.

    A control word is a backslash and a run of ASCII letters; anything
    else after the backslash forms a one-character control symbol.
    """
    pos = start + 1
    source_len = len(source)
    if pos >= source_len:
        return pos
    if not (source[pos].isascii() and source[pos].isalpha()):
        return pos + 1
    while pos < source_len and source[pos].isascii() and source[pos].isalpha():
        pos += 1
    return pos


def _arity(expansion: str) -> int:
    """Highest ``#n`` parameter used in an expansion."""
    arity = 0
    pos = expansion.find("#")
    while pos != -1 and pos + 1 < len(expansion):
        nxt = expansion[pos + 1]
        if nxt == "#":
            pos = expansion.find("#", pos + 2)
            continue
        if "1" <= nxt <= "9":
            arity = max(arity, int(nxt))
        pos = expansion.find("#", pos + 1)
    return arity


def _read_group(source: str, pos: int) -> int:
    """End of the brace group opening at ``pos`` (index after ``}``)."""
    depth = 0
    source_len = len(source)
    while pos < source_len:
        char = source[pos]
        if char == "\\":
            pos += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1
    raise RenderError("unbalanced braces in macro argument", source)


def _read_arguments(source: str, pos: int, count: int) -> tuple[list[str], int]:
    """Read ``count`` undelimited macro arguments starting at ``pos``.

    Returns:
        (arguments, position after the last argument)
    """
    args: list[str] = []
    source_len = len(source)
    for _ in range(count):
        while pos < source_len and source[pos] in " \t\n":
            pos += 1
        if pos >= source_len:
            raise RenderError("missing macro argument", source)
        char = source[pos]
        if char == "{":
            end = _read_group(source, pos)
            args.append(source[pos + 1 : end - 1])
        elif char == "\\":
            end = _control_sequence_end(source, pos)
            args.append(source[pos:end])
        elif char == "}":
            raise RenderError("unexpected '}' where a macro argument was expected", source)
        else:
            end = pos + 1
            args.append(char)
        pos = end
    return args, pos


def _substitute(expansion: str, args: list[str]) -> str:
    """Replace ``#n`` with arguments and ``##`` with ``#``."""
    if "#" not in expansion:
        return expansion
    parts: list[str] = []
    pos = 0
    exp_len = len(expansion)
    while pos < exp_len:
        char = expansion[pos]
        if char == "#" and pos + 1 < exp_len:
            nxt = expansion[pos + 1]
            if nxt == "#":
                parts.append("#")
                pos += 2
                continue
            if "1" <= nxt <= "9" and int(nxt) <= len(args):
                parts.append(args[int(nxt) - 1])
                pos += 2
                continue
        parts.append(char)
        pos += 1
    return "".join(parts)


def expand_macros(
    source: str,
    macros: dict[str, str],
    max_expand: int = DEFAULT_MAX_EXPAND,
) -> str:
    """Expand user macros in a math source.

    Expansions are rescanned, so macros may use other macros. The limit
    always applies: with ``max_expand`` below 1 any expansion fails.

    Example:
        >>> expand_macros(r"\\R{3}", {r"\\R": r"\\mathbb{R}^#1"})
        '\\\\mathbb{R}^3'

    Raises:
        RenderError: On a missing or unbalanced argument, or when more
            than ``max_expand`` expansions happen
    """
    if not macros or "\\" not in source:
        return source

    expansions = 0
    pos = 0
    while True:
        start = source.find("\\", pos)
        if start == -1:
            return source
        name_end = _control_sequence_end(source, start)
        expansion = macros.get(source[start:name_end])
        if expansion is None:
            pos = name_end
            continue

        expansions += 1
        if max_expand < expansions:
            raise RenderError(
                f"too many macro expansions (max-expand = {max_expand}); "
                "is a macro defined in terms of itself?",
                source,
            )
        args, args_end = _read_arguments(source, name_end, _arity(expansion))
        source = source[:start] + _substitute(expansion, args) + source[args_end:]
        pos = start


__all__ = [
    "DEFAULT_MAX_EXPAND",
    "expand_macros",
    "get_macro_path",
    "load_macros",
    "parse_macros",
]
