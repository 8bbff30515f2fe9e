"""mdBook book JSON: reading and writing chapter contents.

mdBook serializes a book as nested items::

    {"sections": [
        {"Chapter": {"name": "Intro", "content": "...", "sub_items": [...]}},
        "Separator",
        {"PartTitle": "Part I"}
    ]}

Newer mdBook releases name the top-level list ``items``. Chapters are
visited depth-first, parents before their sub-chapters, which is the order
mdBook itself uses.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from mathfence.errors import PreprocessorError


def _book_items(book: Any) -> list[Any]:
    if not isinstance(book, dict):
        raise PreprocessorError(f"book must be an object, got {type(book).__name__}")
    for key in ("sections", "items"):
        if key in book:
            items = book[key]
            if not isinstance(items, list):
                raise PreprocessorError(f"book {key!r} must be a list")
            return items
    raise PreprocessorError("book has neither 'sections' nor 'items'")


def _walk(items: list[Any]) -> Iterator[dict[str, Any]]:
    for item in items:
        if not isinstance(item, dict) or "Chapter" not in item:
            # "Separator", {"PartTitle": ...}
            continue
        chapter = item["Chapter"]
        if not isinstance(chapter, dict):
            raise PreprocessorError("chapter must be an object")
        yield chapter
        sub_items = chapter.get("sub_items") or []
        if not isinstance(sub_items, list):
            raise PreprocessorError(f"sub_items of {chapter.get('name')!r} must be a list")
        yield from _walk(sub_items)


def iter_chapters(book: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield chapter objects depth-first."""
    return _walk(_book_items(book))


def collect_chapters(book: dict[str, Any]) -> list[str]:
    """Contents of every chapter, in book order."""
    contents: list[str] = []
    for chapter in iter_chapters(book):
        content = chapter.get("content", "")
        if not isinstance(content, str):
            raise PreprocessorError(f"content of {chapter.get('name')!r} must be a string")
        contents.append(content)
    return contents


def replace_chapters(book: dict[str, Any], contents: list[str]) -> dict[str, Any]:
    """Write ``contents`` back into the book, one per chapter, in book order.

    Raises:
        PreprocessorError: If the number of contents differs from the
            number of chapters
    """
    chapters = list(iter_chapters(book))
    if len(chapters) != len(contents):
        raise PreprocessorError(
            f"chapter number mismatch: book has {len(chapters)}, got {len(contents)} contents"
        )
    for chapter, content in zip(chapters, contents):
        chapter["content"] = content
    return book


__all__ = ["collect_chapters", "iter_chapters", "replace_chapters"]
