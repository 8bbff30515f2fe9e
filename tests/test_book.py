"""Tests for reading and writing mdBook book JSON."""

import pytest

from mathfence.book import collect_chapters, iter_chapters, replace_chapters
from mathfence.errors import PreprocessorError


def chapter(name: str, content: str, sub_items: list | None = None) -> dict:
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": f"{name}.md",
            "source_path": f"{name}.md",
            "parent_names": [],
        }
    }


@pytest.fixture
def book() -> dict:
    return {
        "sections": [
            chapter("intro", "A"),
            "Separator",
            {"PartTitle": "Part I"},
            chapter("one", "B", [chapter("one-a", "C", [chapter("deep", "D")]), chapter("one-b", "E")]),
            chapter("two", "F"),
        ],
        "__non_exhaustive": None,
    }


class TestCollect:
    def test_depth_first_order(self, book: dict) -> None:
        assert collect_chapters(book) == ["A", "B", "C", "D", "E", "F"]

    def test_names(self, book: dict) -> None:
        names = [c["name"] for c in iter_chapters(book)]
        assert names == ["intro", "one", "one-a", "deep", "one-b", "two"]

    def test_items_key(self) -> None:
        assert collect_chapters({"items": [chapter("a", "x")]}) == ["x"]

    def test_empty_book(self) -> None:
        assert collect_chapters({"sections": []}) == []

    def test_draft_chapter_without_content(self) -> None:
        draft = {"Chapter": {"name": "draft", "sub_items": []}}
        assert collect_chapters({"sections": [draft]}) == [""]


class TestReplace:
    def test_round_trip(self, book: dict) -> None:
        contents = [c.lower() for c in collect_chapters(book)]
        replace_chapters(book, contents)
        assert collect_chapters(book) == ["a", "b", "c", "d", "e", "f"]
        assert book["sections"][1] == "Separator"
        assert book["__non_exhaustive"] is None

    def test_count_mismatch(self, book: dict) -> None:
        with pytest.raises(PreprocessorError, match="mismatch"):
            replace_chapters(book, ["only one"])


class TestMalformed:
    @pytest.mark.parametrize(
        "book",
        [
            [],
            {},
            {"sections": "nope"},
            {"sections": [{"Chapter": "nope"}]},
            {"sections": [{"Chapter": {"name": "x", "content": 3}}]},
            {"sections": [{"Chapter": {"name": "x", "content": "", "sub_items": 1}}]},
        ],
    )
    def test_rejected(self, book) -> None:
        with pytest.raises(PreprocessorError):
            collect_chapters(book)
