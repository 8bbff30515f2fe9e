"""Tests for the mdBook command-line protocol."""

import io
import json
from pathlib import Path

import pytest

from mathfence.cli import build_parser, main, read_input
from mathfence.errors import PreprocessorError

pytestmark = pytest.mark.usefixtures("reset_mathfence_logger")


def make_input(tmp_path: Path, table: dict, *contents: str) -> io.StringIO:
    context = {
        "root": str(tmp_path),
        "config": {
            "book": {"title": "Test"},
            "preprocessor": {"mathfence": table},
        },
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }
    book = {
        "sections": [
            {"Chapter": {"name": f"c{i}", "content": content, "sub_items": []}}
            for i, content in enumerate(contents)
        ],
        "__non_exhaustive": None,
    }
    return io.StringIO(json.dumps([context, book]))


def run(argv: list[str], stdin: io.StringIO) -> tuple[int, str]:
    stdout = io.StringIO()
    code = main(argv, stdin=stdin, stdout=stdout)
    return code, stdout.getvalue()


class TestSupports:
    def test_supported(self) -> None:
        assert main(["supports", "html"]) == 0

    def test_parser(self) -> None:
        args = build_parser().parse_args(["--log-level", "debug", "-j", "2", "supports", "pdf"])
        assert (args.command, args.renderer, args.log_level, args.jobs) == ("supports", "pdf", "debug", 2)


class TestPreprocess:
    def test_escape_mode(self, tmp_path: Path) -> None:
        stdin = make_input(tmp_path, {"pre-render": False, "no-css": True}, "$a_1$", "plain")
        code, out = run([], stdin)
        assert code == 0
        book = json.loads(out)
        contents = [item["Chapter"]["content"] for item in book["sections"]]
        assert contents == [r"$a\_1$", "plain"]
        assert "__non_exhaustive" in book

    def test_prerender_mode(self, tmp_path: Path) -> None:
        code, out = run([], make_input(tmp_path, {"no-css": True}, "$x^2$"))
        assert code == 0
        content = json.loads(out)["sections"][0]["Chapter"]["content"]
        assert content.startswith("<math")

    def test_non_ascii_kept(self, tmp_path: Path) -> None:
        code, out = run([], make_input(tmp_path, {"pre-render": False, "no-css": True}, "héllo"))
        assert code == 0
        assert "héllo" in out

    def test_jobs(self, tmp_path: Path) -> None:
        stdin = make_input(tmp_path, {"pre-render": False, "no-css": True}, *[f"${i}$" for i in range(20)])
        code, out = run(["-j", "3"], stdin)
        assert code == 0
        contents = [item["Chapter"]["content"] for item in json.loads(out)["sections"]]
        assert contents == [f"${i}$" for i in range(20)]


class TestFailures:
    def test_invalid_json(self) -> None:
        code, out = run([], io.StringIO("not json"))
        assert code == 1
        assert out == ""

    def test_wrong_shape(self) -> None:
        code, out = run([], io.StringIO("[{}]"))
        assert code == 1
        assert out == ""

    def test_config_error(self, tmp_path: Path) -> None:
        code, out = run([], make_input(tmp_path, {"fallback": "explode"}, "$x$"))
        assert code == 1
        assert out == ""

    def test_missing_macro_file(self, tmp_path: Path) -> None:
        code, out = run([], make_input(tmp_path, {"macros": "missing.txt"}, "$x$"))
        assert code == 1
        assert out == ""

    def test_error_logged(self, tmp_path: Path, capsys) -> None:
        run([], make_input(tmp_path, {"fallback": "explode"}, "$x$"))
        assert "fallback" in capsys.readouterr().err


class TestReadInput:
    def test_pair(self) -> None:
        context, book = read_input(io.StringIO('[{"root": "."}, {"sections": []}]'))
        assert context == {"root": "."}
        assert book == {"sections": []}

    @pytest.mark.parametrize("text", ["", "{}", "[1, 2]", "[{}, {}, {}]"])
    def test_rejected(self, text: str) -> None:
        with pytest.raises(PreprocessorError):
            read_input(io.StringIO(text))
