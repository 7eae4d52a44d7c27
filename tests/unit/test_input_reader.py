"""Unit tests for dbgcmd.input.reader — line input with nested redirection."""
from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from dbgcmd.input.reader import (
    INTERACTIVE_SOURCE,
    MAX_INPUT_STACK_SIZE,
    InputReader,
    InputRedirectError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def scripted(lines: list[str]) -> Callable[[str], str]:
    """Return a prompt function that replays ``lines`` then raises EOFError."""
    it: Iterator[str] = iter(lines)
    prompts: list[str] = []

    def _prompt(prompt: str) -> str:
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    _prompt.prompts = prompts  # type: ignore[attr-defined]
    return _prompt


def write(path: Path, *lines: str) -> Path:
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Interactive input
# ---------------------------------------------------------------------------


class TestInteractive:
    def test_reads_from_prompt_function(self) -> None:
        prompt_fn = scripted(["print 1"])
        reader = InputReader(prompt_fn=prompt_fn)
        assert reader.read_line("(dbg) ") == "print 1"
        assert prompt_fn.prompts == ["(dbg) "]  # type: ignore[attr-defined]
        assert reader.source == INTERACTIVE_SOURCE
        assert reader.line_number == 1

    def test_end_of_input_returns_none(self) -> None:
        reader = InputReader(prompt_fn=scripted([]))
        assert reader.read_line() is None

    def test_nothing_redirected_initially(self) -> None:
        reader = InputReader(prompt_fn=scripted([]))
        assert reader.depth == 0


# ---------------------------------------------------------------------------
# Redirection
# ---------------------------------------------------------------------------


class TestRedirect:
    def test_file_lines_come_before_prompt(self, tmp_path: Path) -> None:
        script = write(tmp_path / "a.dbg", "first", "second")
        reader = InputReader(prompt_fn=scripted(["typed"]))
        reader.redirect(script)
        assert reader.depth == 1
        assert reader.read_line() == "first"
        assert reader.source == str(script)
        assert reader.line_number == 1
        assert reader.read_line() == "second"
        assert reader.line_number == 2
        assert reader.read_line() == "typed"
        assert reader.source == INTERACTIVE_SOURCE
        assert reader.depth == 0

    def test_nested_redirects_resume_outer_file(self, tmp_path: Path) -> None:
        outer = write(tmp_path / "outer.dbg", "o1", "o2")
        inner = write(tmp_path / "inner.dbg", "i1")
        reader = InputReader(prompt_fn=scripted([]))
        reader.redirect(outer)
        assert reader.read_line() == "o1"
        reader.redirect(inner)
        assert reader.depth == 2
        assert reader.read_line() == "i1"
        assert reader.read_line() == "o2"
        assert reader.source == str(outer)
        assert reader.line_number == 2
        assert reader.read_line() is None

    def test_crlf_line_endings_stripped(self, tmp_path: Path) -> None:
        script = tmp_path / "win.dbg"
        script.write_bytes(b"step\r\nnext\r\n")
        reader = InputReader(prompt_fn=scripted([]))
        reader.redirect(script)
        assert reader.read_line() == "step"
        assert reader.read_line() == "next"

    def test_invalid_utf8_is_replaced(self, tmp_path: Path) -> None:
        script = tmp_path / "bin.dbg"
        script.write_bytes(b"print \xff\xfe 2\nnext\n")
        reader = InputReader(prompt_fn=scripted([]))
        reader.redirect(script)
        assert reader.read_line() == "print \ufffd\ufffd 2"
        assert reader.read_line() == "next"
        assert reader.read_line() is None
        assert reader.depth == 0

    def test_missing_file(self, tmp_path: Path) -> None:
        reader = InputReader(prompt_fn=scripted([]))
        missing = tmp_path / "nope.dbg"
        with pytest.raises(InputRedirectError, match="Could not open file") as excinfo:
            reader.redirect(missing)
        assert excinfo.value.path == str(missing)
        assert reader.depth == 0

    def test_stack_limit(self, tmp_path: Path) -> None:
        script = write(tmp_path / "s.dbg", "x")
        reader = InputReader(prompt_fn=scripted([]), max_depth=2)
        reader.redirect(script)
        reader.redirect(script)
        with pytest.raises(InputRedirectError, match="Input redirection stack too deep"):
            reader.redirect(script)
        reader.close()

    def test_default_stack_limit(self) -> None:
        assert MAX_INPUT_STACK_SIZE == 128

    def test_close_releases_open_files(self, tmp_path: Path) -> None:
        script = write(tmp_path / "s.dbg", "a", "b")
        with InputReader(prompt_fn=scripted([])) as reader:
            reader.redirect(script)
            reader.read_line()
        assert reader.depth == 0


class TestHistory:
    def test_enable_history_reports_availability(self) -> None:
        assert isinstance(InputReader.enable_history(), bool)
