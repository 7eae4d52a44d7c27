"""Unit tests for dbgcmd.repl — the read-parse-print session and its renderers."""
from __future__ import annotations

import io
import json
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from rich.console import Console

from dbgcmd.diagnostics.diagnostics import DiagnosticCollector
from dbgcmd.input.reader import InputReader
from dbgcmd.lexer.lexer import tokenize
from dbgcmd.parser.parser import parse_command, parse_expression
from dbgcmd.repl.render import command_tree, expression_tree, token_table
from dbgcmd.repl.session import ReplConfig, ReplSession, ReplStats


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def scripted(lines: list[str]) -> Callable[[str], str]:
    it: Iterator[str] = iter(lines)

    def _prompt(_prompt_text: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _prompt


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=400, color_system=None), buf


def run_session(lines: list[str], **config: object) -> tuple[ReplStats, str, str]:
    out, out_buf = _console()
    err, err_buf = _console()
    reader = InputReader(prompt_fn=scripted(lines))
    session = ReplSession(reader, console=out, err_console=err, config=ReplConfig(**config))  # type: ignore[arg-type]
    stats = session.run()
    return stats, out_buf.getvalue(), err_buf.getvalue()


def render(renderable: object) -> str:
    console, buf = _console()
    console.print(renderable)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# ReplConfig
# ---------------------------------------------------------------------------


class TestReplConfig:
    def test_defaults(self) -> None:
        config = ReplConfig()
        assert config.prompt == "(dbg) "
        assert config.output_format == "tree"
        assert not config.show_tokens

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            ReplConfig(output_format="xml")


# ---------------------------------------------------------------------------
# ReplSession
# ---------------------------------------------------------------------------


class TestReplSession:
    def test_counts_lines_commands_and_errors(self) -> None:
        stats, _, _ = run_session(["print 1", "", "42", "p 1 @ 2"])
        assert stats.lines == 3
        assert stats.commands == 2
        assert stats.errors == 2

    def test_tree_output(self) -> None:
        _, out, _ = run_session(["print (1 + 2)"])
        assert "Command print 0-4" in out
        assert "BinaryOp ADD (+)" in out
        assert "Integer 1" in out

    def test_text_output(self) -> None:
        _, out, _ = run_session(["print   (1+2)   ~$x"], output_format="text")
        assert out.strip() == "print (1 + 2) ~$x"

    def test_json_output(self) -> None:
        _, out, _ = run_session(["step 3"], output_format="json")
        data = json.loads(out)
        assert data["name"] == "step"
        assert data["arguments"][0]["value"] == 3

    def test_yaml_output(self) -> None:
        _, out, _ = run_session(["step 3"], output_format="yaml")
        assert "kind: Command" in out
        assert "name: step" in out

    def test_errors_are_shown_with_caret(self) -> None:
        _, _, err = run_session(["print (1 + 2"])
        assert "<stdin>:1:7: error: unmatched parentheses" in err
        assert "      ^" in err

    def test_show_tokens(self) -> None:
        _, out, _ = run_session(["p $x"], show_tokens=True)
        assert "VARIABLE" in out
        assert "IDENTIFIER" in out

    def test_quit_stops_reading(self) -> None:
        stats, out, _ = run_session(["p 1", "quit", "p 2"], output_format="text")
        assert stats.commands == 2
        assert "p 2" not in out

    def test_exit_also_stops(self) -> None:
        stats, _, _ = run_session(["exit", "p 2"])
        assert stats.commands == 1

    def test_handle_line_skips_blank_lines(self) -> None:
        out, _ = _console()
        session = ReplSession(InputReader(prompt_fn=scripted([])), console=out, err_console=out)
        assert session.handle_line("   ")
        assert session.stats.lines == 0

    def test_run_closes_redirected_files_on_error(self, tmp_path: Path) -> None:
        script = tmp_path / "cmds.dbg"
        script.write_text("p 1\n", encoding="utf-8")
        reader = InputReader(prompt_fn=scripted([]))
        reader.redirect(script)
        out, _ = _console()
        session = ReplSession(reader, console=out, err_console=out)

        def fail(_line: str) -> bool:
            raise RuntimeError("boom")

        session.handle_line = fail  # type: ignore[method-assign]
        with pytest.raises(RuntimeError, match="boom"):
            session.run()
        assert reader.depth == 0


class TestLongExpressions:
    @pytest.mark.parametrize("output_format", ["tree", "text", "json", "yaml"])
    def test_over_long_chain_is_reported_and_session_continues(self, output_format: str) -> None:
        chain = "print (" + " + ".join(["1"] * 3000) + ")"
        stats, _, err = run_session([chain, "p 2"], output_format=output_format)
        assert "expression nested too deeply" in err
        assert stats.lines == 2
        assert stats.commands == 2
        assert stats.errors >= 1

    @pytest.mark.parametrize("output_format", ["tree", "text", "json", "yaml"])
    def test_chain_within_limit_is_printed(self, output_format: str) -> None:
        chain = "print (" + " + ".join(["1"] * 60) + ")"
        stats, out, err = run_session([chain], output_format=output_format)
        assert err == ""
        assert stats.errors == 0
        assert "print" in out


class TestSourceCommand:
    def test_source_reads_file_then_returns_to_prompt(self, tmp_path: Path) -> None:
        script = tmp_path / "cmds.dbg"
        script.write_text("p 1\np 2\n", encoding="utf-8")
        stats, out, _ = run_session([f'source "{script}"', "p 3"], output_format="text")
        assert out.split() == ["p", "1", "p", "2", "p", "3"]
        assert stats.errors == 0

    def test_errors_in_sourced_file_name_the_file(self, tmp_path: Path) -> None:
        script = tmp_path / "bad.dbg"
        script.write_text("p 1\np )\n", encoding="utf-8")
        _, _, err = run_session([f'source "{script}"'])
        assert f"{script}:2:3: error: unmatched parentheses" in err

    def test_missing_file_is_reported(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.dbg"
        stats, _, err = run_session([f'source "{missing}"'])
        assert "Could not open file" in err
        assert stats.errors == 1

    def test_undecodable_bytes_are_invalid_characters(self, tmp_path: Path) -> None:
        script = tmp_path / "bin.dbg"
        script.write_bytes(b"print \xff\xfe 2\n")
        out, out_buf = _console()
        err, err_buf = _console()
        reader = InputReader(prompt_fn=scripted([f'source "{script}"', "p 3"]))
        session = ReplSession(reader, console=out, err_console=err, config=ReplConfig(output_format="text"))
        stats = session.run()
        assert f"{script}:1:7: error: invalid character in input" in err_buf.getvalue()
        assert out_buf.getvalue().split() == ["print", "2", "p", "3"]
        assert stats.errors == 2
        assert reader.depth == 0

    def test_usage_error(self) -> None:
        stats, _, err = run_session(["source 42"])
        assert 'Usage: source "FILE"' in err
        assert stats.errors == 1

    def test_recursive_source_hits_stack_limit(self, tmp_path: Path) -> None:
        script = tmp_path / "loop.dbg"
        script.write_text(f'source "{script}"\n', encoding="utf-8")
        stats, _, err = run_session([f'source "{script}"'])
        assert "Input redirection stack too deep" in err
        assert stats.errors == 1


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


class TestRenderers:
    def test_command_tree_lists_arguments(self) -> None:
        cmd = parse_command('p "s" 2.5 $v ident', sink=DiagnosticCollector())
        assert cmd is not None
        text = render(command_tree(cmd))
        for label in ("String 's'", "Float 2.5", "Variable $v", "Identifier ident"):
            assert label in text

    def test_expression_tree_nests_operands(self) -> None:
        expr = parse_expression("-(a << 2)", sink=DiagnosticCollector())
        assert expr is not None
        text = render(expression_tree(expr))
        assert text.index("UnaryOp MINUS") < text.index("BinaryOp LEFT_SHIFT") < text.index("Integer 2")

    def test_token_table_includes_eof(self) -> None:
        text = render(token_table(tokenize("p 1")))
        assert "Tokens" in text
        assert "EOF" in text
        assert "2-2" in text

    def test_token_table_highlights_punctuation(self) -> None:
        table = token_table(tokenize("p (1)"))
        assert [row.style for row in table.rows] == [None, "magenta", None, "magenta", None]
