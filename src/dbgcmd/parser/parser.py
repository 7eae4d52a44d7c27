"""Recursive-descent command and expression parser.

Converts the tokens of one input line into a ``Command`` (or a bare
``Expression``) AST.

Expressions
-----------
Binary operators are parsed by precedence climbing over the tables in
``dbgcmd.grammar.operators``: every binary operator is left-associative,
and a right-hand operand absorbs any operators that bind strictly tighter
before it is combined with its left neighbour.  Unary operators are
right-associative and always bind tighter than any binary operator.
Parentheses only group; they never appear in the tree.

Error handling
--------------
The parser does not raise on bad input.  Each syntax error is reported
once, at the point of detection, to a ``DiagnosticSink``, and the failing
sub-parse returns ``None``.  Enclosing parses pass the ``None`` upward
unchanged, so one bad sub-expression produces exactly one diagnostic.

The single exception is the command-argument loop: a failed argument is
dropped, exactly one token is discarded, and parsing resumes with the
next argument.  One malformed argument therefore never costs the user
the well-formed ones that follow it.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from dbgcmd.ast.nodes import (
    BinaryOpExpr,
    Command,
    Expression,
    FloatExpr,
    IdentifierExpr,
    IntegerExpr,
    Span,
    StringExpr,
    UnaryOpcode,
    UnaryOpExpr,
    VariableExpr,
    expression_depth,
)
from dbgcmd.diagnostics.diagnostics import DiagnosticSink, LoggingDiagnosticSink
from dbgcmd.grammar.operators import (
    binary_op_precedence,
    token_type_to_binary_opcode,
    token_type_to_unary_opcode,
)
from dbgcmd.grammar.tokens import Token, TokenType
from dbgcmd.lexer.lexer import decode_string_literal, tokenize
from dbgcmd.parser.errors import SyntaxErrorKind
from dbgcmd.parser.stream import TokenStream

logger = logging.getLogger(__name__)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Every nesting level costs a handful of Python frames; keep well below
# the interpreter's default recursion limit.
DEFAULT_MAX_DEPTH = 128


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for :class:`Parser`.

    Parameters
    ----------
    max_depth:
        Maximum nesting of parenthesized groups and unary operators, and
        maximum height of any expression tree the parser builds (a leaf
        has height 1).  Deeper input is rejected with "expression nested
        too deeply" at the operator that would exceed the limit.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")


def _span_of(tok: Token) -> Span:
    """Build a ``Span`` covering a single token."""
    return Span(start=tok.column_start, end=tok.column_end)


class Parser:
    """Parser for one line of command input.

    Parameters
    ----------
    tokens:
        The token list produced by the lexer, or an existing
        ``TokenStream``.  A missing trailing ``EOF`` is supplied.
    sink:
        Receives every syntax error.  Defaults to a
        ``LoggingDiagnosticSink``.
    config:
        Parser limits; defaults to ``ParserConfig()``.
    """

    def __init__(
        self,
        tokens: Iterable[Token] | TokenStream,
        sink: DiagnosticSink | None = None,
        config: ParserConfig | None = None,
    ) -> None:
        self._stream = tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)
        self._sink: DiagnosticSink = sink if sink is not None else LoggingDiagnosticSink()
        self._config = config if config is not None else ParserConfig()
        self._depth = 0

    @property
    def stream(self) -> TokenStream:
        """The token cursor this parser reads from."""
        return self._stream

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, tok: Token, kind: SyntaxErrorKind) -> None:
        """Report ``kind`` at ``tok`` and return ``None`` for the caller."""
        self._sink.report(kind.value, tok.column_start)
        return None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expression | None:
        """Parse one full expression starting at the current token.

        The stream is primed first if nothing has been read from it yet.
        Tokens after the expression are left unconsumed.

        Returns
        -------
        Expression | None
            The expression tree, or ``None`` after reporting a syntax error.
        """
        if not self._stream.primed:
            self._stream.advance()
        return self._parse_expression()

    def parse_command(self) -> Command | None:
        """Parse a whole line: a command name followed by arguments.

        Advances the stream once to prime it, then consumes through
        ``EOF``.  Each argument is a unary expression; binary operators
        inside an argument must be parenthesized, e.g. ``print (1 + 2)``.

        Returns
        -------
        Command | None
            The command, or ``None`` if the line does not start with a
            command name.  Arguments that failed to parse are left out.
        """
        stream = self._stream
        stream.advance()  # prime

        name_tok = stream.current
        if name_tok.type is not TokenType.IDENTIFIER:
            return self._error(name_tok, SyntaxErrorKind.EXPECTED_COMMAND)
        stream.advance()

        arguments: list[Expression] = []
        while not stream.at_end:
            arg = self._parse_unary_op_expr()
            if arg is not None:
                arguments.append(arg)
                continue
            # Recovery: drop the token that caused the error.
            skipped = stream.current
            logger.debug(
                "Skipping %s %r at column %d after failed argument to %r",
                skipped.type.name,
                skipped.value,
                skipped.column_start,
                name_tok.value,
            )
            stream.advance()

        logger.debug("Parsed command %r with %d argument(s)", name_tok.value, len(arguments))
        return Command(name=name_tok.value, span=_span_of(name_tok), arguments=tuple(arguments))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expression | None:
        """Parse: ``unary_expr { binary_op unary_expr }``"""
        lhs = self._parse_unary_op_expr()
        if lhs is None:
            return None
        return self._parse_binary_op_rhs(0, lhs)

    def _parse_primary_expr(self) -> Expression | None:
        """Parse a literal, name, variable, or parenthesized expression."""
        tok = self._stream.current
        kind = tok.type

        if kind is TokenType.IDENTIFIER:
            self._stream.advance()
            return IdentifierExpr(name=tok.value, span=_span_of(tok))
        if kind is TokenType.INTEGER:
            self._stream.advance()
            value = min(max(int(tok.value), _INT64_MIN), _INT64_MAX)
            return IntegerExpr(value=value, span=_span_of(tok))
        if kind is TokenType.FLOAT:
            self._stream.advance()
            return FloatExpr(value=float(tok.value), span=_span_of(tok))
        if kind is TokenType.STRING:
            self._stream.advance()
            return StringExpr(value=decode_string_literal(tok.value), span=_span_of(tok))
        if kind is TokenType.VARIABLE:
            self._stream.advance()
            return VariableExpr(name=tok.value[1:], span=_span_of(tok))
        if kind is TokenType.OPEN_PAREN:
            return self._parse_paren_expr()
        if kind is TokenType.CLOSE_PAREN:
            return self._error(tok, SyntaxErrorKind.UNMATCHED_PARENTHESES)
        if kind is TokenType.UNKNOWN:
            return self._error(tok, SyntaxErrorKind.INVALID_CHARACTER)
        return self._error(tok, SyntaxErrorKind.EXPECTED_PRIMARY)

    def _parse_paren_expr(self) -> Expression | None:
        """Parse: ``'(' expression ')'``, returning the inner expression."""
        open_paren = self._stream.current
        self._stream.advance()

        expr = self._parse_expression()
        if expr is None:
            return None

        if self._stream.current.type is not TokenType.CLOSE_PAREN:
            # Point at where the group started, not where it should have ended.
            return self._error(open_paren, SyntaxErrorKind.UNMATCHED_PARENTHESES)

        self._stream.advance()
        return expr

    def _parse_unary_op_expr(self) -> Expression | None:
        """Parse: ``unary_op unary_expr | primary_expr``"""
        op_tok = self._stream.current
        if self._depth >= self._config.max_depth:
            return self._error(op_tok, SyntaxErrorKind.NESTING_TOO_DEEP)

        self._depth += 1
        try:
            op = token_type_to_unary_opcode(op_tok.type)
            if op is UnaryOpcode.NONE:
                return self._parse_primary_expr()

            self._stream.advance()

            operand = self._parse_unary_op_expr()
            if operand is None:
                return None

            if expression_depth(operand) >= self._config.max_depth:
                return self._error(op_tok, SyntaxErrorKind.NESTING_TOO_DEEP)

            op_span = _span_of(op_tok)
            return UnaryOpExpr(
                op=op,
                operand=operand,
                span=op_span.merge(operand.span),
                op_span=op_span,
            )
        finally:
            self._depth -= 1

    def _parse_binary_op_rhs(self, expr_precedence: int, lhs: Expression) -> Expression | None:
        """Fold binary operators binding at least ``expr_precedence`` onto ``lhs``."""
        lhs_depth = expression_depth(lhs)
        while True:
            op_tok = self._stream.current
            op = token_type_to_binary_opcode(op_tok.type)
            token_precedence = binary_op_precedence(op)

            # Not an operator, or one the caller at a lower floor must take.
            if token_precedence < expr_precedence:
                return lhs

            self._stream.advance()

            rhs = self._parse_unary_op_expr()
            if rhs is None:
                return None

            next_op = token_type_to_binary_opcode(self._stream.current.type)
            if token_precedence < binary_op_precedence(next_op):
                rhs = self._parse_binary_op_rhs(token_precedence + 1, rhs)
                if rhs is None:
                    return None

            # Left-deep chains are built iteratively, so bound their height here.
            lhs_depth = max(lhs_depth, expression_depth(rhs)) + 1
            if lhs_depth > self._config.max_depth:
                return self._error(op_tok, SyntaxErrorKind.NESTING_TOO_DEEP)

            op_span = _span_of(op_tok)
            lhs = BinaryOpExpr(
                op=op,
                left=lhs,
                right=rhs,
                span=lhs.span.merge(rhs.span).merge(op_span),
                op_span=op_span,
            )


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse_expression(
    line: str,
    sink: DiagnosticSink | None = None,
    config: ParserConfig | None = None,
) -> Expression | None:
    """Tokenize ``line`` and parse one expression from it.

    Parameters
    ----------
    line:
        Expression text, e.g. ``'$sp + 8 * 4'``.
    sink:
        Receives syntax errors; defaults to logging them.
    config:
        Parser limits.

    Returns
    -------
    Expression | None
        The expression, or ``None`` after a syntax error.  Text following
        a complete expression is ignored.

    Example
    -------
    ::

        from dbgcmd.parser import parse_expression
        expr = parse_expression("2 + 3 * 4")
    """
    return Parser(tokenize(line), sink=sink, config=config).parse_expression()


def parse_command(
    line: str,
    sink: DiagnosticSink | None = None,
    config: ParserConfig | None = None,
) -> Command | None:
    """Tokenize ``line`` and parse it as a command.

    Parameters
    ----------
    line:
        A full input line, e.g. ``'print $x (1 << 4)'``.
    sink:
        Receives syntax errors; defaults to logging them.
    config:
        Parser limits.

    Returns
    -------
    Command | None
        The command, or ``None`` if the line does not begin with a
        command name.

    Example
    -------
    ::

        from dbgcmd.parser import parse_command
        cmd = parse_command('print $rax ~0')
    """
    return Parser(tokenize(line), sink=sink, config=config).parse_command()
