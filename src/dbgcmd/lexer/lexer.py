"""Command-line lexer: converts one input line into a flat list of tokens.

The lexer is a single-pass character scanner.  It never raises: any
character that cannot begin a token is emitted as an ``UNKNOWN`` token so
that the parser can report "invalid character in input" at the right
column and its argument-level recovery can skip past it.  An unterminated
string literal is likewise emitted as a single ``UNKNOWN`` token running
to the end of the line.

Token shapes:
    - identifiers ``[A-Za-z_][A-Za-z0-9_]*``
    - variables ``$`` followed by one or more word characters
    - integers ``[0-9]+``; floats add a fraction and/or an exponent
    - double-quoted strings with ``\\n``, ``\\t``, ``\\r``, ``\\\\``,
      ``\\"`` and ``\\0`` escapes (token text keeps the quotes)
    - the operators and parentheses listed in ``OPERATORS``

A ``-`` sign is never part of a numeric literal; it is handled by the
parser as a unary operator.
"""
from __future__ import annotations

import re
from typing import Final

from dbgcmd.grammar.tokens import OPERATORS, Token, TokenType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_IDENT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_VARIABLE: Final[re.Pattern[str]] = re.compile(r"\$[A-Za-z0-9_]+")
_NUMBER: Final[re.Pattern[str]] = re.compile(
    r"(?P<int>[0-9]+)(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?"
)
_WHITESPACE: Final[frozenset[str]] = frozenset(" \t\r\n\f\v")
_DIGITS: Final[frozenset[str]] = frozenset("0123456789")

_MAX_OPERATOR_LENGTH: Final[int] = max(len(text) for text in OPERATORS)

_ESCAPE_MAP: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "0": "\0",
}


class Lexer:
    """Single-pass lexer for one line of command input.

    Parameters
    ----------
    line:
        The input line, without its trailing newline.
    """

    __slots__ = ("_line", "_pos", "_tokens")

    def __init__(self, line: str) -> None:
        self._line: str = line
        self._pos: int = 0
        self._tokens: list[Token] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the whole line and return its tokens.

        Returns
        -------
        list[Token]
            Ordered tokens, always terminated by exactly one ``EOF`` token
            positioned at column ``len(line)``.
        """
        while self._pos < len(self._line):
            self._scan_one()
        end = len(self._line)
        self._tokens.append(Token(TokenType.EOF, "", end, end))
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _emit(self, token_type: TokenType, start: int) -> None:
        """Append a token covering ``[start, pos)`` and leave pos after it."""
        self._tokens.append(
            Token(
                type=token_type,
                value=self._line[start:self._pos],
                column_start=start,
                column_end=self._pos - 1,
            )
        )

    def _scan_one(self) -> None:
        """Scan exactly one token (or skip one whitespace character)."""
        start = self._pos
        ch = self._line[start]

        if ch in _WHITESPACE:
            self._pos += 1
            return

        if ch == '"':
            self._scan_string(start)
            return

        if ch == "$":
            match = _VARIABLE.match(self._line, start)
            if match is None:
                self._pos += 1
                self._emit(TokenType.UNKNOWN, start)
                return
            self._pos = match.end()
            self._emit(TokenType.VARIABLE, start)
            return

        if ch in _DIGITS:
            self._scan_number(start)
            return

        match = _IDENT.match(self._line, start)
        if match is not None:
            self._pos = match.end()
            self._emit(TokenType.IDENTIFIER, start)
            return

        # Operators: try the longest spelling first.
        for length in range(_MAX_OPERATOR_LENGTH, 0, -1):
            text = self._line[start:start + length]
            if text in OPERATORS:
                self._pos = start + length
                self._emit(OPERATORS[text], start)
                return

        self._pos += 1
        self._emit(TokenType.UNKNOWN, start)

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _scan_number(self, start: int) -> None:
        """Consume an integer or float literal."""
        match = _NUMBER.match(self._line, start)
        assert match is not None  # caller checked for a leading digit
        self._pos = match.end()
        is_float = match.group("frac") is not None or match.group("exp") is not None
        self._emit(TokenType.FLOAT if is_float else TokenType.INTEGER, start)

    def _scan_string(self, start: int) -> None:
        """Consume a double-quoted string literal, honouring backslash escapes."""
        self._pos += 1  # opening "
        while self._pos < len(self._line):
            ch = self._line[self._pos]
            if ch == "\\":
                self._pos += 2
                continue
            self._pos += 1
            if ch == '"':
                self._emit(TokenType.STRING, start)
                return
        # Unterminated: everything up to the end of the line is one bad token.
        self._pos = len(self._line)
        self._emit(TokenType.UNKNOWN, start)


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def decode_string_literal(raw: str) -> str:
    """Return the value of a STRING token, given its raw quoted text.

    Parameters
    ----------
    raw:
        Token text including the surrounding double quotes.

    Returns
    -------
    str
        The contents with escape sequences resolved.  Unrecognised escapes
        are kept verbatim, backslash included.
    """
    body = raw[1:-1]
    buf: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            esc = body[i + 1]
            if esc in _ESCAPE_MAP:
                buf.append(_ESCAPE_MAP[esc])
            else:
                buf.append("\\")
                buf.append(esc)
            i += 2
            continue
        buf.append(ch)
        i += 1
    return "".join(buf)


def tokenize(line: str) -> list[Token]:
    """Tokenize one line of command input.

    Parameters
    ----------
    line:
        Command text such as ``'print $x + 1'``.

    Returns
    -------
    list[Token]
        All tokens, terminated by ``EOF``.

    Example
    -------
    ::

        from dbgcmd.lexer import tokenize
        tokens = tokenize('set $counter 10')
    """
    return Lexer(line).tokenize()
