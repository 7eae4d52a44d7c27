"""Forward-only token cursor used by the parser.

The stream starts *unprimed*: there is no current token until the first
``advance()``.  This mirrors how a command parse begins by priming the
stream, and lets a caller hand over a fresh stream without the parser
having to guess whether the first token was already looked at.

The cursor never moves past the final ``EOF`` token, so a parser that
keeps consuming at the end of the line simply stays on ``EOF``.
"""
from __future__ import annotations

from collections.abc import Iterable

from dbgcmd.grammar.tokens import Token, TokenType


class TokenStream:
    """Cursor over a token sequence terminated by ``EOF``.

    Parameters
    ----------
    tokens:
        Tokens for one input line.  An ``EOF`` token is appended if the
        sequence does not already end with one.
    """

    __slots__ = ("_tokens", "_pos")

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: list[Token] = list(tokens)
        if not self._tokens or self._tokens[-1].type is not TokenType.EOF:
            end = self._tokens[-1].column_end + 1 if self._tokens else 0
            self._tokens.append(Token(TokenType.EOF, "", end, end))
        self._pos: int = -1

    @property
    def primed(self) -> bool:
        """Return True once ``advance()`` has been called at least once."""
        return self._pos >= 0

    @property
    def current(self) -> Token:
        """Return the current token.

        Raises
        ------
        RuntimeError
            If the stream has not been primed yet.
        """
        if self._pos < 0:
            raise RuntimeError("token stream has not been primed; call advance() first")
        return self._tokens[self._pos]

    @property
    def at_end(self) -> bool:
        """Return True if the current token is ``EOF``."""
        return self.current.type is TokenType.EOF

    def advance(self) -> Token:
        """Move to the next token (staying on ``EOF``) and return it."""
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return self._tokens[self._pos]

    def __len__(self) -> int:
        return len(self._tokens)
