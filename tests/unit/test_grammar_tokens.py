"""Unit tests for dbgcmd.grammar.tokens — token types and spellings."""
from __future__ import annotations

import dataclasses

import pytest

from dbgcmd.grammar.tokens import OPERATORS, SPELLINGS, Token, TokenType


class TestOperatorTable:
    def test_two_character_spellings_come_first(self) -> None:
        lengths = [len(text) for text in OPERATORS]
        assert lengths == sorted(lengths, reverse=True)

    def test_spellings_is_inverse_of_operators(self) -> None:
        for text, token_type in OPERATORS.items():
            assert SPELLINGS[token_type] == text

    def test_every_spelling_is_unique(self) -> None:
        assert len(set(OPERATORS.values())) == len(OPERATORS)

    def test_literal_types_have_no_spelling(self) -> None:
        for token_type in (TokenType.IDENTIFIER, TokenType.INTEGER, TokenType.EOF):
            assert token_type not in SPELLINGS


class TestToken:
    def test_repr_shows_type_value_and_columns(self) -> None:
        tok = Token(TokenType.IDENTIFIER, "print", 0, 4)
        assert repr(tok) == "Token(IDENTIFIER, 'print', 0-4)"

    def test_is_frozen(self) -> None:
        tok = Token(TokenType.INTEGER, "1", 0, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tok.value = "2"  # type: ignore[misc]

    def test_is_punctuation(self) -> None:
        assert Token(TokenType.PLUS, "+", 0, 0).is_punctuation
        assert Token(TokenType.OPEN_PAREN, "(", 0, 0).is_punctuation
        assert not Token(TokenType.STRING, '"x"', 0, 2).is_punctuation

    def test_equality_is_by_value(self) -> None:
        assert Token(TokenType.EOF, "", 3, 3) == Token(TokenType.EOF, "", 3, 3)
