"""AST serialization and deserialization.

Provides round-trip serialization of ``Command`` and ``Expression``
trees to and from JSON and YAML.  The serialized form is a plain
dict/list structure that maps naturally to both formats; every node
carries a ``"kind"`` discriminator.

Usage
-----
::

    from dbgcmd.ast.serializer import AstSerializer
    from dbgcmd.parser import parse_command

    serializer = AstSerializer()
    command = parse_command("print (1 + 2)")
    json_text = serializer.to_json(command)
    assert serializer.from_json(json_text) == command
"""
from __future__ import annotations

import json
from enum import Enum
from typing import TypeVar

import yaml

from dbgcmd.ast.nodes import (
    BinaryOpcode,
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
)

_E = TypeVar("_E", bound=Enum)


def _opcode(enum_cls: type[_E], name: object) -> _E:
    """Look up an opcode by name, rejecting unknown names and ``NONE``."""
    if not isinstance(name, str) or name == "NONE" or name not in enum_cls.__members__:
        raise ValueError(f"Unknown {enum_cls.__name__}: {name!r}")
    return enum_cls[name]


class AstSerializer:
    """Converts between AST objects and plain Python dicts."""

    # ------------------------------------------------------------------
    # Serialization (AST → dict)
    # ------------------------------------------------------------------

    def to_dict(self, command: Command) -> dict[str, object]:
        """Serialize a ``Command`` to a JSON-compatible dict."""
        return {
            "kind": "Command",
            "name": command.name,
            "span": self._span_to_dict(command.span),
            "arguments": [self.expression_to_dict(a) for a in command.arguments],
        }

    def _span_to_dict(self, span: Span) -> dict[str, int]:
        return {"start": span.start, "end": span.end}

    def expression_to_dict(self, expr: Expression) -> dict[str, object]:
        """Serialize a single expression tree."""
        if isinstance(expr, IdentifierExpr):
            return {"kind": "Identifier", "name": expr.name, "span": self._span_to_dict(expr.span)}
        if isinstance(expr, IntegerExpr):
            return {"kind": "Integer", "value": expr.value, "span": self._span_to_dict(expr.span)}
        if isinstance(expr, FloatExpr):
            return {"kind": "Float", "value": expr.value, "span": self._span_to_dict(expr.span)}
        if isinstance(expr, StringExpr):
            return {"kind": "String", "value": expr.value, "span": self._span_to_dict(expr.span)}
        if isinstance(expr, VariableExpr):
            return {"kind": "Variable", "name": expr.name, "span": self._span_to_dict(expr.span)}
        if isinstance(expr, UnaryOpExpr):
            return {
                "kind": "UnaryOp",
                "op": expr.op.name,
                "operand": self.expression_to_dict(expr.operand),
                "span": self._span_to_dict(expr.span),
                "op_span": self._span_to_dict(expr.op_span),
            }
        if isinstance(expr, BinaryOpExpr):
            return {
                "kind": "BinaryOp",
                "op": expr.op.name,
                "left": self.expression_to_dict(expr.left),
                "right": self.expression_to_dict(expr.right),
                "span": self._span_to_dict(expr.span),
                "op_span": self._span_to_dict(expr.op_span),
            }
        raise TypeError(f"Unknown expression type: {type(expr)}")

    # ------------------------------------------------------------------
    # Deserialization (dict → AST)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Command:
        """Deserialize a ``Command`` from a plain dict."""
        if data.get("kind") != "Command":
            raise ValueError(f"Expected a Command, got kind {data.get('kind')!r}")
        return Command(
            name=data["name"],
            span=self._span_from_dict(data["span"]),
            arguments=tuple(self.expression_from_dict(a) for a in data.get("arguments", [])),
        )

    def _span_from_dict(self, d: dict[str, int]) -> Span:
        return Span(start=d["start"], end=d["end"])

    def expression_from_dict(self, d: dict[str, object]) -> Expression:
        """Deserialize a single expression tree."""
        kind = d["kind"]
        span = self._span_from_dict(d["span"])
        if kind == "Identifier":
            return IdentifierExpr(name=d["name"], span=span)
        if kind == "Integer":
            return IntegerExpr(value=int(d["value"]), span=span)
        if kind == "Float":
            return FloatExpr(value=float(d["value"]), span=span)
        if kind == "String":
            return StringExpr(value=d["value"], span=span)
        if kind == "Variable":
            return VariableExpr(name=d["name"], span=span)
        if kind == "UnaryOp":
            return UnaryOpExpr(
                op=_opcode(UnaryOpcode, d["op"]),
                operand=self.expression_from_dict(d["operand"]),
                span=span,
                op_span=self._span_from_dict(d["op_span"]),
            )
        if kind == "BinaryOp":
            return BinaryOpExpr(
                op=_opcode(BinaryOpcode, d["op"]),
                left=self.expression_from_dict(d["left"]),
                right=self.expression_from_dict(d["right"]),
                span=span,
                op_span=self._span_from_dict(d["op_span"]),
            )
        raise ValueError(f"Unknown expression kind: {kind!r}")

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, command: Command, indent: int = 2) -> str:
        """Serialize a ``Command`` to a JSON string."""
        return json.dumps(self.to_dict(command), indent=indent, ensure_ascii=False)

    def expression_to_json(self, expr: Expression, indent: int = 2) -> str:
        """Serialize a bare expression to a JSON string."""
        return json.dumps(self.expression_to_dict(expr), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Command:
        """Deserialize a ``Command`` from a JSON string."""
        data: dict[str, object] = json.loads(text)
        return self.from_dict(data)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, command: Command) -> str:
        """Serialize a ``Command`` to a YAML string."""
        return yaml.dump(self.to_dict(command), default_flow_style=False, allow_unicode=True, sort_keys=False)

    def from_yaml(self, text: str) -> Command:
        """Deserialize a ``Command`` from a YAML string."""
        data: dict[str, object] = yaml.safe_load(text)
        return self.from_dict(data)
