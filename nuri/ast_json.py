"""JSON serialization/deserialization for Nuri ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes a
dict tagged with `"type"` and carrying its `"range"` as
`[[row, col], [row, col]]`.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Program,
    ExpressionStatement,
    Return,
    Branch,
    Block,
    NumberLiteral,
    BooleanLiteral,
    StringLiteral,
    Identifier,
    Prefix,
    Infix,
    Assignment,
    Function,
    Call,
)
from .position import Position, Range


def range_to_obj(r: Range) -> List[List[int]]:
    return [[r.begin.row, r.begin.col], [r.end.row, r.end.col]]


def range_from_obj(o: List[List[int]]) -> Range:
    (brow, bcol), (erow, ecol) = o
    return Range(Position(brow, bcol), Position(erow, ecol))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    obj = _node_fields(node)
    obj["range"] = range_to_obj(node.range)
    return obj


def _node_fields(node: Any) -> Dict[str, Any]:
    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Return):
        return {"type": "Return", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Branch):
        return {
            "type": "Branch",
            "predicate": ast_to_obj(node.predicate),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, Prefix):
        return {"type": "Prefix", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Infix):
        return {"type": "Infix", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Assignment):
        return {"type": "Assignment", "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "params": [ast_to_obj(p) for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Call):
        return {"type": "Call", "func": ast_to_obj(node.func), "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    rng = range_from_obj(obj["range"])
    if t == "Program":
        return Program(range=rng, statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "ExpressionStatement":
        return ExpressionStatement(range=rng, expression=ast_from_obj(obj["expression"]))
    if t == "Return":
        return Return(range=rng, expression=ast_from_obj(obj["expression"]))
    if t == "Branch":
        return Branch(
            range=rng,
            predicate=ast_from_obj(obj["predicate"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "Block":
        return Block(range=rng, statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "NumberLiteral":
        return NumberLiteral(range=rng, value=float(obj["value"]))
    if t == "BooleanLiteral":
        return BooleanLiteral(range=rng, value=bool(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(range=rng, value=obj["value"])
    if t == "Identifier":
        return Identifier(range=rng, name=obj["name"])
    if t == "Prefix":
        return Prefix(range=rng, op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "Infix":
        return Infix(range=rng, op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Assignment":
        return Assignment(range=rng, left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Function":
        return Function(
            range=rng,
            params=tuple(ast_from_obj(p) for p in obj["params"]),
            body=ast_from_obj(obj["body"]),
        )
    if t == "Call":
        return Call(range=rng, func=ast_from_obj(obj["func"]), args=tuple(ast_from_obj(a) for a in obj["args"]))

    raise ValueError(f"Unknown AST node type: {t}")
