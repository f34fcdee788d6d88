"""Abstract Syntax Tree (AST) definitions for the Nuri language.

The node classes below form a closed set: a `Program` of statements,
three statement kinds, a `Block` shared by function bodies and branch
arms, and nine expression kinds. Nodes are frozen dataclasses; once the
parser hands a tree to its caller it is never mutated. Every node carries
the `Range` of the source text it was parsed from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .position import Range


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    range: Range


###############################################################################
# Expressions
###############################################################################


@dataclass(frozen=True)
class NumberLiteral(Node):
    value: float


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class Prefix(Node):
    op: str  # '+', '-' or '!'
    operand: 'Expression'


@dataclass(frozen=True)
class Infix(Node):
    op: str
    left: 'Expression'
    right: 'Expression'


@dataclass(frozen=True)
class Assignment(Node):
    # Any expression parses here; only Identifier survives evaluation
    left: 'Expression'
    right: 'Expression'


@dataclass(frozen=True)
class Function(Node):
    params: Tuple[Identifier, ...]
    body: 'Block'


@dataclass(frozen=True)
class Call(Node):
    func: 'Expression'
    args: Tuple['Expression', ...]


Expression = Union[
    NumberLiteral, BooleanLiteral, StringLiteral, Identifier,
    Prefix, Infix, Assignment, Function, Call,
]


###############################################################################
# Statements
###############################################################################


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression


@dataclass(frozen=True)
class Return(Node):
    expression: Expression


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple['Statement', ...]


@dataclass(frozen=True)
class Branch(Node):
    predicate: Expression
    consequence: Block
    alternative: Optional[Block] = None


Statement = Union[ExpressionStatement, Return, Branch]


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]
