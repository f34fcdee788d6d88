"""Tree-walking evaluator for the Nuri language.

`Evaluator.evaluate(program, env)` walks a `Program` against a root
`Environment` and returns the value of its last statement. Statements
yield either a plain value or a `ReturnValue` marker; blocks stop at the
first marker and hand it upwards, a function call unwraps it, and the
top-level program rejects it.

Scoping rules:

* a fresh scope is created only for a function call, as a child of the
  scope the function was *defined* in (lexical scoping);
* branch arms run in the surrounding scope, so assignments inside
  `만약`/`아니면` blocks are visible afterwards;
* assignment always binds in the current scope, never in an ancestor.
"""

from __future__ import annotations

import math
import sys
from typing import List, Optional, TextIO

from .ast import (
    Program, ExpressionStatement, Return, Branch, Block,
    NumberLiteral, BooleanLiteral, StringLiteral, Identifier,
    Prefix, Infix, Assignment, Function, Call, Node,
)
from .environment import Environment
from .errors import (
    ArityError, BadAssignmentTargetError, BadInfixExpressionError,
    BadPredicateError, BadPrefixExpressionError, MissingReturnError,
    NotCallableError, ResourceExhaustedError, TopLevelReturnError,
    UnboundIdentifierError,
)
from .position import Range
from .values import (
    BooleanValue, EmptyValue, FunctionValue, NumberValue, ReturnValue,
    StringValue, Value, type_name,
)


ARITHMETIC_OPERATORS = ('+', '-', '*', '/')
COMPARISON_OPERATORS = ('==', '!=', '>', '<', '>=', '<=')


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or NaN."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def arithmetic(op: str, a: float, b: float) -> float:
    if op == '+':
        return a + b
    if op == '-':
        return a - b
    if op == '*':
        return a * b
    if op == '/':
        return divide(a, b)
    raise NotImplementedError(f"arithmetic: unexpected operator {op}")


def compare(op: str, a, b) -> bool:
    if op == '==':
        return a == b
    if op == '!=':
        return a != b
    if op == '>':
        return a > b
    if op == '<':
        return a < b
    if op == '>=':
        return a >= b
    if op == '<=':
        return a <= b
    raise NotImplementedError(f"compare: unexpected operator {op}")


class Evaluator:
    """Evaluates Nuri ASTs. Holds no state between calls besides its debug sink."""
    def __init__(self, debug_level: int = 0, debug_fp: Optional[TextIO] = None):
        self.debug_level = debug_level
        self.debug_fp = debug_fp

    def debug(self, msg: str):
        if self.debug_level > 0:
            fp = self.debug_fp if self.debug_fp is not None else sys.stderr
            fp.write(msg + '\n')
            fp.flush()

    # Public API
    def evaluate(self, program: Program, env: Environment) -> Value:
        try:
            return self.evaluate_program(program, env)
        except RecursionError:
            raise ResourceExhaustedError('call stack exhausted during evaluation', program.range) from None

    def evaluate_program(self, node: Program, env: Environment) -> Value:
        last: Optional[Value] = None
        for stmt in node.statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnValue):
                raise TopLevelReturnError(stmt.range)
            if self.debug_level >= 1:
                self.debug(f"statement {stmt.range!r} -> {result.representation}")
            last = result
        if last is None:
            return EmptyValue(node.range)
        return last

    def execute_block(self, node: Block, env: Environment):
        last = None
        for stmt in node.statements:
            result = self.execute(stmt, env)
            # propagate return markers without running the rest of the block
            if isinstance(result, ReturnValue):
                return result
            last = result
        if last is None:
            return EmptyValue(node.range)
        return last

    def execute(self, node: Node, env: Environment):
        if isinstance(node, ExpressionStatement):
            return self.evaluate_expression(node.expression, env)
        if isinstance(node, Return):
            return ReturnValue(self.evaluate_expression(node.expression, env))
        if isinstance(node, Branch):
            pred = self.evaluate_expression(node.predicate, env)
            if not isinstance(pred, BooleanValue):
                raise BadPredicateError(type_name(pred), node.predicate.range)
            if self.debug_level >= 3:
                self.debug(f"branch {node.range!r} predicate -> {pred.representation}")
            # Branch arms share the current scope
            if pred.value:
                return self.execute_block(node.consequence, env)
            if node.alternative is not None:
                return self.execute_block(node.alternative, env)
            return EmptyValue(node.range)
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def evaluate_expression(self, node: Node, env: Environment) -> Value:
        if isinstance(node, NumberLiteral):
            return NumberValue(node.value, node.range)
        if isinstance(node, BooleanLiteral):
            return BooleanValue(node.value, node.range)
        if isinstance(node, StringLiteral):
            return StringValue(node.value, node.range)
        if isinstance(node, Identifier):
            value = env.get(node.name)
            if value is None:
                raise UnboundIdentifierError(node.name, node.range)
            return value
        if isinstance(node, Prefix):
            return self.evaluate_prefix(node, env)
        if isinstance(node, Infix):
            return self.evaluate_infix(node, env)
        if isinstance(node, Assignment):
            if not isinstance(node.left, Identifier):
                raise BadAssignmentTargetError(node.range)
            value = self.evaluate_expression(node.right, env)
            env.set(node.left.name, value)
            if self.debug_level >= 2:
                self.debug(f"bind {node.left.name} = {value.representation}")
            return value
        if isinstance(node, Function):
            return FunctionValue(node.params, node.body, env, node.range)
        if isinstance(node, Call):
            return self.evaluate_call(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def evaluate_prefix(self, node: Prefix, env: Environment) -> Value:
        operand = self.evaluate_expression(node.operand, env)
        if node.op in ('+', '-') and isinstance(operand, NumberValue):
            value = operand.value if node.op == '+' else -operand.value
            return NumberValue(value, node.range)
        if node.op == '!' and isinstance(operand, BooleanValue):
            return BooleanValue(not operand.value, node.range)
        raise BadPrefixExpressionError(node.op, type_name(operand), node.range)

    def evaluate_infix(self, node: Infix, env: Environment) -> Value:
        left = self.evaluate_expression(node.left, env)
        right = self.evaluate_expression(node.right, env)
        op = node.op
        if isinstance(left, NumberValue) and isinstance(right, NumberValue):
            if op in ARITHMETIC_OPERATORS:
                return NumberValue(arithmetic(op, left.value, right.value), node.range)
            if op in COMPARISON_OPERATORS:
                return BooleanValue(compare(op, left.value, right.value), node.range)
        # Comparisons need both sides to be the same comparable type
        comparable = (BooleanValue, StringValue)
        if op in COMPARISON_OPERATORS and type(left) is type(right) and isinstance(left, comparable):
            return BooleanValue(compare(op, left.value, right.value), node.range)
        raise BadInfixExpressionError(op, type_name(left), type_name(right), node.range)

    def evaluate_call(self, node: Call, env: Environment) -> Value:
        func = self.evaluate_expression(node.func, env)
        if not isinstance(func, FunctionValue):
            raise NotCallableError(type_name(func), node.func.range)
        args = [self.evaluate_expression(arg, env) for arg in node.args]
        return self.call_function(func, args, node.range)

    def call_function(self, func: FunctionValue, args: List[Value], call_range: Range) -> Value:
        if len(args) != len(func.params):
            raise ArityError(len(func.params), len(args), call_range)
        if self.debug_level >= 1:
            self.debug(f"call {func!r} with {len(args)} arguments at {call_range!r}")
        # New scope hangs off the defining scope, not the caller's
        call_env = func.environment.child()
        for param, arg in zip(func.params, args):
            call_env.set(param.name, arg)
            if self.debug_level >= 2:
                self.debug(f"bind {param.name} = {arg.representation}")
        res = self.execute_block(func.body, call_env)
        if not isinstance(res, ReturnValue):
            raise MissingReturnError(func.body.range)
        return res.value
