"""Error types raised by the scanner, the parser and the evaluator.

Every error carries the `Range` of the offending source text. Nothing in
the interpreter catches these; they travel straight to whoever called
`parse_program`/`Evaluator.evaluate` so a front end can report them.
"""

from __future__ import annotations

from .position import Range
from .tokens import Token, TokenKind


class NuriError(Exception):
    """Base class for all errors carrying a source range."""
    def __init__(self, message: str, range: Range):
        super().__init__(
            f"{message} at line {range.begin.row + 1}, column {range.begin.col + 1}"
        )
        self.message = message
        self.range = range

    @property
    def kind(self) -> str:
        return type(self).__name__


class ScanError(NuriError):
    pass


class ResourceExhaustedError(NuriError):
    """Nesting went deeper than the host call stack allows."""


###############################################################################
# Parser errors
###############################################################################


class ParseError(NuriError):
    pass


class UnexpectedTokenError(ParseError):
    """A token that cannot begin an expression appeared where one was expected."""
    def __init__(self, token: Token):
        if token.kind == TokenKind.EOF:
            message = 'unexpected end of input'
        else:
            message = f'unexpected token {token.text!r}'
        super().__init__(message, token.range)
        self.token = token


class MismatchedTokenError(ParseError):
    """A specific token kind was required (closing brace, parameter name, ...)."""
    def __init__(self, expected: TokenKind, token: Token):
        found = 'end of input' if token.kind == TokenKind.EOF else repr(token.text)
        super().__init__(f'expected {expected.name}, got {found}', token.range)
        self.expected = expected
        self.token = token


###############################################################################
# Evaluation errors
###############################################################################


class EvalError(NuriError):
    pass


class TopLevelReturnError(EvalError):
    def __init__(self, range: Range):
        super().__init__('return statement outside of a function body', range)


class BadPredicateError(EvalError):
    def __init__(self, type_name: str, range: Range):
        super().__init__(f'branch predicate must be Boolean, got {type_name}', range)


class BadAssignmentTargetError(EvalError):
    def __init__(self, range: Range):
        super().__init__('left side of an assignment must be an identifier', range)


class BadPrefixExpressionError(EvalError):
    def __init__(self, op: str, type_name: str, range: Range):
        super().__init__(f'unsupported prefix {op} for {type_name}', range)


class BadInfixExpressionError(EvalError):
    def __init__(self, op: str, left: str, right: str, range: Range):
        super().__init__(f'unsupported {op} for {left} and {right}', range)


class UnboundIdentifierError(EvalError):
    def __init__(self, name: str, range: Range):
        super().__init__(f'undefined variable {name}', range)
        self.name = name


class NotCallableError(EvalError):
    def __init__(self, type_name: str, range: Range):
        super().__init__(f'{type_name} is not callable', range)


class MissingReturnError(EvalError):
    def __init__(self, range: Range):
        super().__init__('function body finished without reaching a return statement', range)


class ArityError(EvalError):
    def __init__(self, expected: int, got: int, range: Range):
        super().__init__(f'function expects {expected} arguments, got {got}', range)
        self.expected = expected
        self.got = got

