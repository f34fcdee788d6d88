"""Parser for the Nuri language.

A recursive-descent parser for statements with Pratt-style precedence
climbing for expressions. Tokens are pulled from the scanner one at a
time; the parser only ever looks at the current token to choose a
production.

Expression binding powers, lowest to highest:

    =                        10  right-associative
    == !=                    20  right-associative
    < > <= >=                20  left-associative
    + -                      30  left-associative
    * /                      40  left-associative
    prefix + - !             50
    call f(...)              60

`==`/`!=` and the relational operators share one tier, so
`x <= y == z` groups as `(x <= y) == z` while `a == b == c` groups as
`a == (b == c)`.

Parsing fails on the first offense with a `ParseError` subclass; there
is no recovery.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .ast import (
    Program, ExpressionStatement, Return, Branch, Block,
    NumberLiteral, BooleanLiteral, StringLiteral, Identifier,
    Prefix, Infix, Assignment, Function, Call, Expression, Statement,
)
from .errors import (
    MismatchedTokenError, ResourceExhaustedError, UnexpectedTokenError,
)
from .position import Position, Range
from .tokens import Token, TokenKind


# operator -> (binding power, right-associative)
INFIX_OPERATORS: Dict[TokenKind, Tuple[int, bool]] = {
    TokenKind.ASSIGN: (10, True),
    TokenKind.EQ: (20, True),
    TokenKind.NEQ: (20, True),
    TokenKind.LT: (20, False),
    TokenKind.GT: (20, False),
    TokenKind.LTE: (20, False),
    TokenKind.GTE: (20, False),
    TokenKind.PLUS: (30, False),
    TokenKind.MINUS: (30, False),
    TokenKind.STAR: (40, False),
    TokenKind.SLASH: (40, False),
}

PREFIX_OPERATORS = {TokenKind.PLUS, TokenKind.MINUS, TokenKind.BANG}
PREFIX_BINDING_POWER = 50
CALL_BINDING_POWER = 60


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: Iterator[Token] = iter(tokens)
        self.current: Optional[Token] = None
        self.advance()

    # Token navigation

    def advance(self) -> Token:
        """Consume the current token and pull the next one from the stream."""
        prev = self.current
        if prev is not None and prev.kind == TokenKind.EOF:
            return prev
        nxt = next(self.tokens, None)
        if nxt is None:
            # Stream ran dry without an EOF token; synthesize one
            end = prev.range.end if prev is not None else Position(0, 0)
            nxt = Token(TokenKind.EOF, '', Range(end, end))
        self.current = nxt
        return prev

    def match(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def consume(self, kind: TokenKind) -> Token:
        token = self.current
        if token.kind != kind:
            raise MismatchedTokenError(kind, token)
        self.advance()
        return token

    # Statements

    def parse_program(self) -> Program:
        start = self.current
        try:
            statements = self.parse_statements(TokenKind.EOF)
        except RecursionError:
            raise ResourceExhaustedError('program is nested too deeply to parse', self.current.range) from None
        if statements:
            rng = Range.span(statements[0].range, statements[-1].range)
        else:
            rng = start.range
        return Program(range=rng, statements=tuple(statements))

    def parse_statements(self, terminator: TokenKind) -> List[Statement]:
        statements: List[Statement] = []
        while not self.match(terminator):
            if self.match(TokenKind.EOF):
                # Only reachable inside a block: the closing brace never came
                raise MismatchedTokenError(terminator, self.current)
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self) -> Statement:
        if self.match(TokenKind.RETURN):
            return self.parse_return()
        if self.match(TokenKind.IF):
            return self.parse_branch()
        expression = self.parse_expression()
        return ExpressionStatement(range=expression.range, expression=expression)

    def parse_return(self) -> Return:
        keyword = self.consume(TokenKind.RETURN)
        expression = self.parse_expression()
        return Return(range=Range.span(keyword.range, expression.range), expression=expression)

    def parse_branch(self) -> Branch:
        keyword = self.consume(TokenKind.IF)
        predicate = self.parse_expression()
        consequence = self.parse_block()
        alternative = None
        last = consequence
        if self.match(TokenKind.ELSE):
            self.consume(TokenKind.ELSE)
            alternative = self.parse_block()
            last = alternative
        return Branch(
            range=Range.span(keyword.range, last.range),
            predicate=predicate,
            consequence=consequence,
            alternative=alternative,
        )

    def parse_block(self) -> Block:
        lbrace = self.consume(TokenKind.LBRACE)
        statements = self.parse_statements(TokenKind.RBRACE)
        rbrace = self.consume(TokenKind.RBRACE)
        return Block(range=Range.span(lbrace.range, rbrace.range), statements=tuple(statements))

    # Expressions (Pratt parser)

    def parse_expression(self, min_bp: int = 0) -> Expression:
        left = self.parse_prefix()
        while True:
            kind = self.current.kind
            if kind == TokenKind.LPAR and CALL_BINDING_POWER > min_bp:
                left = self.parse_call(left)
                continue
            if kind not in INFIX_OPERATORS:
                break
            bp, right_assoc = INFIX_OPERATORS[kind]
            if bp <= min_bp:
                break
            op_token = self.advance()
            right = self.parse_expression(bp - 1 if right_assoc else bp)
            rng = Range.span(left.range, right.range)
            if kind == TokenKind.ASSIGN:
                left = Assignment(range=rng, left=left, right=right)
            else:
                left = Infix(range=rng, op=op_token.text, left=left, right=right)
        return left

    def parse_prefix(self) -> Expression:
        token = self.current
        kind = token.kind
        if kind in PREFIX_OPERATORS:
            self.advance()
            operand = self.parse_expression(PREFIX_BINDING_POWER)
            return Prefix(range=Range.span(token.range, operand.range), op=token.text, operand=operand)
        if kind == TokenKind.NUMBER:
            self.advance()
            return NumberLiteral(range=token.range, value=float(token.text))
        if kind == TokenKind.STRING:
            self.advance()
            return StringLiteral(range=token.range, value=token.text)
        if kind in (TokenKind.TRUE, TokenKind.FALSE):
            self.advance()
            return BooleanLiteral(range=token.range, value=kind == TokenKind.TRUE)
        if kind == TokenKind.IDENT:
            self.advance()
            return Identifier(range=token.range, name=token.text)
        if kind == TokenKind.FUNCTION:
            return self.parse_function()
        if kind == TokenKind.LPAR:
            # Grouping: the inner node keeps its shape but takes the parens' range
            lpar = self.advance()
            inner = self.parse_expression()
            rpar = self.consume(TokenKind.RPAR)
            return replace(inner, range=Range.span(lpar.range, rpar.range))
        raise UnexpectedTokenError(token)

    def parse_function(self) -> Function:
        keyword = self.consume(TokenKind.FUNCTION)
        self.consume(TokenKind.LPAR)
        params: List[Identifier] = []
        if not self.match(TokenKind.RPAR):
            params.append(self.parse_parameter())
            while self.match(TokenKind.COMMA):
                self.consume(TokenKind.COMMA)
                params.append(self.parse_parameter())
        self.consume(TokenKind.RPAR)
        body = self.parse_block()
        return Function(range=Range.span(keyword.range, body.range), params=tuple(params), body=body)

    def parse_parameter(self) -> Identifier:
        token = self.consume(TokenKind.IDENT)
        return Identifier(range=token.range, name=token.text)

    def parse_call(self, func: Expression) -> Call:
        self.consume(TokenKind.LPAR)
        args: List[Expression] = []
        if not self.match(TokenKind.RPAR):
            args.append(self.parse_expression())
            while self.match(TokenKind.COMMA):
                self.consume(TokenKind.COMMA)
                args.append(self.parse_expression())
        rpar = self.consume(TokenKind.RPAR)
        return Call(range=Range.span(func.range, rpar.range), func=func, args=tuple(args))


def parse(tokens: Iterable[Token]) -> Program:
    """Parse a token stream into a Program AST."""
    return Parser(tokens).parse_program()
