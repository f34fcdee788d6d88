import pytest

from nuri.ast import (
    Program, ExpressionStatement, Return, Branch, Block,
    NumberLiteral, BooleanLiteral, StringLiteral, Identifier,
    Prefix, Infix, Assignment, Function, Call,
)
from nuri.errors import MismatchedTokenError, ResourceExhaustedError, UnexpectedTokenError
from nuri.interpreter import parse_program
from nuri.parser import parse
from nuri.position import Range
from nuri.tokens import Token, TokenKind


def shape(node):
    """Strip ranges so trees can be compared structurally."""
    if isinstance(node, Program):
        return [shape(s) for s in node.statements]
    if isinstance(node, ExpressionStatement):
        return shape(node.expression)
    if isinstance(node, Return):
        return ('return', shape(node.expression))
    if isinstance(node, Branch):
        alternative = shape(node.alternative) if node.alternative is not None else None
        return ('if', shape(node.predicate), shape(node.consequence), alternative)
    if isinstance(node, Block):
        return [shape(s) for s in node.statements]
    if isinstance(node, NumberLiteral):
        return node.value
    if isinstance(node, BooleanLiteral):
        return node.value
    if isinstance(node, StringLiteral):
        return ('str', node.value)
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Prefix):
        return (node.op, shape(node.operand))
    if isinstance(node, Infix):
        return (node.op, shape(node.left), shape(node.right))
    if isinstance(node, Assignment):
        return ('=', shape(node.left), shape(node.right))
    if isinstance(node, Function):
        return ('fn', [p.name for p in node.params], shape(node.body))
    if isinstance(node, Call):
        return ('call', shape(node.func), [shape(a) for a in node.args])
    raise TypeError(node)


def parse_one(source):
    program = parse_program(source)
    assert len(program.statements) == 1
    return program.statements[0]


@pytest.mark.parametrize('source, expected', [
    ('x = y = 42', ('=', 'x', ('=', 'y', 42.0))),
    ('11 - 22 - 33', ('-', ('-', 11.0, 22.0), 33.0)),
    ('foo == bar == baz', ('==', 'foo', ('==', 'bar', 'baz'))),
    ('a != b != c', ('!=', 'a', ('!=', 'b', 'c'))),
    ('x <= y == z', ('==', ('<=', 'x', 'y'), 'z')),
    ('x == (y >= z)', ('==', 'x', ('>=', 'y', 'z'))),
    ('a < b < c', ('<', ('<', 'a', 'b'), 'c')),
    ('11+22*33/44-55', ('-', ('+', 11.0, ('/', ('*', 22.0, 33.0), 44.0)), 55.0)),
    ('42*99+12', ('+', ('*', 42.0, 99.0), 12.0)),
    ('12+(34+(56+(78+9)))', ('+', 12.0, ('+', 34.0, ('+', 56.0, ('+', 78.0, 9.0))))),
    ('(12*(34/56))+(7-((8+9)*10))',
     ('+', ('*', 12.0, ('/', 34.0, 56.0)), ('-', 7.0, ('*', ('+', 8.0, 9.0), 10.0)))),
    ('0.75 + 1.25', ('+', 0.75, 1.25)),
    ('-42', ('-', 42.0)),
    ('--42', ('-', ('-', 42.0))),
    ('+42++99', ('+', ('+', 42.0), ('+', 99.0))),
    ('-42+-99', ('+', ('-', 42.0), ('-', 99.0))),
    ('!참 == 거짓', ('==', ('!', True), False)),
    ("'foo bar'", ('str', 'foo bar')),
    ('f(1)(2)', ('call', ('call', 'f', [1.0]), [2.0])),
    ('f()', ('call', 'f', [])),
    ('f(a, b + 1)', ('call', 'f', ['a', ('+', 'b', 1.0)])),
    ('-f(1)', ('-', ('call', 'f', [1.0]))),
    ('x = 1 + 2', ('=', 'x', ('+', 1.0, 2.0))),
    ('a + b = 3', ('=', ('+', 'a', 'b'), 3.0)),
])
def test_expression_shapes(source, expected):
    assert shape(parse_one(source)) == expected


def test_statements_need_no_separator():
    program = parse_program('x = 42 한 = 9 _123 = 123')
    assert shape(program) == [('=', 'x', 42.0), ('=', '한', 9.0), ('=', '_123', 123.0)]


def test_function_literal_and_immediate_call():
    stmt = parse_one('(함수 (x, y) { 결과 x * y })(3, 4)')
    assert shape(stmt) == ('call', ('fn', ['x', 'y'], [('return', ('*', 'x', 'y'))]), [3.0, 4.0])


def test_function_without_parameters():
    assert shape(parse_one('함수 () { 결과 1 }')) == ('fn', [], [('return', 1.0)])


def test_branch_without_alternative_has_none():
    stmt = parse_one('만약 x > 1 { y = 2 }')
    assert isinstance(stmt, Branch)
    assert stmt.alternative is None
    assert shape(stmt) == ('if', ('>', 'x', 1.0), [('=', 'y', 2.0)], None)


def test_branch_with_alternative():
    stmt = parse_one('만약 (참) { 1 } 아니면 { 2 3 }')
    assert shape(stmt) == ('if', True, [1.0], [2.0, 3.0])


def test_empty_program():
    program = parse_program('')
    assert program.statements == ()


# Ranges


def test_literal_range_end_is_last_character():
    assert parse_one('12345').range == Range.of(0, 0, 0, 4)


def test_string_literal_range_covers_quotes():
    assert parse_one("'foo bar'").range == Range.of(0, 0, 0, 8)


def test_infix_range_spans_operands():
    stmt = parse_one('1 + 22')
    assert stmt.range == Range.of(0, 0, 0, 5)
    assert stmt.expression.right.range == Range.of(0, 4, 0, 5)


def test_grouping_takes_the_range_of_the_parentheses():
    infix = parse_one('12+(34+56)').expression
    assert isinstance(infix.right, Infix)
    assert infix.right.range == Range.of(0, 3, 0, 9)
    assert infix.range == Range.of(0, 0, 0, 9)


def test_prefix_range_starts_at_operator():
    assert parse_one('- 42').range == Range.of(0, 0, 0, 3)


def test_call_range_ends_at_closing_paren():
    assert parse_one('f(1, 2)').range == Range.of(0, 0, 0, 6)


def test_statement_ranges_across_lines():
    program = parse_program('x = 1\ny = 22')
    assert program.statements[1].range == Range.of(1, 0, 1, 5)
    assert program.range == Range.of(0, 0, 1, 5)


def test_function_and_block_ranges():
    fn = parse_one('함수 (a) {\n  결과 a\n}').expression
    assert fn.range == Range.of(0, 0, 2, 0)
    assert fn.body.range == Range.of(0, 7, 2, 0)
    assert fn.body.statements[0].range == Range.of(1, 2, 1, 5)


def test_branch_range_ends_at_last_block():
    stmt = parse_one('만약 참 { 1 } 아니면 { 2 }')
    assert stmt.range == Range.of(0, 0, 0, 19)


# Errors


def test_operator_cannot_begin_an_expression():
    with pytest.raises(UnexpectedTokenError) as excinfo:
        parse_program('*3')
    assert excinfo.value.token.kind == TokenKind.STAR
    assert excinfo.value.range == Range.of(0, 0, 0, 0)


def test_dangling_operator_reports_end_of_input():
    with pytest.raises(UnexpectedTokenError) as excinfo:
        parse_program('1 +')
    assert excinfo.value.token.kind == TokenKind.EOF
    assert excinfo.value.range == Range.of(0, 3, 0, 3)


def test_stray_closing_brace():
    with pytest.raises(UnexpectedTokenError):
        parse_program('x = 1 }')


def test_unclosed_group():
    with pytest.raises(MismatchedTokenError) as excinfo:
        parse_program('(1 + 2')
    assert excinfo.value.expected == TokenKind.RPAR


def test_unclosed_block():
    with pytest.raises(MismatchedTokenError) as excinfo:
        parse_program('만약 참 { 1')
    assert excinfo.value.expected == TokenKind.RBRACE
    assert excinfo.value.token.kind == TokenKind.EOF


def test_branch_requires_a_block():
    with pytest.raises(MismatchedTokenError) as excinfo:
        parse_program('만약 참 1')
    assert excinfo.value.expected == TokenKind.LBRACE


def test_trailing_comma_in_parameter_list():
    with pytest.raises(MismatchedTokenError) as excinfo:
        parse_program('함수 (x, ) { 결과 x }')
    assert excinfo.value.expected == TokenKind.IDENT


def test_parameters_must_be_identifiers():
    with pytest.raises(MismatchedTokenError):
        parse_program('함수 (1) { 결과 1 }')


def test_deep_nesting_is_resource_exhaustion():
    source = '(' * 5000 + '1' + ')' * 5000
    with pytest.raises(ResourceExhaustedError):
        parse_program(source)


# Token streams from other sources


def tok(kind, text, col):
    return Token(kind, text, Range.at(0, col))


def test_parse_accepts_any_token_iterable():
    tokens = [
        tok(TokenKind.IDENT, 'a', 0),
        tok(TokenKind.PLUS, '+', 1),
        tok(TokenKind.NUMBER, '2', 2),
        tok(TokenKind.EOF, '', 3),
    ]
    assert shape(parse(tokens)) == [('+', 'a', 2.0)]


def test_missing_eof_token_is_synthesized():
    tokens = iter([tok(TokenKind.NUMBER, '7', 0)])
    program = parse(tokens)
    assert shape(program) == [7.0]
