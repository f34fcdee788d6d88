import json

import pytest

from nuri.ast_json import ast_from_obj, ast_to_obj
from nuri.interpreter import Interpreter, parse_program


SOURCE = """\
분류 = 함수 (a, b) {
  만약 a > b { 결과 'big' } 아니면 { 결과 -a + b / 2 }
}
분류(1, 참 == 거짓)
"""


def test_round_trip_through_json_text():
    program = parse_program(SOURCE)
    text = json.dumps(ast_to_obj(program), ensure_ascii=False)
    assert ast_from_obj(json.loads(text)) == program


def test_nodes_carry_type_and_range():
    obj = ast_to_obj(parse_program('x = 42'))
    assert obj['type'] == 'Program'
    assignment = obj['statements'][0]['expression']
    assert assignment['type'] == 'Assignment'
    assert assignment['right'] == {'type': 'NumberLiteral', 'value': 42.0, 'range': [[0, 4], [0, 5]]}


def test_missing_alternative_serializes_as_null():
    obj = ast_to_obj(parse_program('만약 참 { 1 }'))
    assert obj['statements'][0]['alternative'] is None


def test_deserialized_program_runs():
    program = ast_from_obj(ast_to_obj(parse_program('f = 함수 (x) { 결과 x * 3 } f(5)')))
    assert Interpreter().run(program).value == 15.0


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Loop', 'range': [[0, 0], [0, 0]]})


def test_unsupported_object():
    with pytest.raises(TypeError):
        ast_to_obj(object())
