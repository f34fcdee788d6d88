"""Front door to the Nuri toolchain.

Wires the scanner, the parser and the evaluator together:

    program = parse_program(source)
    value = Interpreter().run(program)

An `Interpreter` keeps one root environment for its whole life, so
running several programs through the same instance behaves like a
session in which later programs see earlier bindings. `run_program`
uses a fresh interpreter every time.
"""

from __future__ import annotations

from typing import Optional

from .ast import Program
from .environment import Environment
from .evaluator import Evaluator
from .lexer import tokenize
from .parser import Parser
from .values import Value


def parse_program(source: str) -> Program:
    """Parse Nuri source code into a Program AST."""
    return Parser(tokenize(source)).parse_program()


class Interpreter:
    """Runs Nuri programs against a persistent root environment."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None
        self.evaluator = Evaluator(debug_level=debug_level, debug_fp=self.debug_fp)

    def run(self, program: Program, env: Optional[Environment] = None) -> Value:
        if env is None:
            env = self.global_env
        return self.evaluator.evaluate(program, env)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None
            self.evaluator.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc):
        self.close()


def run_program(source: str, debug_level: int = 0) -> Value:
    """Parse and evaluate `source` in a fresh interpreter."""
    program = parse_program(source)
    with Interpreter(debug_level=debug_level) as interpreter:
        return interpreter.run(program)
