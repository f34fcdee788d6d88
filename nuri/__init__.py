# Nuri language package
# This package provides a scanner, parser and tree-walking interpreter for the Nuri language.
from .interpreter import run_program, parse_program, Interpreter
from .environment import Environment
from .errors import NuriError, ParseError, EvalError

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'Environment',
    'NuriError',
    'ParseError',
    'EvalError',
]
