"""Runtime values for the Nuri interpreter.

Values are a closed set of tagged records: Number, Boolean, String,
Empty, Function and the internal ReturnValue marker. Each carries the
`Range` of the node that produced it and a display string fixed at
construction time. Values are never mutated; every operation builds a
new one.

`ReturnValue` only exists while a `결과` (return) statement's result is
bubbling up through blocks towards its function call. The evaluator
never lets one escape a call or the top-level program.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Tuple, Union
import math

from .position import Range

if TYPE_CHECKING:
    from .ast import Block, Identifier
    from .environment import Environment


TRUE_TEXT = '참'
FALSE_TEXT = '거짓'
EMPTY_TEXT = '(없음)'
FUNCTION_TEXT = '(함수)'


def format_number(value: float) -> str:
    """Render a float the way the language prints numbers.

    Integral values drop the trailing `.0`; everything else uses the
    shortest round-trip representation.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        # -0.0 prints as 0
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class NumberValue:
    value: float
    range: Range
    representation: str = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'representation', format_number(self.value))


@dataclass(frozen=True)
class BooleanValue:
    value: bool
    range: Range
    representation: str = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'representation', TRUE_TEXT if self.value else FALSE_TEXT)


@dataclass(frozen=True)
class StringValue:
    value: str
    range: Range
    representation: str = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'representation', self.value)


@dataclass(frozen=True)
class EmptyValue:
    range: Range
    representation: str = field(default=EMPTY_TEXT, init=False, compare=False)


@dataclass(frozen=True, eq=False)
class FunctionValue:
    """A closure: parameters, body and the scope it was defined in.

    Holding `environment` keeps the defining scope chain alive after the
    call that created it has returned.
    """
    params: Tuple['Identifier', ...]
    body: 'Block'
    environment: 'Environment'
    range: Range
    representation: str = field(default=FUNCTION_TEXT, init=False)

    def __repr__(self) -> str:
        return f"<function ({', '.join(p.name for p in self.params)})>"


@dataclass(frozen=True)
class ReturnValue:
    """Internal marker wrapping the value of a `결과` statement."""
    value: 'Value'


Value = Union[NumberValue, BooleanValue, StringValue, EmptyValue, FunctionValue]


def type_name(value: Any) -> str:
    """Return the Nuri type name of a runtime value."""
    if isinstance(value, NumberValue):
        return 'Number'
    if isinstance(value, BooleanValue):
        return 'Boolean'
    if isinstance(value, StringValue):
        return 'String'
    if isinstance(value, EmptyValue):
        return 'Empty'
    if isinstance(value, FunctionValue):
        return 'Function'
    if isinstance(value, ReturnValue):
        return 'Return'
    return type(value).__name__
