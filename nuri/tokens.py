"""Token kinds and the token record shared by the lexer and the parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .position import Range


class TokenKind(Enum):
    # Literals
    NUMBER = auto()
    STRING = auto()
    IDENT = auto()

    # Keywords
    TRUE = auto()
    FALSE = auto()
    FUNCTION = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    BANG = auto()
    ASSIGN = auto()
    EQ = auto()
    NEQ = auto()
    GT = auto()
    LT = auto()
    GTE = auto()
    LTE = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()

    EOF = auto()


# Keyword spellings; the parser only ever looks at the kind.
KEYWORDS = {
    '참': TokenKind.TRUE,
    '거짓': TokenKind.FALSE,
    '함수': TokenKind.FUNCTION,
    '만약': TokenKind.IF,
    '아니면': TokenKind.ELSE,
    '결과': TokenKind.RETURN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    range: Range

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.range!r})"
