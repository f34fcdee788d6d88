"""Scanner for the Nuri language.

The token stream is produced by Lark's basic (regex) lexer running in
lexer-only mode: each `TokenKind` is a terminal of the grammar below, the
keywords are string terminals that Lark folds into `IDENT` (an identifier
whose whole text equals a keyword is re-typed as that keyword), and
operators are matched longest-first so `==` wins over `=`.

Lark reports 1-based lines and columns with `end_column` pointing one
past the token; `tokenize` converts these to the zero-based, inclusive
`Range` used everywhere else.
"""

from __future__ import annotations

from typing import Iterator

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import ScanError
from .position import Position, Range
from .tokens import KEYWORDS, Token, TokenKind


def _keyword_terminals() -> str:
    return '\n'.join(f'    {kind.name}: "{text}"' for text, kind in KEYWORDS.items())


NURI_GRAMMAR = r"""
    NUMBER: /\d+(\.\d+)?/
    STRING: /'[^'\n]*'/ | /"[^"\n]*"/
    IDENT: /[^\W\d]\w*/

%s

    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    BANG: "!"
    ASSIGN: "="
    EQ: "=="
    NEQ: "!="
    GT: ">"
    LT: "<"
    GTE: ">="
    LTE: "<="
    LPAR: "("
    RPAR: ")"
    LBRACE: "{"
    RBRACE: "}"
    COMMA: ","

    %%import common.WS
    %%ignore WS
""" % _keyword_terminals()


NURI_LEXER = Lark(
    NURI_GRAMMAR,
    parser=None,
    lexer='basic',
)


def end_of_input(source: str) -> Range:
    """Zero-width range just past the last character of `source`."""
    lines = source.split('\n')
    pos = Position(len(lines) - 1, len(lines[-1]))
    return Range(pos, pos)


def tokenize(source: str) -> Iterator[Token]:
    """Lazily yield the tokens of `source`, finishing with a single EOF token.

    Raises ScanError on a character no terminal accepts. The error is
    raised when the parser pulls the offending position, not up front.
    """
    try:
        for tok in NURI_LEXER.lex(source):
            begin = Position(tok.line - 1, tok.column - 1)
            end = Position(tok.end_line - 1, tok.end_column - 2)
            text = str(tok)
            if tok.type == 'STRING':
                text = text[1:-1]
            yield Token(TokenKind[tok.type], text, Range(begin, end))
    except UnexpectedCharacters as e:
        raise ScanError(f'unexpected character {e.char!r}', Range.at(e.line - 1, e.column - 1)) from None
    yield Token(TokenKind.EOF, '', end_of_input(source))
