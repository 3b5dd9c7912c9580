"""
Token Types for the Bluefox notation

Shared between lexer and grouper to avoid circular dependencies.
"""

from enum import Enum, auto
from typing import Dict


class TT(Enum):
    """Token Types - one per delimiter plus the span kinds"""

    # Delimiters
    COLON = auto()
    SQUOTE = auto()
    DQUOTE = auto()
    BACKTICK = auto()
    NEWLINE = auto()
    LBRACE = auto()
    RBRACE = auto()
    LSQB = auto()
    RSQB = auto()
    BACKSLASH = auto()

    # Spans
    LITERAL = auto()
    FRAGMENT = auto()


DELIMITERS: Dict[str, TT] = {
    ':': TT.COLON,
    "'": TT.SQUOTE,
    '"': TT.DQUOTE,
    '`': TT.BACKTICK,
    '\n': TT.NEWLINE,
    '{': TT.LBRACE,
    '}': TT.RBRACE,
    '[': TT.LSQB,
    ']': TT.RSQB,
    '\\': TT.BACKSLASH,
}

# Opening delimiter -> the only delimiter that closes it
CLOSERS: Dict[str, str] = {
    "'": "'",
    '"': '"',
    '`': '`',
    '{': '}',
    '[': ']',
}

# Openers that nest (depth is tracked for their own kind only)
BRACKETS = frozenset('{[')

ESCAPE = '\\'

# Openers that only open where a value starts; elsewhere they are text
QUOTES = frozenset('\'"')

# Tokens that end a run of loose text and start a new value
SEPARATORS = frozenset(':\n')
