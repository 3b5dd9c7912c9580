"""
Lexer for the Bluefox notation

Splits notation text into a flat stream of literal spans and single
delimiter tokens.

Features:
- Single-pass tokenization
- Empty literal spans are preserved between adjacent delimiters
- Position tracking (offset, line, column)
"""

from __future__ import annotations

import re
from typing import List

from lark import Token

from .token_types import DELIMITERS, TT

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Bluefox lexer.

    Every delimiter becomes its own token and the text between two
    delimiters becomes one LITERAL token, so the output always alternates
    LITERAL, delimiter, LITERAL, ... and ends with a LITERAL.
    """

    DELIMITER_RE = re.compile('[' + re.escape(''.join(DELIMITERS)) + ']')

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Token]:
        """Tokenize entire source, return token list"""
        for match in self.DELIMITER_RE.finditer(self.source):
            self.scan_literal(match.start())
            self.scan_delimiter(match.group(0))

        self.scan_literal(len(self.source))
        return self.tokens

    def scan_literal(self, end: int):
        """Emit the span from the current position up to end (possibly empty)"""
        self.emit(TT.LITERAL, self.source[self.pos:end])

    def scan_delimiter(self, ch: str):
        self.emit(DELIMITERS[ch], ch)

    # ========================================================================
    # Utilities
    # ========================================================================

    def emit(self, token_type: TT, value: str):
        """Emit a token and advance past its text"""
        tok = Token(token_type.name, value, self.pos, self.line, self.column)
        self.tokens.append(tok)
        self.advance(value)

    def advance(self, text: str):
        self.pos += len(text)
        newlines = text.count('\n')

        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind('\n')
        else:
            self.column += len(text)


def tokenize(source: str) -> List[Token]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()
