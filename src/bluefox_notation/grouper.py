"""
Grouper for the Bluefox notation

Folds the lexer's token stream into fragments: quoted strings, function
bodies, arrays and nested objects each become one opaque fragment, and the
loose text between separators becomes one fragment per run.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from lark import Token

from .lexer import tokenize
from .token_types import BRACKETS, CLOSERS, ESCAPE, QUOTES, SEPARATORS, TT


class Grouper:
    """
    Walks a token list with a single open-encapsulator slot.

    An opener starts accumulation; the matching closer ends it unless the
    previous token was the escape character. `{` and `[` count nested
    openers of their own kind, so a nested object or array stays inside
    the enclosing fragment and is re-parsed later. Inside a bracket span a
    quoted string or function body is tracked too, so brackets inside it
    never change the depth.

    Quotes only open a span where a value starts (nothing but whitespace
    since the last `:`, newline or opening bracket); anywhere else they are
    ordinary text.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.encapsulator: Optional[str] = None
        self.inner: Optional[str] = None
        self.depth = 0
        self.accumulator: List[Token] = []
        self.loose: List[Token] = []
        self.at_value_start = True

    def opens_span(self, tok: Token) -> bool:
        if tok in QUOTES:
            return self.at_value_start
        return tok in CLOSERS

    def track(self, tok: Token) -> None:
        """Update the value-start flag after a token outside any quoted span"""
        if tok in SEPARATORS or tok in BRACKETS:
            self.at_value_start = True
        elif tok.strip():
            self.at_value_start = False

    def spans(self) -> Iterator[Token]:
        """Yield separators, loose text runs and one FRAGMENT per span"""
        prev: Optional[Token] = None

        for tok in self.tokens:
            if tok == '':
                continue

            escaped = prev is not None and prev == ESCAPE
            prev = tok

            if self.encapsulator is None:
                if self.opens_span(tok):
                    if self.loose:
                        yield self.flush_loose()
                    self.encapsulator = str(tok)
                    self.depth = 1
                    self.accumulator = [tok]
                    self.track(tok)
                elif tok in SEPARATORS:
                    if self.loose:
                        yield self.flush_loose()
                    self.track(tok)
                    yield tok
                else:
                    self.loose.append(tok)
                    self.track(tok)
                continue

            self.accumulator.append(tok)

            if self.encapsulator in BRACKETS:
                span = self.bracket_step(tok, escaped)
                if span is not None:
                    yield span
            elif not escaped and tok == CLOSERS[self.encapsulator]:
                yield self.flush()

        # Unterminated span: hand back whatever was collected
        if self.accumulator:
            yield self.flush()
        if self.loose:
            yield self.flush_loose()

    def bracket_step(self, tok: Token, escaped: bool) -> Optional[Token]:
        """Advance an open `{`/`[` span by one token; the fragment once it closes"""
        if self.inner is not None:
            if not escaped and tok == CLOSERS[self.inner]:
                self.inner = None
                self.at_value_start = False
            return None

        if escaped:
            self.at_value_start = False
            return None

        if tok in CLOSERS and tok not in BRACKETS and self.opens_span(tok):
            self.inner = str(tok)
            return None

        self.track(tok)

        if tok == self.encapsulator:
            self.depth += 1
        elif tok == CLOSERS[self.encapsulator]:
            self.depth -= 1
            self.at_value_start = False

            if self.depth == 0:
                return self.flush()

        return None

    def flush(self) -> Token:
        first = self.accumulator[0]
        text = ''.join(self.accumulator)
        self.accumulator = []
        self.encapsulator = None
        self.inner = None
        self.depth = 0
        self.at_value_start = False

        return Token.new_borrow_pos(TT.FRAGMENT.name, text, first)

    def flush_loose(self) -> Token:
        first = self.loose[0]
        text = ''.join(self.loose)
        self.loose = []

        return Token.new_borrow_pos(TT.FRAGMENT.name, text, first)

    def group(self) -> List[Token]:
        """Trimmed, non-blank fragments in source order"""
        out: List[Token] = []

        for span in self.spans():
            text = span.strip()
            if not text:
                continue

            kind = TT.COLON.name if span.type == TT.COLON.name else TT.FRAGMENT.name
            out.append(Token.new_borrow_pos(kind, text, span))

        return out


def group(tokens: List[Token]) -> List[Token]:
    return Grouper(tokens).group()


def fragments(source: str) -> List[Token]:
    """Lex and group source in one step"""
    return group(tokenize(source))


def split_elements(source: str) -> List[str]:
    """
    Split an array body into element texts.

    Only newlines outside an encapsulated span separate elements, so a
    multi-line function, object or array stays a single element.
    """
    elements: List[str] = []
    line: List[str] = []

    def _flush() -> None:
        text = ''.join(line).strip()
        if text:
            elements.append(text)
        line.clear()

    for span in Grouper(tokenize(source)).spans():
        if span.type == TT.NEWLINE.name:
            _flush()
        else:
            line.append(str(span))

    _flush()
    return elements
