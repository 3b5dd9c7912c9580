"""
Value and record parser for the Bluefox notation

parse_value classifies one trimmed fragment; parse_data walks the grouped
fragments of an object body as `key : value` records.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Union

from lark import Token

from .grouper import fragments, split_elements
from .types import (
    INT64_MAX,
    INT64_MIN,
    BfArray,
    BfBool,
    BfFloat,
    BfFunction,
    BfInt,
    BfNull,
    BfObject,
    BfString,
    BfValue,
    BluefoxSyntaxError,
    Data,
)

logger = logging.getLogger(__name__)

INT_RE = re.compile(r'[+-]?[0-9]+')
FLOAT_RE = re.compile(
    r'[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?'
    r'|\.[0-9]+(?:[eE][+-]?[0-9]+)?'
    r'|inf|infinity|nan)',
    re.IGNORECASE,
)

def _parse_int(text: str) -> int | None:
    if not INT_RE.fullmatch(text):
        return None

    num = int(text)
    if not INT64_MIN <= num <= INT64_MAX:
        return None

    return num

def _parse_float(text: str) -> float | None:
    if not FLOAT_RE.fullmatch(text):
        return None

    return float(text)

def _wrapped(text: str, left: str, right: str) -> bool:
    return len(text) >= 2 and text.startswith(left) and text.endswith(right)

def parse_value(item: str) -> BfValue:
    """Classify one trimmed fragment. First matching shape wins."""
    if item == "null":
        return BfNull()

    if item == "false":
        return BfBool(False)

    if item == "true":
        return BfBool(True)

    num = _parse_int(item)
    if num is not None:
        return BfInt(num)

    flt = _parse_float(item)
    if flt is not None:
        return BfFloat(flt)

    if _wrapped(item, "[", "]"):
        return BfArray([parse_value(elem) for elem in split_elements(item[1:-1])])

    if _wrapped(item, "{", "}"):
        return BfObject(parse_data(item[1:-1]))

    if _wrapped(item, "`", "`"):
        return BfFunction(item[1:-1])

    if _wrapped(item, '"', '"'):
        return BfString(item[1:-1])

    return BfString(item)

def parse_fragments(frags: List[Token]) -> Data:
    """Assemble `key : value` records; a later duplicate key wins."""
    data = Data()
    key = ""

    for i, item in enumerate(frags):
        if item == ":":
            continue

        if key:
            data[key] = parse_value(str(item))
            key = ""
        elif i + 1 < len(frags) and frags[i + 1] == ":":
            key = str(item)
        else:
            raise BluefoxSyntaxError(str(item))

    return data

def parse_data(source: str) -> Data:
    return parse_fragments(fragments(source))

loads = parse_data

def load(path: Union[str, Path]) -> Data:
    """Read a notation file and parse it."""
    p = Path(path)
    logger.debug("loading notation file %s", p)

    return parse_data(p.read_text(encoding="utf-8"))
