from __future__ import annotations

from pathlib import Path
from typing import Union

from .types import (
    BfArray,
    BfBool,
    BfFloat,
    BfFunction,
    BfInt,
    BfNull,
    BfObject,
    BfString,
    BfValue,
    Data,
)


def value_to_string(value: BfValue) -> str:
    """Render one value as notation text. Never fails."""
    match value:
        case BfNull():
            return "null"
        case BfBool(value=b):
            return "true" if b else "false"
        case BfInt(value=num):
            return str(num)
        case BfFloat(value=num):
            return repr(num)
        case BfString(value=s):
            # Embedded double quotes are not escaped
            return '"' + s + '"'
        case BfFunction(source=src):
            return "`" + src + "`"
        case BfArray(items=items):
            return "[\n" + "".join(value_to_string(x) + "\n" for x in items) + "]"
        case BfObject(data=data):
            return "{\n" + data_to_string(data) + "}"
        case _:
            raise TypeError(f"Unexpected value type {type(value).__name__}")


def data_to_string(data: Data) -> str:
    """One `key: value` record per line."""
    out = []

    for key, value in data.items():
        out.append(f"{key}: {value_to_string(value)}\n")

    return "".join(out)


dumps = data_to_string


def dump(data: Data, path: Union[str, Path]) -> None:
    Path(path).write_text(data_to_string(data), encoding="utf-8")
