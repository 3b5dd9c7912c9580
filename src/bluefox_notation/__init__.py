"""Bluefox notation: typed data notation with executable Lua function values."""

from .types import (
    FUNCTION_SENTINEL,
    BfArray,
    BfBool,
    BfFloat,
    BfFunction,
    BfInt,
    BfNull,
    BfObject,
    BfString,
    BfValue,
    BluefoxCompileError,
    BluefoxConversionError,
    BluefoxEngineClosedError,
    BluefoxEngineError,
    BluefoxError,
    BluefoxNotCallableError,
    BluefoxPathError,
    BluefoxRuntimeError,
    BluefoxSyntaxError,
    CompiledFunction,
    Data,
)
from .parser import load, loads, parse_data, parse_value
from .serializer import data_to_string, dump, dumps, value_to_string
from .engine import DEFAULT_GLOBAL_NAME, LuaEngine
from .bridge import (
    classify_table,
    data_from_engine,
    data_to_engine,
    execute,
    from_engine_value,
    to_engine_value,
)
from .convert import (
    NotationDeserializable,
    NotationSerializable,
    array_of,
    data_from_python,
    data_to_python,
    load_as,
    from_python,
    to_python,
)

__all__ = [
    "BfArray",
    "BfBool",
    "BfFloat",
    "BfFunction",
    "BfInt",
    "BfNull",
    "BfObject",
    "BfString",
    "BfValue",
    "CompiledFunction",
    "Data",
    "FUNCTION_SENTINEL",
    "DEFAULT_GLOBAL_NAME",
    "BluefoxError",
    "BluefoxSyntaxError",
    "BluefoxPathError",
    "BluefoxNotCallableError",
    "BluefoxEngineError",
    "BluefoxCompileError",
    "BluefoxRuntimeError",
    "BluefoxConversionError",
    "BluefoxEngineClosedError",
    "parse_value",
    "parse_data",
    "loads",
    "load",
    "value_to_string",
    "data_to_string",
    "dumps",
    "dump",
    "LuaEngine",
    "to_engine_value",
    "from_engine_value",
    "classify_table",
    "data_to_engine",
    "data_from_engine",
    "execute",
    "from_python",
    "to_python",
    "data_from_python",
    "data_to_python",
    "array_of",
    "load_as",
    "NotationSerializable",
    "NotationDeserializable",
]
