"""
Script bridge: moves notation values into and out of a Lua engine and runs
stored functions against the live data tree.

Conversion in either direction always takes the engine handle explicitly;
there is no implicit default engine.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Tuple

from .convert import from_python
from .engine import LuaEngine
from .paths import resolve_callable
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
    BluefoxConversionError,
    CompiledFunction,
    Data,
    is_bf_value,
)

logger = logging.getLogger(__name__)

ARRAY_KEY_RE = re.compile(r'[0-9]+')

# ---------- notation -> engine ----------

def to_engine_value(value: BfValue, engine: LuaEngine) -> Any:
    engine.check_open()

    match value:
        case BfNull():
            return None
        case BfBool(value=b):
            return b
        case BfInt(value=num):
            return num
        case BfFloat(value=num):
            return num
        case BfString(value=s):
            return s
        case BfFunction():
            return _function_to_engine(value, engine)
        case BfArray(items=items):
            table = engine.table()

            # Null leaves a hole: inner holes read back as an Object, trailing ones vanish
            for i, item in enumerate(items, 1):
                table[i] = to_engine_value(item, engine)

            return table
        case BfObject(data=data):
            return data_to_engine(data, engine)
        case _:
            raise BluefoxConversionError(f"not a notation value: {type(value).__name__}")

def _function_to_engine(fn: BfFunction, engine: LuaEngine) -> Any:
    """Compiled callable for fn, compiling and caching it on first use."""
    cached = fn.compiled

    if cached is not None:
        if cached.usable_with(engine):
            return cached.fn

        if not fn.has_source:
            raise BluefoxConversionError("function has no source to recompile for this engine")

        logger.debug("dropping callable compiled by another engine")

    compiled = engine.compile(fn.source)
    fn.compiled = CompiledFunction(engine, compiled)

    return compiled

def data_to_engine(data: Data, engine: LuaEngine) -> Any:
    table = engine.table()

    for key, value in data.items():
        table[key] = to_engine_value(value, engine)

    return table

# ---------- engine -> notation ----------

def from_engine_value(obj: Any, engine: LuaEngine) -> BfValue:
    engine.check_open()

    if obj is None:
        return BfNull()
    if isinstance(obj, bool):
        return BfBool(obj)
    if isinstance(obj, int):
        return BfInt(obj)
    if isinstance(obj, float):
        return BfFloat(obj)
    if isinstance(obj, str):
        return BfString(obj)
    if isinstance(obj, bytes):
        return BfString(obj.decode("utf-8", errors="replace"))

    if engine.is_function(obj):
        source = engine.source_of(obj)

        if source is None:
            return BfFunction(FUNCTION_SENTINEL, CompiledFunction(engine, obj), has_source=False)

        return BfFunction(source, CompiledFunction(engine, obj))

    if engine.is_table(obj):
        is_array, entries = classify_table(obj)

        if is_array:
            return _array_from_entries(entries, engine)

        return BfObject(_data_from_entries(entries, engine))

    raise BluefoxConversionError(f"cannot convert engine {engine.type_name(obj)} to a notation value")

def _array_index(key: Any) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 1 else None
    if isinstance(key, str) and ARRAY_KEY_RE.fullmatch(key):
        idx = int(key)
        return idx if idx >= 1 else None

    return None

def classify_table(table: Any) -> Tuple[bool, List[Tuple[Any, Any]]]:
    """
    Decide Array vs Object for an engine table in one pass over its keys.

    A table is array-shaped when its keys are exactly 1..n, each a positive
    integer or its decimal string; an empty table counts as an array.
    Sparse or offset integer keys make an Object.
    """
    entries = list(table.items())
    indices = [_array_index(key) for key, _ in entries]

    if any(idx is None for idx in indices):
        return False, entries

    is_array = len(set(indices)) == len(entries) and max(indices, default=0) == len(entries)

    return is_array, entries

def _array_from_entries(entries: List[Tuple[Any, Any]], engine: LuaEngine) -> BfArray:
    ordered = sorted(((_array_index(key), value) for key, value in entries), key=lambda pair: pair[0])

    return BfArray([from_engine_value(value, engine) for _, value in ordered])

def _object_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="replace")
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return str(key)

    raise BluefoxConversionError(f"cannot use engine {LuaEngine.type_name(key)} as an object key")

def _data_from_entries(entries: List[Tuple[Any, Any]], engine: LuaEngine) -> Data:
    data = Data()

    for key, value in entries:
        data[_object_key(key)] = from_engine_value(value, engine)

    return data

def data_from_engine(table: Any, engine: LuaEngine) -> Data:
    """Rebuild a Data from an engine table; keys are always treated as names."""
    engine.check_open()

    if not engine.is_table(table):
        raise BluefoxConversionError(f"can only convert a table to Data, got {engine.type_name(table)}")

    return _data_from_entries(list(table.items()), engine)

# ---------- execute ----------

def _engine_arg(arg: Any, engine: LuaEngine) -> Any:
    value = arg if is_bf_value(arg) else from_python(arg)
    return to_engine_value(value, engine)

def _result_value(result: Any, engine: LuaEngine) -> BfValue:
    # Several return values arrive as a tuple
    if isinstance(result, tuple):
        return BfArray([from_engine_value(x, engine) for x in result])

    return from_engine_value(result, engine)

def execute(data: Data, engine: LuaEngine, path: str, *args: Any) -> BfValue:
    """
    Run the function at path with data bound to the engine's global name.

    Whatever the script did to the bound table is read back into data, so
    keys whose value was Null do not survive the call.
    """
    engine.check_open()

    root = data_to_engine(data, engine)
    g = engine.globals()
    g[engine.global_name] = root

    fn = resolve_callable(engine, root, path)
    engine_args = [_engine_arg(arg, engine) for arg in args]

    logger.debug("executing %r with %d arg(s)", path, len(engine_args))
    result = engine.call(fn, engine_args)

    rebuilt = data_from_engine(g[engine.global_name], engine)
    data.replace_with(rebuilt)

    return _result_value(result, engine)
