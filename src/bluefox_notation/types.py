"""Value model, the Data mapping and the error hierarchy for the Bluefox notation."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard

if TYPE_CHECKING:
    from .engine import LuaEngine

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Source given to functions that arrive from the engine with no known source
FUNCTION_SENTINEL = "nil"

# ---------- Value Model ----------

@dataclass
class BfNull:
    def __repr__(self) -> str:
        return "null"

@dataclass
class BfBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class BfInt:
    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} does not fit in a 64-bit signed integer")

    def __repr__(self) -> str:
        return str(self.value)

@dataclass
class BfFloat:
    value: float
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass
class BfString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass(frozen=True)
class CompiledFunction:
    """A callable compiled by one engine; only valid while that engine is open."""
    engine: 'LuaEngine'
    fn: Any

    def usable_with(self, engine: 'LuaEngine') -> bool:
        return self.engine is engine and not engine.closed

@dataclass
class BfFunction:
    source: str
    compiled: Optional[CompiledFunction] = field(default=None, compare=False)
    has_source: bool = field(default=True, compare=False)

    def __repr__(self) -> str:
        state = "compiled" if self.compiled is not None else "source"
        return f"<fn {state} {self.source!r}>"

@dataclass
class BfArray:
    items: List['BfValue']
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

@dataclass
class BfObject:
    data: 'Data'
    def __repr__(self) -> str:
        return repr(self.data)

BfValue: TypeAlias = (
    BfNull
    | BfBool
    | BfInt
    | BfFloat
    | BfString
    | BfFunction
    | BfArray
    | BfObject
)

_BF_VALUE_TYPES: Tuple[type, ...] = (
    BfNull,
    BfBool,
    BfInt,
    BfFloat,
    BfString,
    BfFunction,
    BfArray,
    BfObject,
)

def is_bf_value(value: object) -> TypeGuard[BfValue]:
    return isinstance(value, _BF_VALUE_TYPES)


class Data(MutableMapping):
    """
    String-keyed map of values: the document root and every nested object.

    Lookup is by key; insertion order is kept for stable output but carries
    no meaning, so two Data with the same entries compare equal.
    """

    def __init__(self, entries: Optional[Dict[str, BfValue]] = None):
        self.entries: Dict[str, BfValue] = {}

        if entries:
            for key, value in entries.items():
                self[key] = value

    def __getitem__(self, key: str) -> BfValue:
        return self.entries[key]

    def __setitem__(self, key: str, value: BfValue) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Data key must be a str, not {type(key).__name__}")
        if not is_bf_value(value):
            raise TypeError(f"Data value must be a notation value, not {type(value).__name__}")
        self.entries[key] = value

    def __delitem__(self, key: str) -> None:
        del self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Data):
            return self.entries == other.entries
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        pairs = []

        for k, v in self.entries.items():
            pairs.append(f"{k}: {repr(v)}")

        return "{ " + ", ".join(pairs) + " }"

    def __str__(self) -> str:
        return self.to_string()

    def replace_with(self, other: 'Data') -> None:
        """Swap in another Data's entries wholesale."""
        self.entries = dict(other.entries)

    def to_string(self) -> str:
        from .serializer import data_to_string  # local import to avoid cycle
        return data_to_string(self)

    @classmethod
    def from_string(cls, source: str) -> 'Data':
        from .parser import parse_data
        return parse_data(source)

    @classmethod
    def from_file(cls, path: Any) -> 'Data':
        from .parser import load
        return load(path)

    def execute(self, engine: 'LuaEngine', path: str, *args: Any) -> BfValue:
        from .bridge import execute
        return execute(self, engine, path, *args)

# ---------- Exceptions ----------

class BluefoxError(Exception):
    pass

class BluefoxSyntaxError(BluefoxError):
    def __init__(self, fragment: str):
        super().__init__(f"expected ':' after {fragment}")
        self.fragment = fragment

class BluefoxPathError(BluefoxError):
    def __init__(self, segment: str, path: str, reason: str = "not found"):
        super().__init__(f"path segment '{segment}' {reason} (in '{path}')")
        self.segment = segment
        self.path = path

class BluefoxNotCallableError(BluefoxError):
    def __init__(self, segment: str, kind: str):
        super().__init__(f"'{segment}' is a {kind}, not a function")
        self.segment = segment
        self.kind = kind

class BluefoxEngineError(BluefoxError):
    """Failure reported by the scripting engine; message is passed through."""

class BluefoxCompileError(BluefoxEngineError):
    def __init__(self, message: str, source: str):
        super().__init__(message)
        self.source = source

class BluefoxRuntimeError(BluefoxEngineError):
    pass

class BluefoxConversionError(BluefoxError):
    pass

class BluefoxEngineClosedError(BluefoxConversionError):
    def __init__(self) -> None:
        super().__init__("engine has been closed")
