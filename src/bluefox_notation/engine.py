"""
Lua engine handle for the Bluefox script bridge.

One LuaEngine owns one lupa.LuaRuntime. Every callable compiled through it
is tagged with the handle, so a cached callable can be checked against the
engine it is about to be used with and never leaks into another runtime.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from lupa import LuaError, LuaRuntime, lua_type

from .types import BluefoxCompileError, BluefoxEngineClosedError, BluefoxRuntimeError

logger = logging.getLogger(__name__)

DEFAULT_GLOBAL_NAME = "notation"


class LuaEngine:
    """Scope-bound handle around a Lua runtime."""

    def __init__(self, global_name: str = DEFAULT_GLOBAL_NAME, runtime: Optional[LuaRuntime] = None):
        self.runtime = runtime if runtime is not None else LuaRuntime()
        self.global_name = global_name
        self.closed = False
        self.compilations = 0
        # fn -> source for everything compiled here; weak keys so the
        # registry never keeps a callable alive on its own
        self._sources = self.runtime.eval("setmetatable({}, {__mode = 'k'})")

    def __enter__(self) -> 'LuaEngine':
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<LuaEngine {state} global={self.global_name!r}>"

    def check_open(self) -> None:
        if self.closed:
            raise BluefoxEngineClosedError()

    def close(self) -> None:
        """End the handle; callables compiled here must not be used afterwards."""
        self.closed = True
        self._sources = None

    # ---------- capability surface ----------

    def compile(self, source: str) -> Any:
        self.check_open()

        try:
            fn = self.runtime.compile(source)
        except LuaError as exc:
            raise BluefoxCompileError(str(exc), source) from exc

        self.compilations += 1
        self._sources[fn] = source
        logger.debug("compiled function #%d (%d chars)", self.compilations, len(source))

        return fn

    def call(self, fn: Any, args: Sequence[Any]) -> Any:
        self.check_open()

        try:
            return fn(*args)
        except LuaError as exc:
            raise BluefoxRuntimeError(str(exc)) from exc

    def source_of(self, fn: Any) -> Optional[str]:
        """Source text of a callable compiled by this engine, if any."""
        self.check_open()
        return self._sources[fn]

    def table(self) -> Any:
        self.check_open()
        return self.runtime.table()

    def globals(self) -> Any:
        self.check_open()
        return self.runtime.globals()

    # ---------- native value inspection ----------

    @staticmethod
    def type_name(obj: Any) -> str:
        if obj is None:
            return "nil"

        kind = lua_type(obj)
        if kind is not None:
            return kind

        if isinstance(obj, bool):
            return "boolean"
        if isinstance(obj, (int, float)):
            return "number"
        if isinstance(obj, (str, bytes)):
            return "string"

        return "userdata"

    @staticmethod
    def is_table(obj: Any) -> bool:
        return lua_type(obj) == "table"

    @staticmethod
    def is_function(obj: Any) -> bool:
        return lua_type(obj) == "function"
