from __future__ import annotations

import logging
import re
from typing import Any, List, Union

from .engine import LuaEngine
from .types import BluefoxNotCallableError, BluefoxPathError

logger = logging.getLogger(__name__)

# `.`, `[` and `]` are interchangeable separators: a.b[1] == a.b.1
PATH_SPLIT_RE = re.compile(r'[.\[\]]')
INDEX_RE = re.compile(r'[+-]?[0-9]+')


def split_path(path: str) -> List[str]:
    return [seg.strip() for seg in PATH_SPLIT_RE.split(path) if seg.strip()]


def member_key(segment: str) -> Union[int, str]:
    """Integer-looking segments index arrays (1-based); the rest are field names."""
    if INDEX_RE.fullmatch(segment):
        return int(segment)

    return segment


def resolve_callable(engine: LuaEngine, root: Any, path: str) -> Any:
    """Walk path from the root table down to a callable member."""
    segments = split_path(path)
    if not segments:
        raise BluefoxPathError(path, path, "is empty")

    container = root

    for seg in segments[:-1]:
        nxt = container[member_key(seg)]

        if nxt is None:
            raise BluefoxPathError(seg, path)
        if not engine.is_table(nxt):
            raise BluefoxPathError(seg, path, f"is a {engine.type_name(nxt)}, not a table")

        container = nxt

    last = segments[-1]
    member = container[member_key(last)]

    if member is None:
        raise BluefoxPathError(last, path)
    if not engine.is_function(member):
        raise BluefoxNotCallableError(last, engine.type_name(member))

    logger.debug("resolved %r through %d segment(s)", path, len(segments))
    return member
