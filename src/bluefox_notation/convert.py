"""Conversions between notation values and plain Python objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Type, TypeVar
from typing_extensions import Protocol, runtime_checkable

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
    BluefoxConversionError,
    Data,
    is_bf_value,
)

T = TypeVar("T", bound="NotationDeserializable")


@runtime_checkable
class NotationSerializable(Protocol):
    def to_data(self) -> Data: ...


class NotationDeserializable(Protocol):
    @classmethod
    def from_data(cls: Type[T], data: Data) -> T: ...


def from_python(obj: Any) -> BfValue:
    if is_bf_value(obj):
        return obj

    match obj:
        case None:
            return BfNull()
        case bool():
            return BfBool(obj)
        case int():
            try:
                return BfInt(obj)
            except ValueError as exc:
                raise BluefoxConversionError(str(exc)) from exc
        case float():
            return BfFloat(obj)
        case str():
            return BfString(obj)
        case Data():
            return BfObject(obj)
        case NotationSerializable():
            return BfObject(obj.to_data())
        case Mapping():
            return BfObject(data_from_python(obj))
        case list() | tuple():
            return BfArray([from_python(x) for x in obj])
        case _:
            raise BluefoxConversionError(f"cannot convert {type(obj).__name__} to a notation value")


def data_from_python(mapping: Mapping) -> Data:
    data = Data()

    for key, value in mapping.items():
        if not isinstance(key, str):
            raise BluefoxConversionError(f"object key must be a str, not {type(key).__name__}")
        data[key] = from_python(value)

    return data


def to_python(value: BfValue) -> Any:
    match value:
        case BfNull():
            return None
        case BfBool(value=b) | BfInt(value=b) | BfFloat(value=b) | BfString(value=b):
            return b
        case BfFunction(source=src):
            return src
        case BfArray(items=items):
            return [to_python(x) for x in items]
        case BfObject(data=data):
            return data_to_python(data)
        case _:
            raise BluefoxConversionError(f"not a notation value: {type(value).__name__}")


def data_to_python(data: Data) -> Dict[str, Any]:
    return {k: to_python(v) for k, v in data.items()}


def array_of(items: Iterable[NotationSerializable]) -> BfArray:
    """Array of objects, one per serializable item."""
    return BfArray([BfObject(item.to_data()) for item in items])


def load_as(cls: Type[T], data: Data) -> T:
    return cls.from_data(data)
