"""
JSON serialization for test-data records.

encode() turns a value into UTF-8 JSON bytes, decode() parses bytes back and
checks them against an explicit shape (a type or typing construct), and
is_empty_encoding() gives the shallow "has anything meaningful been saved"
classification used by presence checks.
"""

from __future__ import annotations

import dataclasses
import json
import types
import typing
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar, Union

from ..exceptions import DecodingError, EncodingError

T = TypeVar("T")

_NONE_TYPE = type(None)


def _default(value: Any) -> Any:
    """json.dumps hook for values it cannot handle natively."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        result = to_dict()
        _check_keys(result)
        return result
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        _check_keys(result)
        return result
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(value: Any, indent: int | None = 2) -> bytes:
    """
    Encode a value as JSON bytes.

    Args:
        value: Value to encode
        indent: JSON indentation (None for compact output)

    Returns:
        UTF-8 encoded JSON

    Raises:
        EncodingError: If the value (or anything nested in it) is not representable
    """
    try:
        text = json.dumps(
            value,
            default=_default,
            indent=indent,
            ensure_ascii=False,
            allow_nan=False,
            skipkeys=False,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(f"Could not encode value of type {type(value).__name__}: {e}") from e

    # json.dumps silently converts int/float/bool/None dict keys to strings,
    # which would not round-trip.
    _check_keys(value)
    return text.encode("utf-8")


def _check_keys(value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodingError(f"Map keys must be strings, got {type(key).__name__}: {key!r}")
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


def _parse(data: bytes | str) -> Any:
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        return json.loads(text)
    except UnicodeDecodeError as e:
        raise DecodingError(f"Stored data is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DecodingError(f"Stored data is not valid JSON: {e}") from e


def decode(data: bytes | str, shape: type[T] | Any = Any) -> T:
    """
    Decode JSON bytes into a value of the given shape.

    Args:
        data: Encoded record
        shape: Expected shape. Any, a builtin scalar type, dict[str, X],
            list[X], Optional/Union, a dataclass, or a class with from_dict().

    Returns:
        The decoded value

    Raises:
        DecodingError: If the data is malformed or does not fit the shape
    """
    return _coerce(_parse(data), shape, "$")


def _describe(shape: Any) -> str:
    return getattr(shape, "__name__", None) or str(shape)


def _coerce(value: Any, shape: Any, where: str) -> Any:
    if shape is Any or shape is object:
        return value

    if shape is None or shape is _NONE_TYPE:
        if value is not None:
            raise DecodingError(f"{where}: expected null, got {type(value).__name__}")
        return None

    origin = typing.get_origin(shape)

    if origin is Union or (hasattr(types, "UnionType") and origin is types.UnionType):
        for option in typing.get_args(shape):
            try:
                return _coerce(value, option, where)
            except DecodingError:
                continue
        raise DecodingError(f"{where}: value does not match {_describe(shape)}")

    if origin is dict:
        if not isinstance(value, dict):
            raise DecodingError(f"{where}: expected object, got {type(value).__name__}")
        args = typing.get_args(shape)
        item_shape = args[1] if len(args) == 2 else Any
        return {k: _coerce(v, item_shape, f"{where}.{k}") for k, v in value.items()}

    if origin is list:
        if not isinstance(value, list):
            raise DecodingError(f"{where}: expected array, got {type(value).__name__}")
        args = typing.get_args(shape)
        item_shape = args[0] if args else Any
        return [_coerce(v, item_shape, f"{where}[{i}]") for i, v in enumerate(value)]

    if shape is bool:
        if not isinstance(value, bool):
            raise DecodingError(f"{where}: expected boolean, got {type(value).__name__}")
        return value

    if shape is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodingError(f"{where}: expected integer, got {type(value).__name__}")
        return value

    if shape is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodingError(f"{where}: expected number, got {type(value).__name__}")
        return float(value)

    if shape is str:
        if not isinstance(value, str):
            raise DecodingError(f"{where}: expected string, got {type(value).__name__}")
        return value

    if shape is dict or shape is list:
        if not isinstance(value, shape):
            raise DecodingError(f"{where}: expected {shape.__name__}, got {type(value).__name__}")
        return value

    if isinstance(shape, type):
        if dataclasses.is_dataclass(shape):
            return _coerce_dataclass(value, shape, where)

        from_dict = getattr(shape, "from_dict", None)
        if callable(from_dict):
            if not isinstance(value, dict):
                raise DecodingError(f"{where}: expected object for {shape.__name__}, got {type(value).__name__}")
            try:
                return from_dict(value)
            except (KeyError, TypeError, ValueError) as e:
                raise DecodingError(f"{where}: invalid {shape.__name__}: {e}") from e

    raise DecodingError(f"{where}: unsupported target shape {_describe(shape)}")


def _coerce_dataclass(value: Any, shape: type, where: str) -> Any:
    if not isinstance(value, dict):
        raise DecodingError(f"{where}: expected object for {shape.__name__}, got {type(value).__name__}")

    fields = [f for f in dataclasses.fields(shape) if f.init]
    unknown = sorted(set(value) - {f.name for f in fields})
    if unknown:
        raise DecodingError(f"{where}: unknown field(s) {unknown} for {shape.__name__}")

    hints = typing.get_type_hints(shape)
    kwargs = {}
    for f in fields:
        if f.name not in value:
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise DecodingError(f"{where}: missing field {f.name!r} for {shape.__name__}")
            continue
        kwargs[f.name] = _coerce(value[f.name], hints.get(f.name, Any), f"{where}.{f.name}")

    return shape(**kwargs)


def from_mapping(shape: type[T], data: Any) -> T:
    """
    Build a dataclass instance from a decoded JSON object.

    Every field is checked against the class annotations, recursively.

    Raises:
        DecodingError: On missing, unknown or mistyped fields
    """
    return _coerce_dataclass(data, shape, "$")


def is_empty_encoding(data: bytes | str) -> bool:
    """
    Classify an encoded record as empty or present.

    The check is shallow: null, false, zero, {} and [] are empty, as is a
    record with no content at all. A non-empty object or array is present
    even if all of its members are themselves empty, and every string
    (including "") is present.

    Raises:
        DecodingError: If non-blank data is not valid JSON
    """
    text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
    if not text.strip():
        return True

    value = _parse(data)

    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (dict, list)):
        return len(value) == 0
    return False
