"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed codec between in-memory results and remote cache payloads.

Payloads are JSON. Decoding is driven by the declared target shape, never by
the bytes: the payload is first parsed into plain JSON values, then coerced
into the target type with a lax pydantic ``TypeAdapter``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, get_origin, is_typeddict

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, from_json, to_json

from .errors import DecodeError, EncodeError

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)
_TEXT_TYPES = (str, bytes, bytearray)
_LAX_CONFIG = ConfigDict(coerce_numbers_to_str=True)


class ShapeKind(str, Enum):
    """Closed set of decode strategies."""

    POINTER = "pointer"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"


@dataclass(frozen=True, slots=True)
class Shape:
    """
    Resolved target shape of a request.

    Attributes:
        kind: Decode strategy.
        target: Type annotation the payload is coerced into.
        vessel: Record instance updated in place (``POINTER`` only).
        initial: Value the request result starts out as.
    """

    kind: ShapeKind
    target: Any
    vessel: Any = None
    initial: Any = None


def is_record_type(obj: Any) -> bool:
    """True for dataclass, pydantic model and TypedDict classes."""
    if not isinstance(obj, type) or get_origin(obj) is not None:
        return False
    return (
        dataclasses.is_dataclass(obj)
        or issubclass(obj, BaseModel)
        or is_typeddict(obj)
    )


def is_record_instance(obj: Any) -> bool:
    if isinstance(obj, type):
        return False
    return dataclasses.is_dataclass(obj) or isinstance(obj, BaseModel)


def _is_annotation(obj: Any) -> bool:
    return isinstance(obj, type) or get_origin(obj) is not None or obj is Any


def _kind_for_annotation(annotation: Any) -> ShapeKind:
    origin = get_origin(annotation) or annotation
    if isinstance(origin, type):
        if issubclass(origin, _SEQUENCE_ORIGINS):
            return ShapeKind.SEQUENCE
        if issubclass(origin, Mapping) or is_record_type(origin):
            return ShapeKind.MAPPING
        # Abstract collections such as Sequence[int] or Iterable[int].
        if issubclass(origin, Iterable) and not issubclass(origin, _TEXT_TYPES):
            return ShapeKind.SEQUENCE
    return ShapeKind.SCALAR


def _element_type(values: Any) -> Any:
    for item in values:
        return type(item)
    return Any


def resolve_shape(template: Any) -> Shape:
    """
    Classify a target-shape template.

    ``template`` is either a type annotation (``int``, ``list[Person]``,
    ``Person``) or a value template (``0``, ``[1, 2]``, ``{"a": 1}``, a
    record instance). A record instance becomes an in-place vessel.
    """
    if isinstance(template, Shape):
        return template
    if _is_annotation(template):
        return Shape(kind=_kind_for_annotation(template), target=template)

    if is_record_instance(template):
        return Shape(
            kind=ShapeKind.POINTER,
            target=type(template),
            vessel=template,
            initial=template,
        )
    if isinstance(template, tuple):
        return Shape(
            kind=ShapeKind.SEQUENCE,
            target=tuple[_element_type(template), ...],
            initial=template,
        )
    if isinstance(template, _SEQUENCE_ORIGINS):
        container = type(template)
        if container not in _SEQUENCE_ORIGINS:
            container = list
        return Shape(
            kind=ShapeKind.SEQUENCE,
            target=container[_element_type(template)],
            initial=template,
        )
    if isinstance(template, Mapping):
        return Shape(
            kind=ShapeKind.MAPPING,
            target=dict[str, _element_type(template.values())],
            initial=template,
        )
    return Shape(kind=ShapeKind.SCALAR, target=type(template), initial=template)


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    if is_record_type(target):
        # records carry their own pydantic config
        return TypeAdapter(target)
    return TypeAdapter(target, config=_LAX_CONFIG)


def encode(value: Any) -> bytes:
    """Serialize ``value`` to a JSON payload, keeping record field names."""
    try:
        return to_json(value)
    except PydanticSerializationError as exc:
        raise EncodeError(
            f"cannot encode value of type {type(value).__name__}: {exc}"
        ) from exc


def _coerce(raw: Any, target: Any) -> Any:
    try:
        return _adapter(target).validate_python(raw, strict=False)
    except (ValidationError, PydanticUserError) as exc:
        raise DecodeError(f"cannot coerce payload into {target!r}: {exc}") from exc


def _assign_fields(vessel: Any, source: Any) -> None:
    if isinstance(vessel, BaseModel):
        for name in type(vessel).model_fields:
            setattr(vessel, name, getattr(source, name))
        return
    for field in dataclasses.fields(vessel):
        object.__setattr__(vessel, field.name, getattr(source, field.name))


def decode(data: bytes | str, shape: Shape) -> Any:
    """
    Rebuild a value of ``shape`` from ``data``.

    Raises:
        DecodeError: If the payload is not JSON, does not match the shape's
            structure, or cannot be coerced into the target type.
    """
    try:
        raw = from_json(data)
    except ValueError as exc:
        raise DecodeError(f"payload is not valid JSON: {exc}") from exc

    if shape.kind in (ShapeKind.POINTER, ShapeKind.MAPPING) and not isinstance(raw, dict):
        raise DecodeError(
            f"expected a JSON object for {shape.kind.value} shape, got {type(raw).__name__}"
        )
    if shape.kind is ShapeKind.SEQUENCE and not isinstance(raw, list):
        raise DecodeError(
            f"expected a JSON array for sequence shape, got {type(raw).__name__}"
        )

    value = _coerce(raw, shape.target)
    if shape.kind is not ShapeKind.POINTER:
        return value
    try:
        _assign_fields(shape.vessel, value)
    except (ValidationError, AttributeError, TypeError) as exc:
        raise DecodeError(
            f"cannot update {type(shape.vessel).__name__} in place: {exc}"
        ) from exc
    return shape.vessel
