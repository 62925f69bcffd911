"""Encoder for raw definition fields to service field records."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, time
from typing import Any

from ..models.definition import (
    ListValue,
    ReferenceValue,
    ScalarValue,
    TargetField,
    Value,
)

REF_KEY = "ref"


class FieldEncoder:
    """
    Stateless encoder for one `(key, value)` pair of a source record.

    A raw value is first parsed into the tagged variant
    `ScalarValue | ReferenceValue | ListValue`, then flattened into target
    fields. Any shape that is not a list or a `{"ref": ...}` mapping falls
    through to string coercion; there are no error conditions.
    """

    @staticmethod
    def encode(key: str, raw_value: Any) -> list[TargetField]:
        """
        Encode a raw value into one or more fields sharing `key`.

        Args:
            key: Field key from the source record
            raw_value: Scalar, `{"ref": id}` mapping, or list of either

        Returns:
            Fields in source order; N fields for an N-element list
        """
        return FieldEncoder.flatten(key, FieldEncoder.to_value(raw_value))

    @staticmethod
    def flatten(key: str, value: Value) -> list[TargetField]:
        """Flatten a parsed value into target fields."""
        if isinstance(value, ListValue):
            fields: list[TargetField] = []
            for item in value.items:
                fields.extend(FieldEncoder.flatten(key, item))
            return fields

        if isinstance(value, ReferenceValue):
            return [TargetField(key=key, ref_value=value.ref)]

        return [TargetField(key=key, string_value=value.text)]

    @staticmethod
    def to_value(raw_value: Any) -> Value:
        """Parse a raw JSON-like value into the tagged variant."""
        if isinstance(raw_value, list):
            return ListValue(items=[FieldEncoder.to_value(v) for v in raw_value])

        if FieldEncoder.is_reference(raw_value):
            return ReferenceValue(ref=FieldEncoder.render(raw_value[REF_KEY]))

        return ScalarValue(text=FieldEncoder.render(raw_value))

    @staticmethod
    def is_reference(raw_value: Any) -> bool:
        """True for a mapping whose only key is `ref`."""
        return isinstance(raw_value, Mapping) and list(raw_value.keys()) == [REF_KEY]

    @staticmethod
    def render(raw_value: Any) -> str:
        """
        Coerce a raw value to the text form the service expects.

        Booleans become `true`/`false`, `None` becomes an empty string,
        numbers use their canonical `str()` form, dates and times use ISO 8601
        and any other structure is rendered as compact JSON.
        """
        if raw_value is None:
            return ""
        if isinstance(raw_value, bool):
            return "true" if raw_value else "false"
        if isinstance(raw_value, str):
            return raw_value
        if isinstance(raw_value, (int, float)):
            return str(raw_value)
        if isinstance(raw_value, (date, time)):
            return raw_value.isoformat()
        if isinstance(raw_value, (Mapping, list, tuple)):
            return json.dumps(raw_value, separators=(",", ":"), default=_json_default)
        return str(raw_value)


def _json_default(value: Any) -> str:
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)
