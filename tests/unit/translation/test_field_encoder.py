"""Unit tests for FieldEncoder."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

import pytest

from datapipeline_deploy.models.definition import (
    ListValue,
    ReferenceValue,
    ScalarValue,
    TargetField,
)
from datapipeline_deploy.translation.field_encoder import FieldEncoder


class TestScalarEncoding:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("s3://bucket/path", "s3://bucket/path"),
            (42, "42"),
            (1.5, "1.5"),
            (True, "true"),
            (False, "false"),
            (None, ""),
            ("", ""),
            (datetime(2024, 1, 1, 0, 0, 0), "2024-01-01T00:00:00"),
            (date(2024, 1, 1), "2024-01-01"),
        ],
    )
    def test_scalar_yields_single_string_field(self, raw: Any, expected: str) -> None:
        fields = FieldEncoder.encode("k", raw)
        assert fields == [TargetField(key="k", string_value=expected)]
        assert not fields[0].is_reference

    def test_non_ref_mapping_is_coerced_to_text(self) -> None:
        fields = FieldEncoder.encode("opts", {"a": 1, "b": [True, None]})
        assert len(fields) == 1
        assert fields[0].string_value == '{"a":1,"b":[true,null]}'
        assert fields[0].ref_value is None

    def test_mapping_with_ref_and_other_keys_is_not_a_reference(self) -> None:
        fields = FieldEncoder.encode("k", {"ref": "S", "extra": 1})
        assert fields[0].ref_value is None
        assert fields[0].string_value == '{"ref":"S","extra":1}'

    def test_timestamps_inside_structures_use_iso_format(self) -> None:
        fields = FieldEncoder.encode("window", {"start": datetime(2024, 1, 1, 6)})
        assert fields[0].string_value == '{"start":"2024-01-01T06:00:00"}'


class TestReferenceEncoding:
    def test_single_ref_key_yields_reference(self) -> None:
        fields = FieldEncoder.encode("schedule", {"ref": "DefaultSchedule"})
        assert fields == [TargetField(key="schedule", ref_value="DefaultSchedule")]
        assert fields[0].is_reference
        assert fields[0].string_value is None

    def test_reference_payload_is_rendered_as_text(self) -> None:
        fields = FieldEncoder.encode("parent", {"ref": 7})
        assert fields[0].ref_value == "7"


class TestArrayEncoding:
    def test_array_is_concatenation_of_element_encodings(self) -> None:
        items = ["x", {"ref": "S"}, 3]
        expected: list[TargetField] = []
        for item in items:
            expected.extend(FieldEncoder.encode("k", item))

        assert FieldEncoder.encode("k", items) == expected
        assert [f.key for f in expected] == ["k", "k", "k"]

    def test_array_preserves_element_order(self) -> None:
        fields = FieldEncoder.encode("tags", ["x", "y"])
        assert [f.string_value for f in fields] == ["x", "y"]

    def test_empty_array_yields_no_fields(self) -> None:
        assert FieldEncoder.encode("k", []) == []

    def test_nested_arrays_flatten(self) -> None:
        fields = FieldEncoder.encode("k", [["a", "b"], "c"])
        assert [f.string_value for f in fields] == ["a", "b", "c"]


class TestToValue:
    def test_parses_into_tagged_variant(self) -> None:
        value = FieldEncoder.to_value(["a", {"ref": "B"}])
        assert value == ListValue(
            items=[ScalarValue(text="a"), ReferenceValue(ref="B")]
        )

    def test_is_reference(self) -> None:
        assert FieldEncoder.is_reference({"ref": "x"}) is True
        assert FieldEncoder.is_reference({"ref": "x", "y": 1}) is False
        assert FieldEncoder.is_reference({}) is False
        assert FieldEncoder.is_reference("ref") is False
