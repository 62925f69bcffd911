"""Translator from the three-section source document to service collections."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List

from ..models.definition import (
    SourceDefinition,
    TargetField,
    TargetObject,
    TargetParameter,
    TargetParameterValue,
    TranslatedDefinition,
)
from .field_encoder import FieldEncoder

logger = logging.getLogger(__name__)

OBJECT_RESERVED_KEYS: frozenset[str] = frozenset({"id", "name"})
PARAMETER_RESERVED_KEYS: frozenset[str] = frozenset({"id"})


class DefinitionTranslator:
    """
    Pure translator for pipeline definitions.

    Walks `objects`, `parameters` and `values` of a SourceDefinition and
    produces the flat `TranslatedDefinition` the service expects. Reserved
    keys (`id`, `name`) are stripped before the remaining keys are encoded,
    so they are never re-emitted as ordinary fields. The source is never
    mutated, so translating twice yields identical output.
    """

    def __init__(self, encoder: FieldEncoder | None = None) -> None:
        self._encoder = encoder or FieldEncoder()
        self._logger = logger.getChild(self.__class__.__name__)

    def translate(
        self, definition: SourceDefinition | Mapping[str, Any]
    ) -> TranslatedDefinition:
        """
        Translate a source definition.

        Args:
            definition: A SourceDefinition or the raw loaded mapping

        Returns:
            The objects, parameters and values collections

        Raises:
            MalformedDefinitionError: If a required section is missing
        """
        source = SourceDefinition.from_raw(definition)

        translated = TranslatedDefinition(
            objects=self.translate_objects(source.objects),
            parameters=self.translate_parameters(source.parameters),
            values=self.translate_values(source.values),
        )

        self._logger.debug(
            f"Translated {len(translated.objects)} object(s), "
            f"{len(translated.parameters)} parameter(s), "
            f"{len(translated.values)} parameter value(s)"
        )
        return translated

    def translate_objects(
        self, records: List[Dict[str, Any]]
    ) -> List[TargetObject]:
        objects = []
        for record in records:
            target = TargetObject(
                id=self._encoder.render(record["id"]),
                name=self._encoder.render(record["name"]),
                fields=self._encode_fields(record, OBJECT_RESERVED_KEYS),
            )
            self._log_conversion("object", target.id, len(target.fields))
            objects.append(target)
        return objects

    def translate_parameters(
        self, records: List[Dict[str, Any]]
    ) -> List[TargetParameter]:
        parameters = []
        for record in records:
            target = TargetParameter(
                id=self._encoder.render(record["id"]),
                attributes=self._encode_fields(record, PARAMETER_RESERVED_KEYS),
            )
            self._log_conversion("parameter", target.id, len(target.attributes))
            parameters.append(target)
        return parameters

    def translate_values(self, values: Dict[str, Any]) -> List[TargetParameterValue]:
        """Fan out list values to one entry per element, sharing the id."""
        parameter_values = []
        for parameter_id, value in values.items():
            items = value if isinstance(value, list) else [value]
            for item in items:
                parameter_values.append(
                    TargetParameterValue(
                        id=parameter_id, string_value=self._encoder.render(item)
                    )
                )
        return parameter_values

    def _encode_fields(
        self, record: Mapping[str, Any], reserved: frozenset[str]
    ) -> List[TargetField]:
        fields: List[TargetField] = []
        for key, value in record.items():
            if key in reserved:
                continue
            fields.extend(self._encoder.encode(key, value))
        return fields

    def _log_conversion(self, item_type: str, item_id: str, field_count: int) -> None:
        self._logger.debug(f"Converted {item_type} '{item_id}' ({field_count} fields)")
