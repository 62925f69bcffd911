from __future__ import annotations

"""
definition.py – Pipeline definition models
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Source document (three sections: objects, parameters, values), the tagged
field-value variant, and the flat object/field shapes expected by
AWS Data Pipeline.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Literal, Optional, Self, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from ..core.exceptions import MalformedDefinitionError

REQUIRED_SECTIONS: tuple[str, ...] = ("objects", "parameters", "values")

# ---------------------------------------------------------------------------
# Source document
# ---------------------------------------------------------------------------


class SourceDefinition(BaseModel):
    """The three-section workflow document as loaded from disk."""

    objects: List[Dict[str, Any]] = Field(
        ..., description="Pipeline objects; each record carries `id` and `name`."
    )
    parameters: List[Dict[str, Any]] = Field(
        ..., description="Parameter objects; each record carries `id`."
    )
    values: Dict[str, Any] = Field(
        ..., description="Mapping parameter id ➜ value or list of values."
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    # ----- validators --------------------------------------------------------
    @field_validator("objects")
    @classmethod
    def _objects_have_identity(
        cls, v: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        for index, record in enumerate(v):
            for key in ("id", "name"):
                if key not in record:
                    raise ValueError(f"objects[{index}] is missing '{key}'")
        return v

    @field_validator("parameters")
    @classmethod
    def _parameters_have_id(
        cls, v: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        for index, record in enumerate(v):
            if "id" not in record:
                raise ValueError(f"parameters[{index}] is missing 'id'")
        return v

    @classmethod
    def from_raw(
        cls, raw: Mapping[str, Any] | SourceDefinition, source: str | None = None
    ) -> SourceDefinition:
        """
        Shape a raw mapping into a SourceDefinition.

        Raises:
            MalformedDefinitionError: if a section is missing or mis-shaped.
        """
        if isinstance(raw, SourceDefinition):
            return raw

        if not isinstance(raw, Mapping):
            raise MalformedDefinitionError(
                "Pipeline definition must be a mapping at the top level",
                source=source,
            )

        missing = [section for section in REQUIRED_SECTIONS if section not in raw]
        if missing:
            raise MalformedDefinitionError(
                f"Pipeline definition is missing section(s): {', '.join(missing)}",
                missing_sections=missing,
                source=source,
            )

        try:
            return cls(**{section: raw[section] for section in REQUIRED_SECTIONS})
        except ValueError as exc:
            # pydantic.ValidationError subclasses ValueError
            raise MalformedDefinitionError(
                f"Pipeline definition is malformed: {exc}", source=source
            ) from exc


# ---------------------------------------------------------------------------
# Field values (tagged variant)
# ---------------------------------------------------------------------------


class ScalarValue(BaseModel):
    """A literal, already rendered to the text the service expects."""

    kind: Literal["scalar"] = "scalar"
    text: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class ReferenceValue(BaseModel):
    """A pointer to another pipeline object by id."""

    kind: Literal["ref"] = "ref"
    ref: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class ListValue(BaseModel):
    """Several values sharing one key."""

    kind: Literal["list"] = "list"
    items: List[Value] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


Value = Union[ScalarValue, ReferenceValue, ListValue]

ListValue.model_rebuild()

# ---------------------------------------------------------------------------
# Target (service) shapes
# ---------------------------------------------------------------------------


class TargetField(BaseModel):
    """One keyed field; either a string value or a reference, never both."""

    key: str = Field(..., description="Field key, repeated keys are legal.")
    string_value: Optional[str] = Field(
        None, description="Literal text value."
    )
    ref_value: Optional[str] = Field(
        None, description="Id of the referenced pipeline object."
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _exactly_one_value(self) -> Self:
        if (self.string_value is None) == (self.ref_value is None):
            raise ValueError(
                f"Field '{self.key}' must have exactly one of "
                "string_value or ref_value"
            )
        return self

    @property
    def is_reference(self) -> bool:
        return self.ref_value is not None

    def to_api(self) -> Dict[str, str]:
        if self.ref_value is not None:
            return {"key": self.key, "refValue": self.ref_value}
        return {"key": self.key, "stringValue": self.string_value or ""}


class TargetObject(BaseModel):
    """A pipeline object (activity, schedule, resource, ...)."""

    id: str
    name: str
    fields: List[TargetField] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_api(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "fields": [f.to_api() for f in self.fields],
        }


class TargetParameter(BaseModel):
    """A parameter object; same shape as TargetObject without a name."""

    id: str
    attributes: List[TargetField] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_api(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "attributes": [a.to_api() for a in self.attributes],
        }


class TargetParameterValue(BaseModel):
    """A concrete value for a parameter; always a string."""

    id: str
    string_value: str

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_api(self) -> Dict[str, str]:
        return {"id": self.id, "stringValue": self.string_value}


class TranslatedDefinition(BaseModel):
    """The three parallel collections uploaded with put_pipeline_definition."""

    objects: List[TargetObject] = Field(default_factory=list)
    parameters: List[TargetParameter] = Field(default_factory=list)
    values: List[TargetParameterValue] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_api(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return keyword arguments shaped for the Data Pipeline API."""
        return {
            "pipelineObjects": [o.to_api() for o in self.objects],
            "parameterObjects": [p.to_api() for p in self.parameters],
            "parameterValues": [v.to_api() for v in self.values],
        }


# ---------------------------------------------------------------------------
# Remote pipeline state
# ---------------------------------------------------------------------------


class Tag(BaseModel):
    """A pipeline tag."""

    key: str
    value: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_api(self) -> Dict[str, str]:
        return {"key": self.key, "value": self.value}


class PipelineIdentity(BaseModel):
    """A remote pipeline as listed by the service."""

    id: str = Field(..., description="Remote-assigned pipeline id.")
    name: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class PutDefinitionResult(BaseModel):
    """Structured response of a definition upload."""

    errored: bool = False
    validation_errors: List[Dict[str, Any]] = Field(default_factory=list)
    validation_warnings: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


class DeployResult(BaseModel):
    """Outcome of a successful deploy."""

    pipeline_id: str
    pipeline_name: str
    replaced_pipeline_id: Optional[str] = Field(
        None, description="Id of the same-named pipeline that was deleted."
    )
    warnings: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = [
    "REQUIRED_SECTIONS",
    "SourceDefinition",
    "ScalarValue",
    "ReferenceValue",
    "ListValue",
    "Value",
    "TargetField",
    "TargetObject",
    "TargetParameter",
    "TargetParameterValue",
    "TranslatedDefinition",
    "Tag",
    "PipelineIdentity",
    "PutDefinitionResult",
    "DeployResult",
]
