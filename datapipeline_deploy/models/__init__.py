from .definition import (
    DeployResult,
    ListValue,
    PipelineIdentity,
    PutDefinitionResult,
    ReferenceValue,
    ScalarValue,
    SourceDefinition,
    Tag,
    TargetField,
    TargetObject,
    TargetParameter,
    TargetParameterValue,
    TranslatedDefinition,
    Value,
)

__all__ = [
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
