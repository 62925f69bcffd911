from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from datapipeline_deploy.models.definition import (
        PipelineIdentity,
        PutDefinitionResult,
        SourceDefinition,
        Tag,
        TranslatedDefinition,
    )


class ServiceGateway(Protocol):
    """Defines the contract for the remote pipeline-orchestration service."""

    def list_pipelines(self) -> list["PipelineIdentity"]:
        """
        List every pipeline visible to the caller.

        Returns:
            Identities (id and name) of all remote pipelines
        """
        ...

    def delete_pipeline(self, pipeline_id: str) -> None:
        """Delete the pipeline with the given remote id."""
        ...

    def create_pipeline(
        self,
        name: str,
        unique_id: str,
        description: str | None,
        tags: list["Tag"],
    ) -> str:
        """
        Create an empty pipeline.

        Args:
            name: Display name of the pipeline
            unique_id: Caller-supplied idempotency token
            description: Optional human-readable description
            tags: Tags attached to the pipeline

        Returns:
            The remote-assigned pipeline id
        """
        ...

    def put_definition(
        self, pipeline_id: str, definition: "TranslatedDefinition"
    ) -> "PutDefinitionResult":
        """
        Upload objects, parameters and values for a pipeline.

        Returns:
            The structured result, `errored` set when validation failed
        """
        ...


class Translator(Protocol):
    """Defines the contract for turning a source document into service shapes."""

    def translate(
        self, definition: "SourceDefinition | Mapping[str, Any]"
    ) -> "TranslatedDefinition":
        """Translate the three sections of a source definition."""
        ...
