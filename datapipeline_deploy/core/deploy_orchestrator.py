"""Idempotent deploy protocol for a named pipeline."""

import logging
from collections.abc import Mapping
from typing import Any

from datapipeline_deploy.models.definition import (
    DeployResult,
    PipelineIdentity,
    SourceDefinition,
)
from datapipeline_deploy.translation.translator import DefinitionTranslator

from .exceptions import AmbiguousNameError, ValidationFailure
from .protocols import ServiceGateway, Translator
from .tags import parse_tags

logger = logging.getLogger(__name__)


class DeployOrchestrator:
    """
    Replaces a named pipeline with a freshly uploaded definition.

    The protocol runs strictly in sequence against the injected gateway:

        LOOKUP -> [DELETE] -> CREATE -> TRANSLATE -> UPLOAD

    More than one pipeline with the target name aborts before any mutation.
    Every remote call is attempted exactly once; failures propagate. If
    translation or upload fails after CREATE, the empty pipeline is left in
    place and is removed by the next deploy under the same name.
    """

    def __init__(
        self, gateway: ServiceGateway, translator: Translator | None = None
    ):
        """
        Initialize the orchestrator.

        Args:
            gateway: Remote service the protocol runs against
            translator: Definition translator, a DefinitionTranslator by default
        """
        self._logger = logger.getChild(self.__class__.__name__)
        self._gateway = gateway
        self._translator: Translator = translator or DefinitionTranslator()

    def deploy(
        self,
        pipeline_name: str,
        definition: SourceDefinition | Mapping[str, Any],
        description: str | None = None,
        tags: str | None = None,
    ) -> DeployResult:
        """
        Deploy a definition under `pipeline_name`, replacing any existing one.

        Args:
            pipeline_name: Name (and uniqueness token) of the pipeline
            definition: Source definition or the raw loaded mapping
            description: Optional pipeline description
            tags: Optional `key=value[,key=value...]` specification

        Returns:
            The new pipeline id and the id of the replaced pipeline, if any

        Raises:
            MalformedDefinitionError: Before any remote call, if a section is
                missing from the definition
            AmbiguousNameError: If more than one pipeline has the name
            RemoteOperationError: If any gateway call fails
            ValidationFailure: If the service rejects the uploaded definition
        """
        source = SourceDefinition.from_raw(definition)

        existing = self._lookup(pipeline_name)
        replaced_id = None
        if existing is not None:
            self._logger.info(f"Deleting pipeline {existing.id}")
            self._gateway.delete_pipeline(existing.id)
            replaced_id = existing.id

        self._logger.info("Processing tags...")
        parsed_tags = parse_tags(tags)

        self._logger.info(f"Creating pipeline {pipeline_name}")
        pipeline_id = self._gateway.create_pipeline(
            pipeline_name, pipeline_name, description, parsed_tags
        )
        self._logger.info(f"Pipeline {pipeline_id} created")

        translated = self._translator.translate(source)

        self._logger.info(f"Updating pipeline {pipeline_id}")
        result = self._gateway.put_definition(pipeline_id, translated)

        if result.errored:
            self._logger.error("Failed to put pipeline definition:")
            self._logger.error(f"{result.validation_errors}")
            raise ValidationFailure(
                "Deployment failed.",
                pipeline_id=pipeline_id,
                validation_errors=result.validation_errors,
            )

        for warning in result.validation_warnings:
            self._logger.warning(f"Validation warning: {warning}")

        self._logger.info("Deployment successful.")
        return DeployResult(
            pipeline_id=pipeline_id,
            pipeline_name=pipeline_name,
            replaced_pipeline_id=replaced_id,
            warnings=result.validation_warnings,
        )

    def _lookup(self, pipeline_name: str) -> PipelineIdentity | None:
        """Return the single same-named pipeline, None if absent."""
        matches = [
            p for p in self._gateway.list_pipelines() if p.name == pipeline_name
        ]
        self._logger.info(f"pipeline list size: {len(matches)}")

        if len(matches) > 1:
            raise AmbiguousNameError(pipeline_name, [p.id for p in matches])

        return matches[0] if matches else None
