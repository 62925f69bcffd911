"""AWS Data Pipeline implementation of the ServiceGateway protocol."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import RemoteOperationError
from ..models.definition import (
    PipelineIdentity,
    PutDefinitionResult,
    Tag,
    TranslatedDefinition,
)

if TYPE_CHECKING:
    from ..core.config import DeployConfig

logger = logging.getLogger(__name__)

SERVICE_NAME = "datapipeline"


class DataPipelineGateway:
    """
    Thin wrapper over a boto3 `datapipeline` client.

    The client is built from an explicit session (see `from_config`) or
    injected directly; nothing here touches process-wide boto3 defaults.
    Every botocore failure surfaces as a RemoteOperationError, unretried.
    """

    def __init__(self, client: Any):
        self._client = client
        self._logger = logger.getChild(self.__class__.__name__)

    @classmethod
    def from_config(cls, config: "DeployConfig") -> "DataPipelineGateway":
        """Build a gateway with credentials and region taken from a DeployConfig."""
        gateway_logger = logger.getChild(cls.__name__)
        gateway_logger.info(
            f"Logging in with Access Key: {config.masked_access_key}"
        )
        session = boto3.session.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key.get_secret_value(),
            aws_session_token=(
                config.session_token.get_secret_value()
                if config.session_token
                else None
            ),
            region_name=config.region,
        )
        return cls(session.client(SERVICE_NAME))

    def list_pipelines(self) -> list[PipelineIdentity]:
        pipelines: list[PipelineIdentity] = []
        try:
            paginator = self._client.get_paginator("list_pipelines")
            for page in paginator.paginate():
                for item in page.get("pipelineIdList", []):
                    pipelines.append(
                        PipelineIdentity(id=item["id"], name=item["name"])
                    )
        except (ClientError, BotoCoreError) as exc:
            raise self._wrap("list_pipelines", exc) from exc

        self._logger.debug(f"Listed {len(pipelines)} pipeline(s)")
        return pipelines

    def delete_pipeline(self, pipeline_id: str) -> None:
        try:
            self._client.delete_pipeline(pipelineId=pipeline_id)
        except (ClientError, BotoCoreError) as exc:
            raise self._wrap("delete_pipeline", exc, pipeline_id) from exc

    def create_pipeline(
        self,
        name: str,
        unique_id: str,
        description: str | None,
        tags: list[Tag],
    ) -> str:
        params: dict[str, Any] = {
            "name": name,
            "uniqueId": unique_id,
            "tags": [tag.to_api() for tag in tags],
        }
        if description is not None:
            params["description"] = description

        try:
            response = self._client.create_pipeline(**params)
        except (ClientError, BotoCoreError) as exc:
            raise self._wrap("create_pipeline", exc) from exc

        return response["pipelineId"]

    def put_definition(
        self, pipeline_id: str, definition: TranslatedDefinition
    ) -> PutDefinitionResult:
        try:
            response = self._client.put_pipeline_definition(
                pipelineId=pipeline_id, **definition.to_api()
            )
        except (ClientError, BotoCoreError) as exc:
            raise self._wrap("put_pipeline_definition", exc, pipeline_id) from exc

        return PutDefinitionResult(
            errored=bool(response.get("errored", False)),
            validation_errors=response.get("validationErrors") or [],
            validation_warnings=response.get("validationWarnings") or [],
        )

    def _wrap(
        self, operation: str, exc: Exception, pipeline_id: str | None = None
    ) -> RemoteOperationError:
        error_code = None
        if isinstance(exc, ClientError):
            error_code = exc.response.get("Error", {}).get("Code")
        self._logger.error(f"{operation} failed: {exc}")
        return RemoteOperationError(
            f"{operation} failed: {exc}",
            operation=operation,
            error_code=error_code,
            pipeline_id=pipeline_id,
        )
