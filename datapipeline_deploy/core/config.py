"""Deploy configuration surface."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"

ACCESS_KEY_ENV = "AWS_ACCESS_KEY_ID"
SECRET_KEY_ENV = "AWS_SECRET_ACCESS_KEY"
SESSION_TOKEN_ENV = "AWS_SESSION_TOKEN"


class DeployConfig(BaseModel):
    """
    Validated inputs for one deploy invocation.

    Credentials are opaque here: they are passed through to the gateway and
    only ever logged in masked form.
    """

    pipeline_name: str = Field(..., description="Name of the pipeline to replace.")
    pipeline_definition_file: Path = Field(
        ..., description="Path to the JSON/YAML source definition."
    )
    pipeline_tags: str | None = Field(
        None, description="Comma-separated key=value tag list."
    )
    pipeline_description: str | None = Field(
        None, description="Description attached to the created pipeline."
    )
    access_key_id: str = Field(..., description="AWS access key id.")
    secret_access_key: SecretStr = Field(..., description="AWS secret access key.")
    session_token: SecretStr | None = Field(
        None, description="Optional AWS session token."
    )
    region: str = Field(DEFAULT_REGION, description="AWS region of the service.")

    model_config = ConfigDict(extra="forbid", frozen=True)

    # ----- validators --------------------------------------------------------
    @field_validator("pipeline_name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        # Matched exactly against remote names, so kept as given
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("access_key_id", "region")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @property
    def masked_access_key(self) -> str:
        """Access key with everything but the last four characters hidden."""
        return self.access_key_id[-4:].rjust(20, "*")

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], env: Mapping[str, str] | None = None
    ) -> DeployConfig:
        """
        Build a config from explicit options, falling back to the environment
        for credentials and to `us-east-1` for the region.

        Args:
            options: Option values keyed by field name; None means "unset"
            env: Environment mapping, defaults to `os.environ`

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        env = os.environ if env is None else env

        pipeline_name = options.get("pipeline_name")
        if not pipeline_name:
            raise ConfigurationError(
                "missing pipeline_name", field_name="pipeline_name"
            )

        definition_file = options.get("pipeline_definition_file")
        if not definition_file:
            raise ConfigurationError(
                "missing pipeline_definition_file",
                field_name="pipeline_definition_file",
            )

        access_key_id = options.get("access_key_id") or env.get(ACCESS_KEY_ENV)
        if not access_key_id:
            raise ConfigurationError(
                "missing access_key_id",
                field_name="access_key_id",
                env_var=ACCESS_KEY_ENV,
            )

        secret_access_key = options.get("secret_access_key") or env.get(
            SECRET_KEY_ENV
        )
        if not secret_access_key:
            raise ConfigurationError(
                "missing secret_access_key",
                field_name="secret_access_key",
                env_var=SECRET_KEY_ENV,
            )

        session_token = options.get("session_token") or env.get(SESSION_TOKEN_ENV)

        try:
            return cls(
                pipeline_name=pipeline_name,
                pipeline_definition_file=Path(definition_file),
                pipeline_tags=options.get("pipeline_tags") or None,
                pipeline_description=options.get("pipeline_description"),
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
                session_token=session_token or None,
                region=options.get("region") or DEFAULT_REGION,
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid deploy configuration: {exc}") from exc
