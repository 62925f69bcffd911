"""Unit tests for DeployConfig."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from datapipeline_deploy.core.config import DEFAULT_REGION, DeployConfig
from datapipeline_deploy.core.exceptions import ConfigurationError


@pytest.fixture
def options() -> dict[str, Any]:
    return {
        "pipeline_name": "etl",
        "pipeline_definition_file": "defs/pipeline.json",
        "pipeline_tags": "env=prod",
        "pipeline_description": "nightly",
        "access_key_id": "AKIAEXAMPLEKEY1234",
        "secret_access_key": "s3cr3t",
        "region": None,
    }


class TestFromOptions:
    def test_explicit_options(self, options: dict[str, Any]) -> None:
        config = DeployConfig.from_options(options, env={})
        assert config.pipeline_name == "etl"
        assert config.pipeline_definition_file == Path("defs/pipeline.json")
        assert config.pipeline_tags == "env=prod"
        assert config.pipeline_description == "nightly"
        assert config.secret_access_key.get_secret_value() == "s3cr3t"
        assert config.session_token is None

    def test_region_defaults_to_us_east_1(self, options: dict[str, Any]) -> None:
        config = DeployConfig.from_options(options, env={})
        assert config.region == DEFAULT_REGION == "us-east-1"

    def test_credentials_fall_back_to_environment(
        self, options: dict[str, Any]
    ) -> None:
        options["access_key_id"] = None
        options["secret_access_key"] = None
        env = {
            "AWS_ACCESS_KEY_ID": "AKIAFROMENV9876",
            "AWS_SECRET_ACCESS_KEY": "envsecret",
            "AWS_SESSION_TOKEN": "tok",
        }
        config = DeployConfig.from_options(options, env=env)
        assert config.access_key_id == "AKIAFROMENV9876"
        assert config.secret_access_key.get_secret_value() == "envsecret"
        assert config.session_token is not None
        assert config.session_token.get_secret_value() == "tok"

    def test_explicit_credentials_win_over_environment(
        self, options: dict[str, Any]
    ) -> None:
        env = {"AWS_ACCESS_KEY_ID": "AKIAFROMENV9876"}
        config = DeployConfig.from_options(options, env=env)
        assert config.access_key_id == "AKIAEXAMPLEKEY1234"

    def test_empty_tags_are_none(self, options: dict[str, Any]) -> None:
        options["pipeline_tags"] = ""
        assert DeployConfig.from_options(options, env={}).pipeline_tags is None

    def test_pipeline_name_is_kept_as_given(self, options: dict[str, Any]) -> None:
        options["pipeline_name"] = " etl "
        assert DeployConfig.from_options(options, env={}).pipeline_name == " etl "


class TestMissingValues:
    @pytest.mark.parametrize(
        "field_name",
        ["pipeline_name", "pipeline_definition_file"],
    )
    def test_required_option_missing(
        self, options: dict[str, Any], field_name: str
    ) -> None:
        options[field_name] = None
        with pytest.raises(ConfigurationError, match=f"missing {field_name}") as e:
            DeployConfig.from_options(options, env={})
        assert e.value.context["field_name"] == field_name

    @pytest.mark.parametrize(
        "field_name, env_var",
        [
            ("access_key_id", "AWS_ACCESS_KEY_ID"),
            ("secret_access_key", "AWS_SECRET_ACCESS_KEY"),
        ],
    )
    def test_missing_credentials(
        self, options: dict[str, Any], field_name: str, env_var: str
    ) -> None:
        options[field_name] = None
        with pytest.raises(ConfigurationError) as e:
            DeployConfig.from_options(options, env={})
        assert e.value.context == {"field_name": field_name, "env_var": env_var}
        assert env_var in e.value.get_recovery_hint()

    def test_blank_name_is_invalid(self, options: dict[str, Any]) -> None:
        options["pipeline_name"] = "   "
        with pytest.raises(ConfigurationError, match="Invalid deploy configuration"):
            DeployConfig.from_options(options, env={})


def test_masked_access_key(options: dict[str, Any]) -> None:
    config = DeployConfig.from_options(options, env={})
    assert config.masked_access_key == "****************1234"
    assert "AKIA" not in config.masked_access_key


def test_secret_is_not_exposed_in_repr(options: dict[str, Any]) -> None:
    config = DeployConfig.from_options(options, env={})
    assert "s3cr3t" not in repr(config)
