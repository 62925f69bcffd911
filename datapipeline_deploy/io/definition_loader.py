"""Loader for pipeline definition files (JSON / YAML)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final

from ruamel.yaml import YAML

from ..core.exceptions import ConfigurationError, MalformedDefinitionError

logger = logging.getLogger(__name__)

_YAML_EXTS: Final[set[str]] = {".yaml", ".yml"}
_JSON_EXTS: Final[set[str]] = {".json"}

_yaml_parser = YAML(typ="safe")  # safe loader, YAML 1.2


class DefinitionLoader:
    """Read a pipeline definition from disk and return a Python `dict`."""

    supported_exts: set[str] = _YAML_EXTS | _JSON_EXTS

    @staticmethod
    def load(path: str | Path) -> Dict[str, Any]:
        """
        Load and parse a definition file.

        YAML files are parsed with ruamel.yaml; everything else is parsed as
        JSON, which is the native Data Pipeline definition format.

        Raises:
            ConfigurationError: If the file does not exist
            MalformedDefinitionError: If the file cannot be parsed or its
                top-level object is not a mapping
        """
        file_path = Path(path)

        # validation
        if not file_path.is_file():
            logger.error("Definition file not found: %s", file_path)
            raise ConfigurationError(
                f"Pipeline definition file not found: {file_path}",
                field_name="pipeline_definition_file",
            )

        suffix = file_path.suffix.lower()
        if suffix not in DefinitionLoader.supported_exts:
            logger.info(
                "Unrecognised extension '%s', parsing %s as JSON",
                suffix,
                file_path.name,
            )

        raw_text = file_path.read_text(encoding="utf-8")

        # parse
        try:
            if suffix in _YAML_EXTS:
                data = _yaml_parser.load(raw_text)
            else:  # .json and anything unrecognised
                data = json.loads(raw_text)
        except Exception as exc:
            raise MalformedDefinitionError(
                f"Cannot parse {file_path.name}: {exc}", source=str(file_path)
            ) from exc

        if not isinstance(data, dict):
            raise MalformedDefinitionError(
                "Top-level object must be a mapping", source=str(file_path)
            )

        logger.debug("Definition file loaded (%d root keys)", len(data))
        return data


def load_definition(path: str | Path) -> Dict[str, Any]:
    """Convenience wrapper around `DefinitionLoader.load`."""
    return DefinitionLoader.load(path)
