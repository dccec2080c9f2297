"""
Configuration for infra-stages.

Values are resolved with the following precedence (highest first):
1. Environment variables (INFRA_STAGES_*)
2. A YAML config file (explicit path, or infra-stages.yaml in the current directory)
3. Built-in defaults
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class StageConfig:
    """
    Settings shared by the test-data store and the stage runner.

    Attributes:
        data_dir_name: Sub-directory of the Working Directory holding records
        skip_env_prefix: Prefix of the per-stage skip environment variables
        json_indent: Indentation used when writing records
    """

    data_dir_name: str = ".test-data"
    skip_env_prefix: str = "SKIP_"
    json_indent: int = 2

    def to_dict(self) -> dict[str, Any]:
        return {
            "data_dir_name": self.data_dir_name,
            "skip_env_prefix": self.skip_env_prefix,
            "json_indent": self.json_indent,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StageConfig":
        defaults = cls()
        config = cls(
            data_dir_name=data.get("data_dir_name", defaults.data_dir_name),
            skip_env_prefix=data.get("skip_env_prefix", defaults.skip_env_prefix),
            json_indent=data.get("json_indent", defaults.json_indent),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """
        Check that the settings are usable.

        Raises:
            ConfigError: If any value is out of range or of the wrong type
        """
        if not isinstance(self.data_dir_name, str) or not self.data_dir_name:
            raise ConfigError("data_dir_name must be a non-empty string")
        if os.sep in self.data_dir_name or (os.altsep and os.altsep in self.data_dir_name):
            raise ConfigError(f"data_dir_name must be a single path component: {self.data_dir_name!r}")
        if not isinstance(self.skip_env_prefix, str) or not self.skip_env_prefix:
            raise ConfigError("skip_env_prefix must be a non-empty string")
        if isinstance(self.json_indent, bool) or not isinstance(self.json_indent, int) or self.json_indent < 0:
            raise ConfigError(f"json_indent must be a non-negative integer, got {self.json_indent!r}")


class ConfigLoader:
    """Builds a StageConfig from defaults, a YAML file and the environment."""

    CONFIG_FILE_NAME = "infra-stages.yaml"

    ENV_DATA_DIR = "INFRA_STAGES_DATA_DIR"
    ENV_SKIP_PREFIX = "INFRA_STAGES_SKIP_PREFIX"
    ENV_JSON_INDENT = "INFRA_STAGES_JSON_INDENT"

    def __init__(self, search_dir: Path | None = None):
        """
        Args:
            search_dir: Directory searched for the default config file.
                Defaults to the current working directory.
        """
        self.search_dir = Path(search_dir) if search_dir is not None else Path.cwd()

    def load(
        self,
        config_path: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> StageConfig:
        """
        Resolve the effective configuration.

        Args:
            config_path: Explicit YAML file. Must exist when given.
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Validated StageConfig

        Raises:
            ConfigError: If the file is unreadable YAML or holds bad values
            FileNotFoundError: If an explicit config_path does not exist
        """
        data: dict[str, Any] = {}

        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise FileNotFoundError(f"Config file not found: {path}")
            data.update(self._read_file(path))
        else:
            default_path = self.search_dir / self.CONFIG_FILE_NAME
            if default_path.is_file():
                data.update(self._read_file(default_path))

        data.update(self._read_env(os.environ if environ is None else environ))
        return StageConfig.from_dict(data)

    def _read_file(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        logger.debug("Loaded infra-stages config from %s", path)
        return data

    def _read_env(self, environ: Mapping[str, str]) -> dict[str, Any]:
        data: dict[str, Any] = {}

        if environ.get(self.ENV_DATA_DIR):
            data["data_dir_name"] = environ[self.ENV_DATA_DIR]
        if environ.get(self.ENV_SKIP_PREFIX):
            data["skip_env_prefix"] = environ[self.ENV_SKIP_PREFIX]

        indent = environ.get(self.ENV_JSON_INDENT)
        if indent:
            try:
                data["json_indent"] = int(indent)
            except ValueError as e:
                raise ConfigError(f"{self.ENV_JSON_INDENT} must be an integer, got {indent!r}") from e

        return data


def load_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> StageConfig:
    """Shortcut for ConfigLoader().load()."""
    return ConfigLoader().load(config_path=config_path, environ=environ)
