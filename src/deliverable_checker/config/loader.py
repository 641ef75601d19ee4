"""Configuration loader for validator and model settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import CheckerConfig

ENV_API_KEY = "OPENAI_API_KEY"
ENV_MODEL = "OPENAI_MODEL"
ENV_VALIDATOR_URL = "DELIVERABLE_CHECKER_VALIDATOR_URL"


class ConfigLoader:
    """Loads configuration from an optional YAML file and the environment."""

    def __init__(self, load_env_file: bool = True):
        """Initialize the config loader.

        Args:
            load_env_file: Whether to read a ``.env`` file into the environment
        """
        self.load_env_file = load_env_file

    def load(self, config_file: str | Path | None = None) -> CheckerConfig:
        """Load the checker configuration.

        Values from the environment take precedence over the YAML file.

        Args:
            config_file: Optional path to a YAML config file

        Returns:
            Parsed CheckerConfig object
        """
        if self.load_env_file:
            load_dotenv()

        data: dict[str, Any] = {}
        if config_file is not None:
            data = self._load_yaml(Path(config_file))

        config = CheckerConfig.from_dict(data)
        self._apply_env(config)
        return config

    def _apply_env(self, config: CheckerConfig) -> None:
        """Overlay environment variables on a loaded config."""
        api_key = os.getenv(ENV_API_KEY)
        if api_key:
            config.llm.api_key = api_key

        model = os.getenv(ENV_MODEL)
        if model:
            config.llm.model = model

        validator_url = os.getenv(ENV_VALIDATOR_URL)
        if validator_url:
            config.validator.url = validator_url

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load and parse a YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
