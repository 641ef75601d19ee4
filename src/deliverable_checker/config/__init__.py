"""
Configuration module.

Handles loading of validator and language-model settings from YAML
files and the environment.
"""

from .loader import ConfigLoader
from .models import CheckerConfig, LLMSettings, ValidatorSettings

__all__ = ["ConfigLoader", "CheckerConfig", "LLMSettings", "ValidatorSettings"]
