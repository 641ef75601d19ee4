"""Configuration data models."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_VALIDATOR_URL = "https://validator.w3.org/nu/?out=json"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; Validator/1.0)"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class ValidatorSettings:
    """W3C Nu validator connection settings."""

    url: str = DEFAULT_VALIDATOR_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidatorSettings":
        return cls(
            url=data.get("url", DEFAULT_VALIDATOR_URL),
            user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
            timeout=float(data.get("timeout", 30.0)),
        )


@dataclass
class LLMSettings:
    """Language model settings."""

    model: str = DEFAULT_MODEL
    timeout: float = 120.0
    api_key: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LLMSettings":
        return cls(
            model=data.get("model", DEFAULT_MODEL),
            timeout=float(data.get("timeout", 120.0)),
            api_key=data.get("api_key"),
        )


@dataclass
class CheckerConfig:
    """Complete checker configuration."""

    validator: ValidatorSettings = field(default_factory=ValidatorSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CheckerConfig":
        return cls(
            validator=ValidatorSettings.from_dict(data.get("validator") or {}),
            llm=LLMSettings.from_dict(data.get("llm") or {}),
        )
