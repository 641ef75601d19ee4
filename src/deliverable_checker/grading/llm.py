"""Chat-completion access to the language model."""

from typing import Protocol

import openai
from openai import OpenAI

from ..config.models import LLMSettings
from ..utils.logging import get_logger

logger = get_logger(__name__)


class MissingCredentialError(RuntimeError):
    """No API key is configured for the language model."""

    pass


class LLMError(Exception):
    """Language model request failed."""

    pass


class ChatCompleter(Protocol):
    """Anything that answers a single user prompt."""

    def complete(self, prompt: str) -> str | None: ...


class ChatModel:
    """Sends single-message chat completions to the OpenAI API."""

    def __init__(self, settings: LLMSettings, client: OpenAI | None = None):
        """
        Initialize the chat model.

        Args:
            settings: Model name, timeout and API key
            client: Optional preconfigured OpenAI client

        Raises:
            MissingCredentialError: If no client is given and no API key is set
        """
        if client is None and not settings.api_key:
            raise MissingCredentialError(
                "OPENAI_API_KEY is not set. "
                "Set it in the environment or in a .env file."
            )

        self.settings = settings
        # Retries are disabled; a failed request fails the student.
        self._client = client or OpenAI(
            api_key=settings.api_key,
            timeout=settings.timeout,
            max_retries=0,
        )

    def complete(self, prompt: str) -> str | None:
        """
        Send ``prompt`` as one user message.

        Args:
            prompt: Full prompt text

        Returns:
            Content of the first choice, or None if the API returned none

        Raises:
            LLMError: If the request fails or times out
        """
        logger.debug(f"Sending prompt to {self.settings.model} ({len(prompt)} characters)")

        try:
            response = self._client.chat.completions.create(
                model=self.settings.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            raise LLMError(f"Chat completion failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content
