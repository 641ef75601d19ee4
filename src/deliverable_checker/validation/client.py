"""
W3C Nu markup validator client.

Posts HTML, CSS and JavaScript sources to the validator, stores each raw
JSON response next to its source file, and collects the errors and
warnings for a student's whole deliverable.
"""

import json
from pathlib import Path

import httpx

from ..config.models import ValidatorSettings
from ..processing.filetypes import detect_web_filetype
from ..utils.files import iter_files, write_text_file
from ..utils.logging import get_logger
from .models import TreeValidation, ValidationResult

logger = get_logger(__name__)


class ValidatorError(Exception):
    """Validator request failed or returned an unusable response."""

    pass


def content_type_for(path: Path) -> str | None:
    """Content-Type header for a source file, or None if it is not checked."""
    file_type = detect_web_filetype(path)
    return file_type.content_type if file_type else None


def sidecar_path(path: Path) -> Path:
    """Location of the stored validator response for a source file."""
    return path.with_suffix(".json")


class W3CValidator:
    """
    Client for the W3C Nu HTML/CSS/JS validator.

    Usage:
        with W3CValidator(ValidatorSettings()) as validator:
            outcome = validator.validate_tree(Path("deliverables/alice"))
    """

    def __init__(
        self,
        settings: ValidatorSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the validator client.

        Args:
            settings: Endpoint, user agent and timeout
            transport: Optional httpx transport (used by tests)
        """
        self.settings = settings or ValidatorSettings()
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.settings.timeout,
                headers={"User-Agent": self.settings.user_agent},
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "W3CValidator":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def check_source(self, content: str, content_type: str) -> str:
        """
        Send one source document to the validator.

        Args:
            content: Source text
            content_type: Full Content-Type header value

        Returns:
            Raw response body

        Raises:
            ValidatorError: If the request fails or times out
        """
        try:
            response = self.client.post(
                self.settings.url,
                content=content.encode("utf-8"),
                headers={"Content-Type": content_type},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ValidatorError(f"HTTP {e.response.status_code} from validator") from e
        except httpx.RequestError as e:
            raise ValidatorError(f"Validator request failed: {e}") from e

        return response.text

    def validate_file(self, path: Path) -> ValidationResult:
        """
        Validate one source file and store the raw response beside it.

        The response is written to ``<path without extension>.json``,
        replacing any earlier response.

        Args:
            path: ``.html``, ``.css`` or ``.js`` file

        Returns:
            Parsed validation result

        Raises:
            ValueError: If the file type is not validated
            OSError, UnicodeDecodeError: If the file cannot be read
            ValidatorError: If the request or response parsing fails
        """
        content_type = content_type_for(path)
        if content_type is None:
            raise ValueError(f"Not an HTML, CSS or JS file: {path}")

        content = path.read_text(encoding="utf-8")

        logger.info(f"Posting file to W3 Validator: {path}")
        response_text = self.check_source(content, content_type)

        output_path = write_text_file(sidecar_path(path), response_text)
        logger.debug(f"Wrote response to {output_path}")

        try:
            return ValidationResult.from_json(output_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, ValueError) as e:
            raise ValidatorError(f"Malformed validator response for {path}: {e}") from e

    def validate_tree(self, deliverable_dir: Path) -> TreeValidation:
        """
        Validate every HTML, CSS and JS file below a student's directory.

        A file that cannot be read or validated is logged and recorded in
        ``failures``; its siblings are still checked.

        Args:
            deliverable_dir: The student's deliverable directory

        Returns:
            Errors and warnings from all files, in walk order, plus the
            files that could not be validated
        """
        outcome = TreeValidation()

        for path in iter_files(deliverable_dir):
            if content_type_for(path) is None:
                continue

            try:
                result = self.validate_file(path)
            except (OSError, UnicodeDecodeError, ValidatorError) as e:
                logger.error(f"Could not validate {path}: {e}")
                outcome.failures[path] = str(e)
                continue

            outcome.issues.extend(result.issues)

        return outcome
