"""W3C Nu validator response models."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Message:
    """One finding reported by the validator."""

    message_type: str
    message: str
    subtype: str | None = None
    first_line: int | None = None
    first_column: int | None = None
    last_line: int | None = None
    last_column: int | None = None
    extract: str | None = None
    hilite_start: int | None = None
    hilite_length: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """Create a Message from one entry of the validator's ``messages`` array.

        Raises:
            ValueError: If the entry is not an object or has no message text
        """
        if not isinstance(data, dict):
            raise ValueError(f"Validator message is not a JSON object: {data!r}")
        if not isinstance(data.get("message"), str):
            raise ValueError(f"Validator message has no text: {data!r}")

        return cls(
            message_type=data.get("type", ""),
            message=data["message"],
            subtype=data.get("subType"),
            first_line=data.get("firstLine"),
            first_column=data.get("firstColumn"),
            last_line=data.get("lastLine"),
            last_column=data.get("lastColumn"),
            extract=data.get("extract"),
            hilite_start=data.get("hiliteStart"),
            hilite_length=data.get("hiliteLength"),
        )

    @property
    def is_issue(self) -> bool:
        """Errors and warnings are reported; informational messages are not."""
        return self.message_type == "error" or self.subtype == "warning"

    @property
    def location(self) -> str:
        """Human-readable ``line:column`` position, or empty if unknown."""
        line = self.last_line or self.first_line
        if line is None:
            return ""
        column = self.last_column or self.first_column
        return f"{line}:{column}" if column is not None else str(line)


@dataclass
class ValidationResult:
    """Decoded validator response for one source file."""

    messages: list[Message] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationResult":
        messages = data.get("messages", [])
        if not isinstance(messages, list):
            raise ValueError("Validator response has no messages list")
        return cls(messages=[Message.from_dict(m) for m in messages])

    @classmethod
    def from_json(cls, text: str) -> "ValidationResult":
        """Parse a raw validator response.

        Raises:
            ValueError: If the text is not a JSON object or has the wrong shape
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Validator response is not a JSON object")
        return cls.from_dict(data)

    @property
    def issues(self) -> list[Message]:
        """Actionable messages, in the order the validator reported them."""
        return [m for m in self.messages if m.is_issue]


@dataclass
class TreeValidation:
    """Validation outcome for every source file in one deliverable."""

    issues: list[Message] = field(default_factory=list)
    failures: dict[Path, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def failure_summary(self) -> str:
        names = ", ".join(p.name for p in self.failures)
        return f"{len(self.failures)} file(s) could not be validated: {names}"


def collect_issues(result: ValidationResult) -> list[str]:
    """Return the message texts of every actionable finding."""
    return [m.message for m in result.issues]
