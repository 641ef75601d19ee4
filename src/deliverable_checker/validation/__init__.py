"""
Markup validation module.

Sends student web sources to the W3C Nu validator and decodes its
responses.
"""

from .client import ValidatorError, W3CValidator, content_type_for, sidecar_path
from .models import Message, TreeValidation, ValidationResult, collect_issues

__all__ = [
    "W3CValidator",
    "ValidatorError",
    "content_type_for",
    "sidecar_path",
    "Message",
    "ValidationResult",
    "TreeValidation",
    "collect_issues",
]
