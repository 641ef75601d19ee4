"""
Grading module.

Turns validator findings and student code into AI-written feedback.
"""

from .feedback import (
    FEEDBACK_FILENAME,
    FINAL_FILENAME,
    VALIDATE_FILENAME,
    FeedbackGenerator,
    build_code_listing,
)
from .llm import ChatCompleter, ChatModel, LLMError, MissingCredentialError

__all__ = [
    "FeedbackGenerator",
    "build_code_listing",
    "FEEDBACK_FILENAME",
    "FINAL_FILENAME",
    "VALIDATE_FILENAME",
    "ChatCompleter",
    "ChatModel",
    "LLMError",
    "MissingCredentialError",
]
