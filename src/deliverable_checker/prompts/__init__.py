"""
Prompt templates module.

Contains the fixed prompts used for validation and grading feedback.
"""

from .templates import (
    GRADING_FEEDBACK,
    NO_ISSUES_MESSAGE,
    SCORE_LINE_FORMAT,
    VALIDATION_FEEDBACK,
    VALIDATION_FEEDBACK_HEADER,
    PromptTemplate,
)

__all__ = [
    "PromptTemplate",
    "GRADING_FEEDBACK",
    "NO_ISSUES_MESSAGE",
    "SCORE_LINE_FORMAT",
    "VALIDATION_FEEDBACK",
    "VALIDATION_FEEDBACK_HEADER",
]
