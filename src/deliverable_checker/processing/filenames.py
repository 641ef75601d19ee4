"""
Student identifiers derived from submission filenames.

LMS exports name each submission ``<prefix>_<username>_<suffix>.<ext>``;
the username token becomes the name of the student's deliverable
directory.
"""

from __future__ import annotations

import re

from ..utils.logging import get_logger

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class InvalidStudentIdentifierError(ValueError):
    """No usable student identifier could be derived from a filename."""

    pass


def get_username(filename: str) -> str:
    """
    Extract the username token from a submission filename.

    ``prefix_username_suffix.zip`` yields ``username``. A name with a
    single underscore, ``username_label.zip``, yields its first token.

    Returns:
        The username, or an empty string when there is none
    """
    tokens = filename.split("_")

    if len(tokens) >= 3:
        username = tokens[1]
    elif len(tokens) == 2:
        username = tokens[0]
    else:
        return ""

    if username in (".", ".."):
        return ""
    return username


def sanitize_filename(filename: str) -> str:
    """
    Strip every character except ASCII letters, digits, ``_`` and ``-``.
    """
    return _UNSAFE_CHARS.sub("", filename)


def derive_student_id(filename: str) -> str:
    """
    Derive the student identifier for a submission archive.

    Falls back to the sanitized filename when no username token exists.

    Args:
        filename: Bare filename of the submission (no directories)

    Returns:
        Non-empty identifier safe to use as a directory name

    Raises:
        InvalidStudentIdentifierError: If both rules produce an empty string
    """
    username = get_username(filename)
    if username:
        return username

    fallback = sanitize_filename(filename)
    if not fallback:
        raise InvalidStudentIdentifierError(
            f"Cannot derive a student identifier from filename: {filename!r}"
        )

    logger.debug(f"No username token in {filename!r}, using {fallback!r}")
    return fallback
