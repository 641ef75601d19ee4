"""
File type detection.

Archive kinds and checkable web source types are both recognized
purely by filename extension. Matching is case-sensitive: ``.ZIP`` is
not an archive and ``INDEX.HTML`` is not validated.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ArchiveKind(Enum):
    """Archive formats accepted for submissions."""

    ZIP = ".zip"
    TAR = ".tar"
    RAR = ".rar"

    @property
    def extension(self) -> str:
        """Extension including the leading dot."""
        return self.value


@dataclass(frozen=True)
class FileType:
    """A web source type that can be sent to the markup validator."""

    extension: str
    mime_type: str
    description: str

    @property
    def suffix(self) -> str:
        """Extension including the leading dot."""
        return f".{self.extension}"

    @property
    def content_type(self) -> str:
        """Content-Type header value for validator requests."""
        return f"{self.mime_type}; charset=utf-8"


# -----------------------------------------------------------------------------
# Known File Types
# -----------------------------------------------------------------------------

HTML = FileType("html", "text/html", "HTML Document")
CSS = FileType("css", "text/css", "CSS Stylesheet")
JAVASCRIPT = FileType("js", "text/javascript", "JavaScript Source")

WEB_FILETYPES: tuple[FileType, ...] = (HTML, CSS, JAVASCRIPT)


# -----------------------------------------------------------------------------
# Detection Functions
# -----------------------------------------------------------------------------


def detect_archive_kind(path: Path) -> ArchiveKind | None:
    """
    Detect the archive kind of a file by its extension.

    Args:
        path: Path to the file

    Returns:
        Matching ArchiveKind, or None if the extension is not recognized
    """
    for kind in ArchiveKind:
        if path.suffix == kind.extension:
            return kind
    return None


def is_archive(path: Path) -> bool:
    """Check if a file has a recognized archive extension."""
    return detect_archive_kind(path) is not None


def detect_web_filetype(path: Path) -> FileType | None:
    """
    Detect whether a file is an HTML, CSS or JavaScript source.

    Args:
        path: Path to the file

    Returns:
        Matching FileType, or None for every other file
    """
    for file_type in WEB_FILETYPES:
        if path.name.endswith(file_type.suffix):
            return file_type
    return None


def is_web_source(path: Path) -> bool:
    """Check if a file should be sent to the markup validator."""
    return detect_web_filetype(path) is not None
