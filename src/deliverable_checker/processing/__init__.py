"""
Submission processing module.

Handles archive extraction, student identification, reorganization of
submissions into per-student deliverables, and document text extraction.
"""

# File type detection
from .filetypes import (
    ArchiveKind,
    FileType,
    detect_archive_kind,
    detect_web_filetype,
    is_archive,
    is_web_source,
    HTML,
    CSS,
    JAVASCRIPT,
)

# Extraction
from .extractor import (
    ArchiveExtractor,
    ExtractionError,
    UnsupportedFormatError,
    ArchiveOpenError,
    ArchiveReadError,
    extract,
    get_extractor,
)

# Student identifiers
from .filenames import (
    InvalidStudentIdentifierError,
    derive_student_id,
    get_username,
    sanitize_filename,
)

# Reorganization
from .reorganizer import (
    DELIVERABLES_DIRNAME,
    ReorganizeResult,
    cleanup_destination,
    deliverables_dir,
    remove_macosx_dirs,
    reorganize,
)

# Document text
from .parser import (
    ParseError,
    TextExtractionResult,
    extract_text_from_pdf,
    load_document_text,
)

__all__ = [
    # File types
    "ArchiveKind",
    "FileType",
    "detect_archive_kind",
    "detect_web_filetype",
    "is_archive",
    "is_web_source",
    "HTML",
    "CSS",
    "JAVASCRIPT",
    # Extraction
    "ArchiveExtractor",
    "ExtractionError",
    "UnsupportedFormatError",
    "ArchiveOpenError",
    "ArchiveReadError",
    "extract",
    "get_extractor",
    # Student identifiers
    "InvalidStudentIdentifierError",
    "derive_student_id",
    "get_username",
    "sanitize_filename",
    # Reorganization
    "DELIVERABLES_DIRNAME",
    "ReorganizeResult",
    "cleanup_destination",
    "deliverables_dir",
    "remove_macosx_dirs",
    "reorganize",
    # Document text
    "ParseError",
    "TextExtractionResult",
    "extract_text_from_pdf",
    "load_document_text",
]
