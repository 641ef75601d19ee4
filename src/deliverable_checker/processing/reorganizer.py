"""
Submission reorganization.

Turns one top-level submission archive, containing one archive per
student, into a ``deliverables/<student-id>/`` tree and removes every
intermediate artifact.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ..utils.files import ensure_dir
from ..utils.logging import get_logger
from .extractor import extract
from .filenames import derive_student_id
from .filetypes import is_archive

logger = get_logger(__name__)

DELIVERABLES_DIRNAME = "deliverables"
MACOSX_DIRNAME = "__MACOSX"


@dataclass
class ReorganizeResult:
    """Outcome of a reorganization run."""

    destination_dir: Path
    student_ids: list[str] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    @property
    def deliverables_dir(self) -> Path:
        return self.destination_dir / DELIVERABLES_DIRNAME


def deliverables_dir(destination_dir: Path) -> Path:
    """Path of the per-student deliverables directory."""
    return destination_dir / DELIVERABLES_DIRNAME


def reorganize(top_level_archive: Path, destination_dir: Path) -> ReorganizeResult:
    """
    Extract a submission archive and fan it out per student.

    Args:
        top_level_archive: Archive holding one archive per student
        destination_dir: Directory that ends up containing only ``deliverables/``

    Returns:
        ReorganizeResult listing the students processed

    Raises:
        UnsupportedFormatError: If the top-level archive type is unsupported
        ExtractionError: If any archive fails to extract
        InvalidStudentIdentifierError: If a filename yields no identifier
    """
    extract(top_level_archive, destination_dir)

    target_root = ensure_dir(deliverables_dir(destination_dir))

    # Snapshot before extracting anything, so new directories are never
    # mistaken for student archives.
    entries = sorted(p for p in destination_dir.iterdir() if p.is_file())
    target = len(entries)
    result = ReorganizeResult(destination_dir=destination_dir)

    for count, path in enumerate(entries, 1):
        student_id = derive_student_id(path.name)
        student_dir = target_root / student_id

        if is_archive(path):
            extract(path, student_dir)
        else:
            logger.debug(f"Not an archive, skipping: {path.name}")
            result.skipped.append(path)

        result.student_ids.append(student_id)
        logger.info(f"Extracted {student_id}'s deliverable. ({count}/{target})")

    remove_macosx_dirs(destination_dir)
    cleanup_destination(destination_dir)

    logger.info("Finished extracting files and cleaned up intermediary files")
    return result


def remove_macosx_dirs(root: Path) -> list[Path]:
    """
    Recursively delete every ``__MACOSX`` directory below ``root``.

    Args:
        root: Directory to search

    Returns:
        The directories that were removed
    """
    removed = []
    pending = [root]

    while pending:
        current = pending.pop()
        for path in sorted(current.iterdir()):
            if not path.is_dir() or path.is_symlink():
                continue
            if path.name == MACOSX_DIRNAME:
                shutil.rmtree(path)
                removed.append(path)
                logger.debug(f"Removed metadata directory: {path}")
            else:
                pending.append(path)

    return removed


def cleanup_destination(destination_dir: Path) -> list[Path]:
    """
    Remove every direct child of ``destination_dir`` except ``deliverables/``.

    Args:
        destination_dir: Reorganization destination

    Returns:
        The paths that were removed
    """
    removed = []

    for path in sorted(destination_dir.iterdir()):
        if path.is_dir() and not path.is_symlink():
            if path.name == DELIVERABLES_DIRNAME:
                continue
            shutil.rmtree(path)
        else:
            path.unlink()
        removed.append(path)

    return removed
