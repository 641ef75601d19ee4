"""
Archive extraction.

Unpacks ZIP, TAR and RAR archives into a destination directory. The
archive kind is chosen by extension and extraction is dispatched through
one extractor implementation per kind.
"""

import shutil
import tarfile
import zipfile
import zlib
from abc import ABC, abstractmethod
from pathlib import Path

import rarfile

from ..utils.files import ensure_dir
from ..utils.logging import get_logger
from .filetypes import ArchiveKind, detect_archive_kind

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class ExtractionError(Exception):
    """Error during archive extraction."""

    pass


class UnsupportedFormatError(ExtractionError):
    """Archive extension not supported."""

    pass


class ArchiveOpenError(ExtractionError):
    """Archive is missing, corrupt or not of the expected format."""

    pass


class ArchiveReadError(ExtractionError):
    """Archive opened but its entries could not be read."""

    pass


# -----------------------------------------------------------------------------
# Extractors
# -----------------------------------------------------------------------------


class ArchiveExtractor(ABC):
    """Unpacks one kind of archive."""

    kind: ArchiveKind

    @abstractmethod
    def extract(self, archive_path: Path, destination_dir: Path) -> None:
        """Unpack every entry of ``archive_path`` below ``destination_dir``.

        Raises:
            ArchiveOpenError: If the archive cannot be opened
            ArchiveReadError: If reading entries fails
        """

    def _check_exists(self, archive_path: Path) -> None:
        if not archive_path.is_file():
            raise ArchiveOpenError(f"Archive not found: {archive_path}")


class ZipExtractor(ArchiveExtractor):
    """Random-access extraction of ZIP archives."""

    kind = ArchiveKind.ZIP

    def extract(self, archive_path: Path, destination_dir: Path) -> None:
        self._check_exists(archive_path)

        try:
            zf = zipfile.ZipFile(archive_path, "r")
        except zipfile.BadZipFile as e:
            raise ArchiveOpenError(f"Invalid ZIP file: {archive_path}") from e

        with zf:
            ensure_dir(destination_dir)
            try:
                zf.extractall(destination_dir)
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                raise ArchiveReadError(f"Corrupt ZIP entry in {archive_path}: {e}") from e
            except RuntimeError as e:
                # zipfile signals encrypted members with RuntimeError
                raise ArchiveReadError(f"Cannot read {archive_path}: {e}") from e


class TarExtractor(ArchiveExtractor):
    """Sequential stream extraction of TAR archives."""

    kind = ArchiveKind.TAR

    def extract(self, archive_path: Path, destination_dir: Path) -> None:
        self._check_exists(archive_path)

        try:
            tf = tarfile.open(archive_path, mode="r|")
        except tarfile.TarError as e:
            raise ArchiveOpenError(f"Invalid TAR file: {archive_path}") from e

        with tf:
            ensure_dir(destination_dir)
            try:
                tf.extractall(destination_dir, filter="tar")
            except tarfile.TarError as e:
                raise ArchiveReadError(f"TAR extraction failed for {archive_path}: {e}") from e


class RarExtractor(ArchiveExtractor):
    """Entry-by-entry extraction of RAR archives.

    Only file entries are written; directories come into existence as
    parents of the files they contain.
    """

    kind = ArchiveKind.RAR

    def extract(self, archive_path: Path, destination_dir: Path) -> None:
        self._check_exists(archive_path)

        try:
            rf = rarfile.RarFile(str(archive_path))
        except rarfile.Error as e:
            raise ArchiveOpenError(f"Failed to open RAR archive: {archive_path}") from e

        with rf:
            ensure_dir(destination_dir)
            for info in rf.infolist():
                if info.is_dir():
                    logger.debug(f"Skipping non-file entry: {info.filename}")
                    continue

                output_path = destination_dir / info.filename
                ensure_dir(output_path.parent)
                logger.debug(f"Extracting file to: {output_path}")

                try:
                    with rf.open(info) as src, open(output_path, "wb") as dst:
                        shutil.copyfileobj(src, dst)
                except rarfile.Error as e:
                    raise ArchiveReadError(
                        f"Failed to extract {info.filename} from {archive_path}: {e}"
                    ) from e


_EXTRACTORS: dict[ArchiveKind, type[ArchiveExtractor]] = {
    ArchiveKind.ZIP: ZipExtractor,
    ArchiveKind.TAR: TarExtractor,
    ArchiveKind.RAR: RarExtractor,
}


def get_extractor(kind: ArchiveKind) -> ArchiveExtractor:
    """Return the extractor for an archive kind."""
    return _EXTRACTORS[kind]()


# -----------------------------------------------------------------------------
# Extraction Functions
# -----------------------------------------------------------------------------


def extract(archive_path: Path, destination_dir: Path) -> None:
    """
    Extract any supported archive into a directory.

    The destination is created if it does not exist.

    Args:
        archive_path: Path to a ``.zip``, ``.tar`` or ``.rar`` file
        destination_dir: Directory to extract to

    Raises:
        UnsupportedFormatError: If the extension is not a supported kind
        ArchiveOpenError: If the archive cannot be opened
        ArchiveReadError: If reading entries fails
    """
    kind = detect_archive_kind(archive_path)
    if kind is None:
        raise UnsupportedFormatError(
            f"Unsupported archive type: {archive_path.suffix or archive_path.name}"
        )

    logger.debug(f"Extracting {kind.name}: {archive_path} -> {destination_dir}")
    get_extractor(kind).extract(archive_path, destination_dir)
