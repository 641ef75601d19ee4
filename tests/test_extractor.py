import pytest

from deliverable_checker.processing import extractor as extractor_module
from deliverable_checker.processing.extractor import (
    ArchiveOpenError,
    RarExtractor,
    TarExtractor,
    UnsupportedFormatError,
    ZipExtractor,
    extract,
    get_extractor,
)
from deliverable_checker.processing.filetypes import ArchiveKind, detect_archive_kind

from conftest import make_tar, make_zip

FILES = {
    "index.html": b"<html></html>",
    "css/style.css": b"body { color: red; }",
    "js/app.js": bytes(range(256)),
}


def _read_tree(root):
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in root.rglob("*")
        if p.is_file()
    }


def test_zip_roundtrip_preserves_tree(tmp_path):
    archive = make_zip(tmp_path / "a.zip", FILES)
    destination = tmp_path / "out" / "nested"

    extract(archive, destination)

    assert _read_tree(destination) == FILES


def test_tar_roundtrip_preserves_tree(tmp_path):
    archive = make_tar(tmp_path / "a.tar", FILES)
    destination = tmp_path / "out"

    extract(archive, destination)

    assert _read_tree(destination) == FILES


@pytest.mark.parametrize("name", ["a.7z", "a.ZIP", "archive", "a.tar.gz"])
def test_unsupported_extension(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"data")

    with pytest.raises(UnsupportedFormatError):
        extract(path, tmp_path / "out")


def test_corrupt_zip_raises_open_error(tmp_path):
    path = tmp_path / "broken.zip"
    path.write_bytes(b"not a zip")

    with pytest.raises(ArchiveOpenError):
        extract(path, tmp_path / "out")


def test_missing_archive_raises_open_error(tmp_path):
    with pytest.raises(ArchiveOpenError):
        extract(tmp_path / "missing.tar", tmp_path / "out")


def test_factory_returns_one_extractor_per_kind():
    assert isinstance(get_extractor(ArchiveKind.ZIP), ZipExtractor)
    assert isinstance(get_extractor(ArchiveKind.TAR), TarExtractor)
    assert isinstance(get_extractor(ArchiveKind.RAR), RarExtractor)


def test_detect_archive_kind_is_case_sensitive(tmp_path):
    assert detect_archive_kind(tmp_path / "x.rar") is ArchiveKind.RAR
    assert detect_archive_kind(tmp_path / "x.RAR") is None


class _FakeRarInfo:
    def __init__(self, filename, data=None):
        self.filename = filename
        self.data = data

    def is_dir(self):
        return self.data is None


class _FakeRarFile:
    entries = []

    def __init__(self, path):
        self.path = path

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

    def infolist(self):
        return self.entries

    def open(self, info):
        import io

        return io.BytesIO(info.data)


def test_rar_writes_files_and_skips_directory_entries(tmp_path, monkeypatch):
    _FakeRarFile.entries = [
        _FakeRarInfo("site/"),
        _FakeRarInfo("site/index.html", b"<html></html>"),
        _FakeRarInfo("empty/"),
    ]
    monkeypatch.setattr(extractor_module.rarfile, "RarFile", _FakeRarFile)
    archive = tmp_path / "a.rar"
    archive.write_bytes(b"Rar!")
    destination = tmp_path / "out"

    extract(archive, destination)

    assert (destination / "site" / "index.html").read_bytes() == b"<html></html>"
    assert not (destination / "empty").exists()


def test_rar_open_failure(tmp_path):
    archive = tmp_path / "a.rar"
    archive.write_bytes(b"definitely not rar")

    with pytest.raises(ArchiveOpenError):
        extract(archive, tmp_path / "out")
