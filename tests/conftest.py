"""
Shared test fixtures for deliverable_checker.
Archives are built in tmp_path; the validator and the language model
are replaced by in-process fakes. Zero network calls.
"""
import io
import json
import tarfile
import zipfile

import httpx
import pytest

from deliverable_checker.config.models import ValidatorSettings
from deliverable_checker.validation.client import W3CValidator

INDEX_HTML = b"<!DOCTYPE html><html><head><title>t</title></head><body></body></html>"


def make_zip(path, files):
    """Write a ZIP archive containing ``files`` (name -> bytes)."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return path


def make_tar(path, files):
    """Write an uncompressed TAR archive containing ``files``."""
    with tarfile.open(path, "w") as tf:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return path


def zip_bytes(files):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buffer.getvalue()


class FakeChatModel:
    """Records prompts and returns a canned answer."""

    def __init__(self, answer="Forklaring av feilene."):
        self.answer = answer
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        return self.answer


class ValidatorStub:
    """httpx handler that answers with queued or default validator responses."""

    def __init__(self, messages=None):
        self.messages = messages if messages is not None else []
        self.requests = []
        self.fail_for = set()

    def __call__(self, request):
        self.requests.append(request)
        if request.headers["Content-Type"].split(";")[0] in self.fail_for:
            return httpx.Response(503, text="unavailable")
        return httpx.Response(200, text=json.dumps({"messages": self.messages}))


@pytest.fixture
def fake_llm():
    return FakeChatModel()


@pytest.fixture
def validator_stub():
    return ValidatorStub(
        messages=[
            {"type": "info", "message": "Trailing slash on void elements"},
            {"type": "error", "message": "Stray end tag div.", "lastLine": 4, "lastColumn": 10},
            {"type": "info", "subType": "warning", "message": "Consider adding a lang attribute."},
        ]
    )


@pytest.fixture
def validator(validator_stub):
    client = W3CValidator(ValidatorSettings(timeout=5.0), transport=httpx.MockTransport(validator_stub))
    yield client
    client.close()


@pytest.fixture
def submission_zip(tmp_path):
    """Top-level archive holding one ZIP per student."""
    return make_zip(
        tmp_path / "submissions.zip",
        {
            "alice_report.zip": zip_bytes({"index.html": INDEX_HTML}),
            "bob_report.zip": zip_bytes({"index.html": INDEX_HTML}),
        },
    )
