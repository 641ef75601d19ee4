import logging

import httpx
import pytest

from deliverable_checker.config.models import CheckerConfig, LLMSettings
from deliverable_checker.grading.llm import LLMError, MissingCredentialError
from deliverable_checker.pipeline import DeliverablePipeline
from deliverable_checker.validation.client import W3CValidator

from conftest import FakeChatModel, ValidatorStub


class _FailingFor(FakeChatModel):
    def __init__(self, student_marker):
        super().__init__()
        self.student_marker = student_marker

    def complete(self, prompt):
        if self.student_marker in prompt:
            raise LLMError("model unavailable")
        return super().complete(prompt)


def test_extract_then_validate_without_ai(tmp_path, submission_zip, validator, fake_llm):
    destination = tmp_path / "out"
    pipeline = DeliverablePipeline(CheckerConfig(), validator=validator, llm=fake_llm)

    reports = pipeline.run(submission_zip, destination)

    assert [r.student_id for r in reports] == ["alice", "bob"]
    assert all(len(r.issues) == 2 for r in reports)
    assert (destination / "deliverables" / "alice" / "index.json").exists()
    assert not (destination / "deliverables" / "alice" / "validate.txt").exists()
    assert fake_llm.prompts == []


def test_validate_with_ai_writes_feedback_per_student(tmp_path, submission_zip, validator, fake_llm):
    destination = tmp_path / "out"
    pipeline = DeliverablePipeline(
        CheckerConfig(), with_ai=True, finalize=True, validator=validator, llm=fake_llm
    )
    pipeline.extract(submission_zip, destination)

    reports = pipeline.validate(destination)

    for report in reports:
        assert [p.name for p in report.feedback_files] == ["validate.txt", "final.txt"]
        assert (report.directory / "final.txt").exists()
    assert len(fake_llm.prompts) == 2


def test_grade_isolates_failing_student(tmp_path, submission_zip, validator):
    destination = tmp_path / "out"
    (tmp_path / "description.txt").write_text("Lag en nettside.", encoding="utf-8")
    (tmp_path / "criteria.txt").write_text("Maks 10 poeng.", encoding="utf-8")
    llm = _FailingFor("Fil: broken.html")
    pipeline = DeliverablePipeline(CheckerConfig(), validator=validator, llm=llm)
    pipeline.extract(submission_zip, destination)
    (destination / "deliverables" / "alice" / "broken.html").write_text("<p>")

    reports = pipeline.grade(destination, tmp_path / "description.txt", tmp_path / "criteria.txt")

    by_id = {r.student_id: r for r in reports}
    assert by_id["alice"].failed
    assert "model unavailable" in by_id["alice"].error
    assert not by_id["bob"].failed
    assert (destination / "deliverables" / "bob" / "feedback.txt").exists()
    assert not (destination / "deliverables" / "alice" / "feedback.txt").exists()


def test_with_ai_requires_credentials_up_front(validator):
    with pytest.raises(MissingCredentialError):
        DeliverablePipeline(CheckerConfig(llm=LLMSettings(api_key=None)), with_ai=True, validator=validator)


def test_validate_without_deliverables_dir(tmp_path, validator):
    pipeline = DeliverablePipeline(CheckerConfig(), validator=validator)

    with pytest.raises(FileNotFoundError):
        pipeline.validate(tmp_path)


def test_unreachable_validator_marks_every_student_failed(tmp_path, submission_zip, fake_llm):
    stub = ValidatorStub()
    stub.fail_for = {"text/html", "text/css", "text/javascript"}
    destination = tmp_path / "out"

    with W3CValidator(transport=httpx.MockTransport(stub)) as validator:
        pipeline = DeliverablePipeline(
            CheckerConfig(), with_ai=True, finalize=True, validator=validator, llm=fake_llm
        )
        pipeline.extract(submission_zip, destination)
        reports = pipeline.validate(destination)

    assert [r.failed for r in reports] == [True, True]
    assert all("index.html" in r.error for r in reports)
    assert all(r.feedback_files == [] for r in reports)
    assert not (destination / "deliverables" / "alice" / "validate.txt").exists()
    assert not (destination / "deliverables" / "alice" / "final.txt").exists()
    assert fake_llm.prompts == []


def test_summary_names_failed_student(tmp_path, submission_zip, fake_llm, caplog):
    stub = ValidatorStub(messages=[{"type": "error", "message": "E"}])
    stub.fail_for = {"text/css"}
    destination = tmp_path / "out"

    with W3CValidator(transport=httpx.MockTransport(stub)) as validator:
        pipeline = DeliverablePipeline(CheckerConfig(), with_ai=True, validator=validator, llm=fake_llm)
        pipeline.extract(submission_zip, destination)
        (destination / "deliverables" / "bob" / "style.css").write_text("p {}")

        with caplog.at_level(logging.INFO, logger="deliverable_checker"):
            reports = pipeline.validate(destination)

    by_id = {r.student_id: r for r in reports}
    assert not by_id["alice"].failed
    assert by_id["alice"].issues == ["E"]
    assert by_id["bob"].failed
    assert by_id["bob"].error == "1 file(s) could not be validated: style.css"
    assert (destination / "deliverables" / "alice" / "validate.txt").exists()
    assert not (destination / "deliverables" / "bob" / "validate.txt").exists()
    assert "Validation failed for 1 student(s): bob" in caplog.text
