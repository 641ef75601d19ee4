"""
Deliverable checking pipeline.

Orchestrates the workflow from a submission archive to per-student
validation results and feedback files.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .config.models import CheckerConfig
from .grading.feedback import FeedbackGenerator
from .grading.llm import ChatCompleter, ChatModel, LLMError
from .processing.parser import load_document_text
from .processing.reorganizer import ReorganizeResult, deliverables_dir, reorganize
from .validation.client import ValidatorError, W3CValidator
from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StudentReport:
    """What the pipeline did for one student."""

    student_id: str
    directory: Path
    issues: list[str] = field(default_factory=list)
    feedback_files: list[Path] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class DeliverablePipeline:
    """Extracts, validates and grades student deliverables."""

    def __init__(
        self,
        config: CheckerConfig,
        with_ai: bool = False,
        finalize: bool = False,
        validator: W3CValidator | None = None,
        llm: ChatCompleter | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Checker configuration
            with_ai: Write AI-generated validation feedback
            finalize: Also copy validation feedback to ``final.txt``
            validator: Optional validator client (created from config if omitted)
            llm: Optional chat model (created from config on first use if omitted)

        Raises:
            MissingCredentialError: If AI is requested and no API key is configured
        """
        self.config = config
        self.with_ai = with_ai
        self.finalize = finalize
        self.validator = validator or W3CValidator(config.validator)
        self._llm = llm
        self._feedback: FeedbackGenerator | None = None

        if with_ai:
            self._feedback = FeedbackGenerator(self.llm)

    @property
    def llm(self) -> ChatCompleter:
        """Get or create the chat model."""
        if self._llm is None:
            self._llm = ChatModel(self.config.llm)
        return self._llm

    @property
    def feedback(self) -> FeedbackGenerator:
        """Get or create the feedback generator."""
        if self._feedback is None:
            self._feedback = FeedbackGenerator(self.llm)
        return self._feedback

    def close(self) -> None:
        self.validator.close()

    def __enter__(self) -> "DeliverablePipeline":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def extract(self, archive_file: Path, destination_dir: Path) -> ReorganizeResult:
        """Extract a submission archive into per-student deliverables."""
        logger.info(f"Extracting {archive_file} into {destination_dir}")
        return reorganize(archive_file, destination_dir)

    def validate(self, destination_dir: Path) -> list[StudentReport]:
        """Validate every student's deliverable.

        One student's failure is logged and recorded in its report; the
        remaining students are still processed. A student with any file
        that could not be validated gets no feedback files.

        Args:
            destination_dir: Directory holding ``deliverables/``

        Returns:
            One StudentReport per student directory
        """
        reports = []

        for student_dir in self._student_dirs(destination_dir):
            report = StudentReport(student_id=student_dir.name, directory=student_dir)
            reports.append(report)

            try:
                outcome = self.validator.validate_tree(student_dir)
                report.issues = [m.message for m in outcome.issues]
                logger.info(f"{report.student_id}: {len(report.issues)} validation issue(s)")

                # An incomplete result must not be written up as clean.
                if outcome.failed:
                    report.error = outcome.failure_summary()
                    logger.error(f"Validation incomplete for {report.student_id}: {report.error}")
                    continue

                if self.with_ai:
                    report.feedback_files = self.feedback.write_validation_feedback(
                        student_dir,
                        report.issues,
                        finalize=self.finalize,
                    )
            except (OSError, ValidatorError, LLMError) as e:
                report.error = str(e)
                logger.error(f"Validation failed for {report.student_id}: {e}")

        self._log_summary("validation", reports)
        return reports

    def grade(
        self,
        destination_dir: Path,
        description_file: Path,
        criteria_file: Path,
    ) -> list[StudentReport]:
        """Write AI grading feedback for every student's deliverable.

        Args:
            destination_dir: Directory holding ``deliverables/``
            description_file: Assignment description (PDF or text)
            criteria_file: Grading criteria (PDF or text)

        Returns:
            One StudentReport per student directory

        Raises:
            ParseError: If the description or criteria cannot be read
        """
        description = load_document_text(description_file)
        criteria = load_document_text(criteria_file)
        logger.info(
            f"Loaded description ({len(description)} characters) "
            f"and criteria ({len(criteria)} characters)"
        )

        reports = []

        for student_dir in self._student_dirs(destination_dir):
            report = StudentReport(student_id=student_dir.name, directory=student_dir)
            reports.append(report)

            try:
                path = self.feedback.write_grading_feedback(student_dir, description, criteria)
                report.feedback_files.append(path)
            except (OSError, LLMError) as e:
                report.error = str(e)
                logger.error(f"Grading failed for {report.student_id}: {e}")

        self._log_summary("grading", reports)
        return reports

    def run(
        self,
        archive_file: Path,
        destination_dir: Path,
        description_file: Path | None = None,
        criteria_file: Path | None = None,
    ) -> list[StudentReport]:
        """Extract, validate and, when documents are given, grade.

        Raises:
            ExtractionError: If the archives cannot be extracted
            ParseError: If the description or criteria cannot be read
        """
        self.extract(archive_file, destination_dir)
        reports = self.validate(destination_dir)

        if description_file is not None and criteria_file is not None:
            graded = {r.student_id: r for r in self.grade(destination_dir, description_file, criteria_file)}
            for report in reports:
                result = graded.get(report.student_id)
                if result is None:
                    continue
                report.feedback_files.extend(result.feedback_files)
                if result.error and not report.error:
                    report.error = result.error

        return reports

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _student_dirs(self, destination_dir: Path) -> list[Path]:
        root = deliverables_dir(destination_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"No deliverables directory in {destination_dir}")
        return sorted(p for p in root.iterdir() if p.is_dir())

    def _log_summary(self, step: str, reports: list[StudentReport]) -> None:
        failed = [r.student_id for r in reports if r.failed]
        if failed:
            logger.warning(f"{step.capitalize()} failed for {len(failed)} student(s): {', '.join(failed)}")
        else:
            logger.info(f"Finished {step} of {len(reports)} deliverable(s)")
