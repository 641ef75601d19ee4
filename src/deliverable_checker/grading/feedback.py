"""Feedback generation for student deliverables."""

from pathlib import Path

from ..processing.filetypes import detect_web_filetype
from ..prompts.templates import (
    GRADING_FEEDBACK,
    NO_ISSUES_MESSAGE,
    VALIDATION_FEEDBACK,
    VALIDATION_FEEDBACK_HEADER,
)
from ..utils.files import iter_files, write_text_file
from ..utils.logging import get_logger
from .llm import ChatCompleter, LLMError

logger = get_logger(__name__)

VALIDATE_FILENAME = "validate.txt"
FINAL_FILENAME = "final.txt"
FEEDBACK_FILENAME = "feedback.txt"


class FeedbackGenerator:
    """Generates and writes feedback files for students."""

    def __init__(self, llm: ChatCompleter):
        """Initialize the feedback generator.

        Args:
            llm: Chat model that answers the feedback prompts
        """
        self.llm = llm

    # -------------------------------------------------------------------------
    # Validation feedback
    # -------------------------------------------------------------------------

    def validation_feedback(self, issues: list[str]) -> str:
        """Explain validator findings in plain language.

        No request is made when there are no issues.

        Args:
            issues: Validator error and warning texts, in order

        Returns:
            Feedback text
        """
        if not issues:
            return NO_ISSUES_MESSAGE

        prompt = VALIDATION_FEEDBACK.render(issues="\n\n".join(issues))
        return self.llm.complete(prompt) or NO_ISSUES_MESSAGE

    def write_validation_feedback(
        self,
        student_dir: Path,
        issues: list[str],
        finalize: bool = False,
    ) -> list[Path]:
        """Write ``validate.txt`` (and ``final.txt`` when finalizing).

        Args:
            student_dir: The student's deliverable directory
            issues: Validator error and warning texts
            finalize: Also write the same content to ``final.txt``

        Returns:
            Paths of the files written
        """
        content = f"{VALIDATION_FEEDBACK_HEADER}{self.validation_feedback(issues)}\n"

        targets = [student_dir / VALIDATE_FILENAME]
        if finalize:
            targets.append(student_dir / FINAL_FILENAME)

        written = [write_text_file(path, content) for path in targets]
        logger.info(f"Feedback written to {written[0]}")
        return written

    # -------------------------------------------------------------------------
    # Grading feedback
    # -------------------------------------------------------------------------

    def grading_feedback(self, student_dir: Path, description: str, criteria: str) -> str:
        """Ask the model for a full review of a deliverable.

        Args:
            student_dir: The student's deliverable directory
            description: Assignment description text
            criteria: Grading criteria text

        Returns:
            The model's review, ending with a proposed score line

        Raises:
            LLMError: If the request fails or returns no content
        """
        prompt = GRADING_FEEDBACK.render(
            description=description,
            criteria=criteria,
            code=build_code_listing(student_dir),
        )

        feedback = self.llm.complete(prompt)
        if not feedback:
            raise LLMError(f"Empty grading response for {student_dir.name}")
        return feedback

    def write_grading_feedback(self, student_dir: Path, description: str, criteria: str) -> Path:
        """Write the model's review verbatim to ``feedback.txt``."""
        feedback = self.grading_feedback(student_dir, description, criteria)
        path = write_text_file(student_dir / FEEDBACK_FILENAME, feedback)
        logger.info(f"Grading feedback written to {path}")
        return path


def build_code_listing(student_dir: Path) -> str:
    """
    Concatenate every HTML, CSS and JS file of a deliverable.

    Each file is introduced by its path relative to the student directory
    and wrapped in a code fence labelled with its extension. Unreadable
    files are left out.

    Args:
        student_dir: The student's deliverable directory

    Returns:
        Markdown-formatted listing (empty if there are no sources)
    """
    sections = []

    for path in iter_files(student_dir):
        file_type = detect_web_filetype(path)
        if file_type is None:
            continue

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {path}: {e}")
            continue

        relative = path.relative_to(student_dir).as_posix()
        sections.append(f"Fil: {relative}\n```{file_type.extension}\n{content}\n```")

    return "\n\n".join(sections)
