class GradebookError(Exception):
    """Base class for gradebook errors."""


class StudentNotFoundError(GradebookError):
    """Raised when an identifier resolves to no student."""


class CourseNotFoundError(GradebookError):
    """Raised when a course id is not in the course registry."""


class GradeNotFoundError(GradebookError):
    """Raised when a grade entry id is unknown."""


class TranscriptNotFoundError(GradebookError):
    """Raised when a transcript id or verification code is unknown."""


class TranscriptLockedError(GradebookError):
    """Raised when an official transcript would be modified."""


class InvalidCategoryConfigurationError(GradebookError):
    """Raised when a course's grade categories fail validation."""


class TemplateNotFoundError(GradebookError):
    """Raised when a category template name is unknown."""


class UnknownLetterGradeError(GradebookError):
    """Raised in strict mode when a letter grade has no grade-point value."""

    def __init__(self, letter: str):
        super().__init__(f"Unknown letter grade: {letter!r}")
        self.letter = letter


class CategoryNotFoundError(GradebookError):
    """Raised when a grade category id is unknown."""
