"""
Letter grade mapping

percentage -> letter grade and letter grade -> grade points, both driven by
a GradingScale. Total functions: every percentage maps to a letter, and
unknown letters come back as UnknownGrade instead of raising.
"""

from gradebook.core.models.calculations import (
    DEFAULT_GRADING_SCALE,
    GradePointResult,
    GradePoints,
    GradingScale,
    UnknownGrade,
)


def letter_grade(percentage: float, grading_scale: GradingScale = DEFAULT_GRADING_SCALE) -> str:
    """Convert a percentage (any real number) to a letter grade"""
    return grading_scale.letter_for(percentage)


def grade_points(letter: str, grading_scale: GradingScale = DEFAULT_GRADING_SCALE) -> GradePointResult:
    """Look up grade points for a letter grade"""
    key = str(letter).strip().upper() if letter is not None else ""
    if key in grading_scale.grade_points:
        return GradePoints(letter=key, points=grading_scale.grade_points[key])
    return UnknownGrade(letter=str(letter))
