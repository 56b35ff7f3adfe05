"""
Course grade statistics over published grade entries
"""

from typing import Iterable

import pandas as pd

from gradebook.core.models import DEFAULT_GRADING_SCALE, CourseGradeStatistics, GradeEntry, GradingScale


def course_grade_statistics(
    course_id: str,
    entries: Iterable[GradeEntry],
    grading_scale: GradingScale = DEFAULT_GRADING_SCALE,
) -> CourseGradeStatistics:
    """Average, high, low, count and letter distribution for a course"""
    df = pd.DataFrame(
        [{"percentage": e.percentage, "letter_grade": e.letter_grade} for e in entries],
        columns=["percentage", "letter_grade"],
    )

    distribution = {letter: 0 for letter in grading_scale.letters}
    if df.empty:
        return CourseGradeStatistics(course_id=course_id, distribution=distribution)

    counts = df["letter_grade"].value_counts()
    for letter, count in counts.items():
        distribution[letter] = distribution.get(letter, 0) + int(count)

    return CourseGradeStatistics(
        course_id=course_id,
        average_grade=float(df["percentage"].mean()),
        highest_grade=float(df["percentage"].max()),
        lowest_grade=float(df["percentage"].min()),
        total_grades=int(len(df)),
        distribution=distribution,
    )
