"""
FINAL GRADE CALCULATOR - Combine category averages into a course grade

finalPercentage = sum(avg_i * weight_i / 100) / sum(weight_i) * 100

Only categories with data take part, so the result is renormalized against
the weight actually represented. No represented weight -> 0%.
"""

import logging
from typing import Iterable, List, Optional

from gradebook.core.calculators.category import CategoryAggregator
from gradebook.core.models import (
    DEFAULT_GRADING_SCALE,
    CategoryAggregate,
    FinalGrade,
    GradeCategory,
    GradeEntry,
    GradingScale,
)

logger = logging.getLogger(__name__)


class FinalGradeCalculator:
    """Calculate a student's final percentage and letter grade for a course"""

    def __init__(
        self,
        grading_scale: GradingScale = DEFAULT_GRADING_SCALE,
        aggregator: Optional[CategoryAggregator] = None,
    ):
        self.grading_scale = grading_scale
        self.aggregator = aggregator or CategoryAggregator()

    def calculate(
        self,
        student_id: str,
        course_id: str,
        entries: Iterable[GradeEntry],
        categories: Iterable[GradeCategory],
    ) -> FinalGrade:
        """
        Aggregate every active category, then combine them

        Args:
            student_id: Student id
            course_id: Course id
            entries: Published grade entries for the student in the course
            categories: The course's grade categories

        Returns:
            FinalGrade with the per-category breakdown
        """
        entries = list(entries)
        aggregates = []
        for category in sorted(categories, key=lambda c: c.order):
            if not category.is_active:
                continue
            aggregate = self.aggregator.aggregate(entries, category)
            if aggregate is not None:
                aggregates.append(aggregate)

        return self.combine(student_id, course_id, aggregates)

    def combine(
        self, student_id: str, course_id: str, aggregates: List[CategoryAggregate]
    ) -> FinalGrade:
        """Weight category averages into a final percentage"""
        total_weighted_score = sum(a.average * (a.weight / 100) for a in aggregates)
        total_weight = sum(a.weight for a in aggregates)

        if total_weight > 0:
            final_percentage = (total_weighted_score / total_weight) * 100
        else:
            final_percentage = 0.0

        letter = self.grading_scale.letter_for(final_percentage)
        logger.debug(
            "Final grade for student %s in course %s: %.2f%% (%s) over %g%% weight",
            student_id, course_id, final_percentage, letter, total_weight,
        )

        return FinalGrade(
            student_id=student_id,
            course_id=course_id,
            categories=aggregates,
            total_weight=total_weight,
            final_percentage=final_percentage,
            letter_grade=letter,
        )
