"""
CATEGORY AGGREGATOR - Average one grade category for one student/course

ALGORITHM:
1. Keep entries whose category tag equals the category type
2. No matching entries -> category is absent (None), not 0%
3. Sort percentages descending and drop the lowest N
4. Average what is left (unweighted by max points); 0% if everything was dropped
"""

import logging
from typing import Iterable, List, Optional

from gradebook.core.models import AssignmentScore, CategoryAggregate, GradeCategory, GradeEntry

logger = logging.getLogger(__name__)


class CategoryAggregator:
    """Compute per-category averages with drop-lowest"""

    def __init__(self):
        self.calculation_log: List[str] = []

    def aggregate(
        self, entries: Iterable[GradeEntry], category: GradeCategory
    ) -> Optional[CategoryAggregate]:
        """
        Aggregate one category

        Args:
            entries: Published grade entries for one student and course
            category: Category configuration (type tag, weight, drop_lowest)

        Returns:
            CategoryAggregate, or None when the category has no entries
        """
        matching = [e for e in entries if e.category == category.type]
        if not matching:
            self.calculation_log.append(f"{category.name}: no grades, excluded")
            return None

        ranked = sorted(matching, key=lambda e: e.percentage, reverse=True)
        dropped = min(category.drop_lowest, len(ranked))
        kept = ranked[: len(ranked) - dropped]

        if kept:
            average = sum(e.percentage for e in kept) / len(kept)
        else:
            average = 0.0
            logger.debug(
                "Category %s dropped all %d entries for student %s",
                category.name, len(ranked), ranked[0].student_id,
            )

        self.calculation_log.append(
            f"{category.name}: {len(kept)} kept, {dropped} dropped, average {average:.2f}%"
        )

        return CategoryAggregate(
            category_id=category.id,
            category_name=category.name,
            category_type=category.type,
            weight=category.weight,
            average=average,
            count=len(kept),
            dropped=dropped,
            assignments=[
                AssignmentScore(
                    assignment_id=e.assignment_id,
                    name=e.assignment_title,
                    score=e.points_earned,
                    max_points=e.max_points,
                    percentage=e.percentage,
                    submitted_at=e.graded_at,
                )
                for e in kept
            ],
        )

    def get_calculation_log(self) -> List[str]:
        return self.calculation_log
