"""
GRADING SERVICE - Record, publish and aggregate assignment grades

OPERATIONS:
✅ record_grade: create or update a grade, logging the prior state as a revision
✅ publish_grades / return_grade: status transitions
✅ compute_final_grade: weighted final grade for one student in one course
✅ course_final_grades: final grade roster for every enrolled student
✅ course_statistics: average/high/low and letter distribution
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from gradebook.core.calculators import FinalGradeCalculator, course_grade_statistics
from gradebook.core.errors import CourseNotFoundError, GradeNotFoundError, StudentNotFoundError
from gradebook.core.models import (
    DEFAULT_GRADING_SCALE,
    CourseGradeStatistics,
    CourseRecord,
    FinalGrade,
    GradeEntry,
    GradeStatus,
    GradingScale,
    LatePenalty,
    StudentFinalGrade,
)
from gradebook.core.services.identity import StudentResolver
from gradebook.storage.base import GradebookStore

logger = logging.getLogger(__name__)


class GradingService:
    """Grade entry lifecycle and course-level grade calculations"""

    def __init__(
        self,
        store: GradebookStore,
        grading_scale: GradingScale = DEFAULT_GRADING_SCALE,
        resolver: Optional[StudentResolver] = None,
    ):
        self.store = store
        self.grading_scale = grading_scale
        self.resolver = resolver or StudentResolver(store)
        self.final_grade_calculator = FinalGradeCalculator(grading_scale)

    def _require_course(self, course_id: str) -> CourseRecord:
        course = self.store.get_course(course_id)
        if course is None:
            raise CourseNotFoundError(f"Course not found: {course_id}")
        return course

    def record_grade(
        self,
        student_id: str,
        assignment_id: str,
        course_id: str,
        category: str,
        points_earned: float,
        max_points: float,
        graded_by: Optional[str] = None,
        feedback: Optional[str] = None,
        private_notes: Optional[str] = None,
        late_penalty: Optional[LatePenalty] = None,
        assignment_title: Optional[str] = None,
    ) -> GradeEntry:
        """
        Create or update the grade for (student, assignment)

        Updating keeps the old values in the revision log. The grade's status
        is left as it was.
        """
        student = self.resolver.resolve(student_id)
        self._require_course(course_id)
        now = datetime.now()

        entry = self.store.find_grade(student.id, assignment_id)
        if entry is None:
            entry = GradeEntry(
                student_id=student.id,
                assignment_id=assignment_id,
                course_id=course_id,
                assignment_title=assignment_title,
                category=category,
                graded_by=graded_by,
                points_earned=points_earned,
                max_points=max_points,
                feedback=feedback,
                private_notes=private_notes,
                late_penalty=late_penalty or LatePenalty(),
                graded_at=now,
            )
            logger.info("Recorded grade for student %s on assignment %s", student.id, assignment_id)
        else:
            revisions = entry.revisions + [entry.snapshot()]
            entry = GradeEntry.model_validate({
                **entry.model_dump(),
                "course_id": course_id,
                "assignment_title": assignment_title or entry.assignment_title,
                "category": category,
                "graded_by": graded_by,
                "points_earned": points_earned,
                "max_points": max_points,
                "feedback": feedback,
                "private_notes": private_notes,
                "late_penalty": (late_penalty or LatePenalty()).model_dump(),
                "graded_at": now,
                "revisions": [r.model_dump() for r in revisions],
            })
            logger.info(
                "Updated grade %s for student %s (revision %d)", entry.id, student.id, len(revisions)
            )

        entry.recalculate(self.grading_scale)
        return self.store.save_grade(entry)

    def publish_grades(self, grade_ids: Iterable[str]) -> int:
        """Publish grades; returns how many changed status"""
        now = datetime.now()
        modified = 0
        for grade_id in grade_ids:
            entry = self.store.get_grade(grade_id)
            if entry is None:
                logger.warning("Cannot publish unknown grade %s", grade_id)
                continue
            if entry.is_published:
                continue
            entry.status = GradeStatus.PUBLISHED.value
            entry.published_at = entry.published_at or now
            self.store.save_grade(entry)
            modified += 1

        logger.info("%d grades published successfully", modified)
        return modified

    def return_grade(self, grade_id: str) -> GradeEntry:
        entry = self.store.get_grade(grade_id)
        if entry is None:
            raise GradeNotFoundError(f"Grade not found: {grade_id}")
        entry.status = GradeStatus.RETURNED.value
        return self.store.save_grade(entry)

    def published_grades(self, student_id: str, course_id: str) -> List[GradeEntry]:
        return self.store.list_grades(
            student_id=student_id, course_id=course_id, status=GradeStatus.PUBLISHED.value
        )

    def compute_final_grade(self, student_id: str, course_id: str) -> FinalGrade:
        """Weighted final grade from the student's published grades in a course"""
        student = self.resolver.resolve(student_id)
        self._require_course(course_id)
        return self.final_grade_calculator.calculate(
            student.id,
            course_id,
            self.published_grades(student.id, course_id),
            self.store.list_categories(course_id, active_only=True),
        )

    def course_final_grades(self, course_id: str) -> List[StudentFinalGrade]:
        """Final grades for every enrolled student, highest first"""
        course = self._require_course(course_id)
        categories = self.store.list_categories(course_id, active_only=True)

        roster = []
        for enrolled_id in course.enrolled_students:
            try:
                student = self.resolver.resolve(enrolled_id)
            except StudentNotFoundError:
                logger.warning("Enrolled student %s in course %s not found", enrolled_id, course_id)
                continue

            grades = self.published_grades(student.id, course_id)
            final = self.final_grade_calculator.calculate(student.id, course_id, grades, categories)
            roster.append(StudentFinalGrade(
                student_id=student.id,
                student_name=student.full_name or None,
                final_grade=final,
                total_assignments=len(grades),
            ))

        return sorted(roster, key=lambda r: r.final_grade.final_percentage, reverse=True)

    def course_statistics(self, course_id: str) -> CourseGradeStatistics:
        self._require_course(course_id)
        grades = self.store.list_grades(course_id=course_id, status=GradeStatus.PUBLISHED.value)
        return course_grade_statistics(course_id, grades, self.grading_scale)
