"""
Unit Tests for Data Models

Tests for:
- Grade entry derived fields and validation
- Category and scheme validation
- Course and student normalization
"""

import math

import pytest
from pydantic import ValidationError

from gradebook.core.models import (
    CategoryScheme,
    CourseGradeStatistics,
    CourseRecord,
    GradeCategory,
    GradeEntry,
    StudentRef,
    Transcript,
)


class TestGradeEntry:
    """Tests for GradeEntry"""

    def test_percentage_and_letter_derived(self):
        entry = GradeEntry(
            student_id="S1", assignment_id="A1", course_id="C1",
            category="assignments", points_earned=42.5, max_points=50,
        )
        assert entry.percentage == pytest.approx(85.0)
        assert entry.letter_grade == "B"
        assert entry.status == "draft"
        assert entry.revisions == []

    def test_percentage_not_clamped(self):
        entry = GradeEntry(
            student_id="S1", assignment_id="A1", course_id="C1",
            category="assignments", points_earned=55, max_points=50,
        )
        assert entry.percentage == pytest.approx(110.0)
        assert entry.letter_grade == "A+"

    @pytest.mark.parametrize("max_points", [0, -10])
    def test_max_points_must_be_positive(self, max_points):
        with pytest.raises(ValidationError):
            GradeEntry(
                student_id="S1", assignment_id="A1", course_id="C1",
                category="assignments", points_earned=5, max_points=max_points,
            )

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            GradeEntry(
                student_id="S1", assignment_id="A1", course_id="C1",
                category="homework", points_earned=5, max_points=10,
            )

    def test_snapshot(self):
        entry = GradeEntry(
            student_id="S1", assignment_id="A1", course_id="C1",
            category="exams", points_earned=15, max_points=20, feedback="ok",
        )
        revision = entry.snapshot("Regrade")
        assert revision.points_earned == 15
        assert revision.percentage == 75.0
        assert revision.letter_grade == "C"
        assert revision.reason == "Regrade"


class TestCategories:
    """Tests for GradeCategory and CategoryScheme"""

    @pytest.mark.parametrize("weight", [-1, 100.5])
    def test_weight_bounds(self, weight):
        with pytest.raises(ValidationError):
            GradeCategory(course_id="C1", name="Homework", weight=weight)

    def test_drop_lowest_non_negative(self):
        with pytest.raises(ValidationError):
            GradeCategory(course_id="C1", name="Homework", weight=10, drop_lowest=-1)

    def test_scheme_over_100_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed 100%"):
            CategoryScheme(course_id="C1", categories=[
                GradeCategory(course_id="C1", name="A", weight=60),
                GradeCategory(course_id="C1", name="B", weight=50),
            ])

    def test_inactive_weight_not_counted(self):
        scheme = CategoryScheme(course_id="C1", categories=[
            GradeCategory(course_id="C1", name="A", weight=60),
            GradeCategory(course_id="C1", name="B", weight=50, is_active=False),
        ])
        assert scheme.total_weight == 60
        assert not scheme.is_complete

    def test_float_weights_complete(self):
        scheme = CategoryScheme(course_id="C1", categories=[
            GradeCategory(course_id="C1", name="A", weight=33.3),
            GradeCategory(course_id="C1", name="B", weight=33.3),
            GradeCategory(course_id="C1", name="C", weight=33.4),
        ])
        assert scheme.is_complete

    def test_foreign_category_rejected(self):
        with pytest.raises(ValidationError):
            CategoryScheme(course_id="C1", categories=[
                GradeCategory(course_id="C2", name="A", weight=10),
            ])


class TestCoursesAndStudents:
    """Tests for CourseRecord and StudentRef"""

    def test_course_normalization(self):
        course = CourseRecord(id="C1", course_code=" cs101 ", course_name="Intro", academic_year=2024)
        assert course.course_code == "CS101"
        assert course.academic_year == "2024"

    def test_credits_bounds(self):
        with pytest.raises(ValidationError):
            CourseRecord(id="C1", course_code="CS101", course_name="Intro", credits=0)

    def test_offered_in(self):
        course = CourseRecord(id="C1", course_code="CS101", course_name="Intro",
                              semester="Fall", academic_year="2024")
        assert course.offered_in("2024", "Fall")
        assert not course.offered_in("2024", "Spring")
        assert not course.offered_in("2025", "Fall")

        unscheduled = CourseRecord(id="C2", course_code="CS102", course_name="Data")
        assert unscheduled.offered_in("2030", "Summer")

    def test_student_email(self):
        student = StudentRef(id="S1", email=" Ada@School.EDU ", first_name="Ada", last_name="L")
        assert student.email == "ada@school.edu"
        assert student.full_name == "Ada L"

        with pytest.raises(ValidationError):
            StudentRef(id="S1", email="not-an-email")


class TestTranscriptModels:

    def test_transcript_defaults(self):
        transcript = Transcript(student_id="S1", academic_year=2024, semester="Spring")
        assert transcript.academic_year == "2024"
        assert transcript.semester == "Spring"
        assert transcript.academic_standing == "Good Standing"
        assert transcript.scope == ("S1", "2024", "Spring")
        assert transcript.term_label == "Spring 2024"
        assert not transcript.is_official

    def test_invalid_semester(self):
        with pytest.raises(ValidationError):
            Transcript(student_id="S1", academic_year="2024", semester="Winter")

    def test_statistics_nan_to_zero(self):
        stats = CourseGradeStatistics(course_id="C1", average_grade=math.nan)
        assert stats.average_grade == 0.0


class TestGradeEntryLetterSource:
    """Tests for where a stored grade's letter comes from"""

    def test_supplied_letter_kept_on_validation(self):
        entry = GradeEntry.model_validate({
            "student_id": "S1", "assignment_id": "A1", "course_id": "C1",
            "category": "exams", "points_earned": 55, "max_points": 100, "letter_grade": "P",
        })
        assert entry.letter_grade == "P"
        assert entry.percentage == pytest.approx(55.0)

    def test_percentage_always_rederived(self):
        entry = GradeEntry(
            student_id="S1", assignment_id="A1", course_id="C1",
            category="exams", points_earned=15, max_points=20, percentage=99.0,
        )
        assert entry.percentage == pytest.approx(75.0)
        assert entry.letter_grade == "C"
