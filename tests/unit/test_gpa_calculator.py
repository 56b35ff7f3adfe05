"""
Unit Tests for GPA Calculator

Tests for:
- Credit-weighted GPA calculation
- Academic standing tiers
- Dean's List honors
- Unknown letter grade policy
- Cumulative GPA across transcripts
"""

import pytest

from gradebook.core.calculators import GPACalculator
from gradebook.core.errors import UnknownLetterGradeError
from gradebook.core.models import CourseFinalGrade, Transcript, TranscriptCourse


def _course(code, letter, credits):
    return TranscriptCourse(
        course_id=code,
        course_name=code,
        course_code=code,
        credits=credits,
        final_grade=CourseFinalGrade(percentage=0.0, letter_grade=letter),
    )


def _transcript(courses, year="2024", semester="Fall"):
    return Transcript(student_id="S1001", academic_year=year, semester=semester, courses=courses)


class TestGPACalculator:
    """Tests for GPACalculator class"""

    def test_credit_weighted_gpa(self):
        """Test A (4 credits) + B (3 credits) = 25/7"""
        calculator = GPACalculator()
        courses = [_course("MATH101", "A", 4), _course("HIST210", "B", 3)]
        calculator.apply_grade_points(courses)

        gpa, credits, points = calculator.calculate_gpa(courses)

        assert gpa == pytest.approx(25 / 7)
        assert credits == 7
        assert points == 25

    def test_grade_points_rederived_from_letter(self):
        calculator = GPACalculator()
        course = _course("MATH101", "B+", 3)
        course.final_grade.grade_points = 99.0
        calculator.apply_grade_points([course])
        assert course.final_grade.grade_points == 3.3

    def test_no_credits_gives_zero(self):
        assert GPACalculator().calculate_gpa([]) == (0.0, 0.0, 0.0)

    def test_courses_without_grade_or_credits_skipped(self):
        calculator = GPACalculator()
        ungraded = TranscriptCourse(course_id="X", course_name="X", course_code="X", credits=3)
        courses = [_course("MATH101", "A", 4), _course("ART", "F", 0), ungraded]
        calculator.apply_grade_points(courses)

        gpa, credits, _ = calculator.calculate_gpa(courses)
        assert gpa == 4.0
        assert credits == 4

    @pytest.mark.parametrize("gpa,expected", [
        (4.0, "Good Standing"),
        (3.8, "Good Standing"),
        (3.5, "Good Standing"),
        (2.0, "Good Standing"),
        (1.999, "Academic Warning"),
        (1.5, "Academic Warning"),
        (1.2, "Academic Probation"),
        (1.0, "Academic Probation"),
        (0.99, "Academic Suspension"),
        (0.0, "Academic Suspension"),
    ])
    def test_academic_standing(self, gpa, expected):
        assert GPACalculator().academic_standing(gpa).value == expected

    def test_deans_list_threshold(self):
        calculator = GPACalculator()
        honors = calculator.honors_for(3.8, "Fall", "2024")
        assert len(honors) == 1
        assert honors[0].type == "Dean's List"
        assert honors[0].semester == "Fall"
        assert honors[0].year == "2024"
        assert calculator.honors_for(3.79, "Fall", "2024") == []

    def test_unknown_letter_counts_as_zero(self, caplog):
        calculator = GPACalculator()
        courses = [_course("MATH101", "A", 3), _course("PE", "P", 3)]

        with caplog.at_level("WARNING"):
            calculator.apply_grade_points(courses)

        assert courses[1].final_grade.grade_points == 0.0
        assert calculator.calculate_gpa(courses)[0] == 2.0
        assert "Unknown letter grade" in caplog.text

    def test_blank_letter_does_not_keep_supplied_points(self):
        calculator = GPACalculator()
        course = _course("MATH101", "", 3)
        course.final_grade.grade_points = 4.0

        calculator.apply_grade_points([course])

        assert course.final_grade.grade_points == 0.0
        assert calculator.calculate_gpa([course])[0] == 0.0

    def test_blank_letter_strict(self):
        with pytest.raises(UnknownLetterGradeError):
            GPACalculator(strict=True).apply_grade_points([_course("MATH101", "", 3)])

    def test_unknown_letter_strict(self):
        calculator = GPACalculator(strict=True)
        with pytest.raises(UnknownLetterGradeError) as exc_info:
            calculator.points_for_letter("P")
        assert exc_info.value.letter == "P"


class TestFinalize:
    """Tests for deriving transcript fields"""

    def test_finalize_sets_derived_fields(self):
        transcript = _transcript([_course("MATH101", "A", 4), _course("HIST210", "A-", 3)])
        GPACalculator().finalize(transcript)

        assert transcript.semester_gpa == pytest.approx((16 + 11.1) / 7)
        assert transcript.cumulative_gpa == pytest.approx(transcript.semester_gpa)
        assert transcript.total_credits == 7
        assert transcript.academic_standing == "Good Standing"
        assert [h.type for h in transcript.honors] == ["Dean's List"]

    def test_honors_replaced_not_appended(self):
        calculator = GPACalculator()
        transcript = _transcript([_course("MATH101", "A", 4)])
        calculator.finalize(transcript)
        calculator.finalize(transcript)
        assert len(transcript.honors) == 1

        transcript.courses = [_course("MATH101", "C", 4)]
        calculator.finalize(transcript)
        assert transcript.honors == []

    def test_cumulative_includes_other_terms(self):
        calculator = GPACalculator()
        spring = _transcript([_course("ENG100", "C", 3)], semester="Spring")
        calculator.finalize(spring)

        fall = _transcript([_course("MATH101", "A", 3)])
        calculator.finalize(fall, [spring])

        assert fall.semester_gpa == 4.0
        assert fall.cumulative_gpa == pytest.approx(3.0)

    def test_cumulative_ignores_stale_copy_of_same_term(self):
        calculator = GPACalculator()
        stale = _transcript([_course("MATH101", "F", 3)])
        current = _transcript([_course("MATH101", "A", 3)])
        calculator.finalize(current, [stale])
        assert current.cumulative_gpa == 4.0

    def test_cumulative_totals(self):
        calculator = GPACalculator()
        first = _transcript([_course("A1", "A", 3), _course("A2", "B", 3)], semester="Spring")
        second = _transcript([_course("B1", "C", 2)])
        for t in (first, second):
            calculator.finalize(t)

        gpa, credits, points, count = calculator.cumulative([first, second])
        assert credits == 8
        assert points == pytest.approx(12 + 9 + 4)
        assert gpa == pytest.approx(25 / 8)
        assert count == 3

    def test_calculation_log(self):
        calculator = GPACalculator()
        calculator.finalize(_transcript([_course("MATH101", "A", 4)]))
        log = calculator.get_calculation_log()
        assert log[0].startswith("📊 Calculating GPA for Student ID: S1001")
        assert any("Semester GPA: 4.000" in line for line in log)
