"""
GPA CALCULATOR - Credit-weighted GPA, academic standing and honors

CALCULATION TYPES:
✅ Semester GPA: sum(grade points x credits) / sum(credits) for one transcript
✅ Cumulative GPA: same formula across every transcript of a student
✅ Academic standing: GPA tiers, first match wins
✅ Honors: Dean's List at 3.8 or above

GRADE MAPPING (default scale):
A+ = 4.0, A = 4.0, A- = 3.7
B+ = 3.3, B = 3.0, B- = 2.7
C+ = 2.3, C = 2.0, C- = 1.7
D+ = 1.3, D = 1.0, D- = 0.7
F = 0.0

EDGE CASES HANDLED:
- Courses without a final grade or with zero credits: excluded from GPA
- Unknown letter grades: logged and counted as 0.0 (or rejected in strict mode)
- No credits at all: GPA is 0.0
"""

import logging
from typing import Iterable, List, Tuple

from gradebook.core.calculators.letter_grades import grade_points
from gradebook.core.errors import UnknownLetterGradeError
from gradebook.core.models import (
    DEFAULT_GRADING_SCALE,
    AcademicStanding,
    GradingScale,
    HonorRecord,
    Transcript,
    TranscriptCourse,
    UnknownGrade,
)

logger = logging.getLogger(__name__)

# (minimum GPA, standing), checked in order
STANDING_THRESHOLDS: List[Tuple[float, AcademicStanding]] = [
    (3.5, AcademicStanding.GOOD_STANDING),
    (2.0, AcademicStanding.GOOD_STANDING),
    (1.5, AcademicStanding.ACADEMIC_WARNING),
    (1.0, AcademicStanding.ACADEMIC_PROBATION),
]

DEANS_LIST_THRESHOLD = 3.8
DEANS_LIST = "Dean's List"


class GPACalculator:
    """Calculate semester and cumulative GPAs from transcript course lines"""

    def __init__(self, grading_scale: GradingScale = DEFAULT_GRADING_SCALE, strict: bool = False):
        """
        Initialize calculator

        Args:
            grading_scale: Letter grade to grade point table
            strict: Raise UnknownLetterGradeError instead of defaulting to 0.0
        """
        self.grading_scale = grading_scale
        self.strict = strict
        self.calculation_log: List[str] = []

    def points_for_letter(self, letter: str) -> float:
        """Grade points for a letter, applying the unknown-grade policy"""
        result = grade_points(letter, self.grading_scale)
        if isinstance(result, UnknownGrade):
            if self.strict:
                raise UnknownLetterGradeError(result.letter)
            logger.warning("Unknown letter grade %r counted as 0.0 grade points", result.letter)
            self.calculation_log.append(f"⚠️ Unknown grade format: {result.letter}")
        return result.points_or(0.0)

    def apply_grade_points(self, courses: Iterable[TranscriptCourse]) -> None:
        """Re-derive every course's grade points from its letter grade; blank letters are unknown"""
        for course in courses:
            if course.final_grade is not None:
                course.final_grade.grade_points = self.points_for_letter(course.final_grade.letter_grade)

    def calculate_gpa(self, courses: Iterable[TranscriptCourse]) -> Tuple[float, float, float]:
        """
        Credit-weighted GPA over course lines

        Returns:
            Tuple of (gpa, total_credits, total_grade_points)
        """
        total_grade_points = 0.0
        total_credits = 0.0

        for course in courses:
            if course.final_grade is None or not course.credits:
                continue
            total_grade_points += course.final_grade.grade_points * course.credits
            total_credits += course.credits

        gpa = total_grade_points / total_credits if total_credits > 0 else 0.0
        return gpa, total_credits, total_grade_points

    def academic_standing(self, gpa: float) -> AcademicStanding:
        for minimum, standing in STANDING_THRESHOLDS:
            if gpa >= minimum:
                return standing
        return AcademicStanding.ACADEMIC_SUSPENSION

    def honors_for(self, gpa: float, semester: str, academic_year: str) -> List[HonorRecord]:
        if gpa >= DEANS_LIST_THRESHOLD:
            return [HonorRecord(type=DEANS_LIST, semester=semester, year=academic_year)]
        return []

    def finalize(self, transcript: Transcript, other_transcripts: Iterable[Transcript] = ()) -> Transcript:
        """
        Recompute every derived transcript field in place

        Args:
            transcript: Transcript with its course lines filled in
            other_transcripts: The student's other stored transcripts, for the cumulative GPA

        Returns:
            The same transcript, updated
        """
        self.calculation_log = []
        self.calculation_log.append(
            f"📊 Calculating GPA for Student ID: {transcript.student_id} ({transcript.term_label})"
        )

        self.apply_grade_points(transcript.courses)
        gpa, credits, points = self.calculate_gpa(transcript.courses)

        transcript.semester_gpa = gpa
        transcript.total_credits = credits
        transcript.total_grade_points = points
        transcript.academic_standing = self.academic_standing(gpa).value
        transcript.honors = self.honors_for(gpa, transcript.semester, transcript.academic_year)

        others = [t for t in other_transcripts if t.scope != transcript.scope]
        transcript.cumulative_gpa, _, _, _ = self.cumulative(others + [transcript])

        self.calculation_log.append("✅ Calculation complete:")
        self.calculation_log.append(f"   Semester GPA: {gpa:.3f}")
        self.calculation_log.append(f"   Cumulative GPA: {transcript.cumulative_gpa:.3f}")
        self.calculation_log.append(f"   Total Credits: {credits:.1f}")
        self.calculation_log.append(f"   Standing: {transcript.academic_standing}")

        return transcript

    def cumulative(self, transcripts: Iterable[Transcript]) -> Tuple[float, float, float, int]:
        """
        Credit-weighted GPA across transcripts

        Returns:
            Tuple of (gpa, total_credits, total_grade_points, total_courses)
        """
        courses = [course for t in transcripts for course in t.courses]
        gpa, credits, points = self.calculate_gpa(courses)
        return gpa, credits, points, len(courses)

    def get_calculation_log(self) -> List[str]:
        """Get detailed calculation log for debugging"""
        return self.calculation_log
