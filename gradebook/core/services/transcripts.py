"""
TRANSCRIPT BUILDER - Generate, sign, verify and roll up transcripts

GENERATION PROCESS:
1. Resolve the student and default the term (current year, Spring Jan-Jun / Fall Jul-Dec)
2. Group the student's published grades by course
3. Skip courses missing from the registry or outside the term
4. Aggregate categories and compute each course's final grade
5. Re-derive grade points, GPA, standing and honors
6. Upsert the transcript keyed on (student, academic year, semester)

STATE MACHINE:
generated (mutable) -> official (signed, frozen); no way back.
"""

import hashlib
import logging
import secrets
from collections import OrderedDict
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from gradebook.config import Settings, settings as default_settings
from gradebook.core.calculators import FinalGradeCalculator, GPACalculator
from gradebook.core.errors import TranscriptLockedError, TranscriptNotFoundError
from gradebook.core.models import (
    DEFAULT_GRADING_SCALE,
    CourseFinalGrade,
    CumulativeRecord,
    GradeEntry,
    GradeStatus,
    GradingScale,
    Semester,
    Transcript,
    TranscriptCourse,
    TranscriptVerification,
)
from gradebook.core.services.identity import StudentResolver
from gradebook.storage.base import GradebookStore

logger = logging.getLogger(__name__)

SEMESTER_ORDER = {Semester.SPRING.value: 0, Semester.SUMMER.value: 1, Semester.FALL.value: 2}


def current_term(today: Optional[date] = None) -> Tuple[str, str]:
    """Default (academic_year, semester): Spring for January-June, Fall otherwise"""
    today = today or date.today()
    semester = Semester.SPRING if today.month <= 6 else Semester.FALL
    return str(today.year), semester.value


def sign_transcript(transcript: Transcript, timestamp: datetime) -> str:
    """sha256 over id + verification code + epoch milliseconds"""
    millis = int(timestamp.timestamp() * 1000)
    payload = f"{transcript.id}{transcript.verification_code}{millis}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def term_sort_key(transcript: Transcript) -> Tuple[str, int]:
    return transcript.academic_year, SEMESTER_ORDER.get(transcript.semester, 0)


class TranscriptBuilder:
    """Build transcript documents from published grades"""

    def __init__(
        self,
        store: GradebookStore,
        grading_scale: GradingScale = DEFAULT_GRADING_SCALE,
        settings: Optional[Settings] = None,
        resolver: Optional[StudentResolver] = None,
    ):
        self.store = store
        self.settings = settings or default_settings
        self.resolver = resolver or StudentResolver(store)
        self.final_grade_calculator = FinalGradeCalculator(grading_scale)
        self.gpa_calculator = GPACalculator(grading_scale, strict=self.settings.STRICT_GRADE_POINTS)
        self.generation_log: List[str] = []

    def _course_line(
        self, student_id: str, course_id: str, grades: List[GradeEntry], academic_year: str, semester: str
    ) -> Optional[TranscriptCourse]:
        course = self.store.get_course(course_id)
        if course is None:
            logger.warning("Course %s not found; excluded from transcript of %s", course_id, student_id)
            self.generation_log.append(f"⚠️ Warning: No course record for {course_id}")
            return None
        if not course.offered_in(academic_year, semester):
            return None

        categories = self.store.list_categories(course_id, active_only=True)
        final = self.final_grade_calculator.calculate(student_id, course_id, grades, categories)

        for aggregate in final.categories:
            aggregate.average = round(aggregate.average, 2)

        completed = [g.published_at for g in grades if g.published_at is not None]
        return TranscriptCourse(
            course_id=course.id,
            course_name=course.course_name,
            course_code=course.course_code,
            credits=course.credits or self.settings.DEFAULT_COURSE_CREDITS,
            final_grade=CourseFinalGrade(
                percentage=final.rounded_percentage,
                letter_grade=final.letter_grade,
            ),
            instructor=course.instructor,
            completed_at=max(completed) if completed else None,
            category_grades=final.categories,
        )

    def build_courses(self, student_id: str, academic_year: str, semester: str) -> List[TranscriptCourse]:
        """Course lines for every course with published grades in the term"""
        grades = self.store.list_grades(student_id=student_id, status=GradeStatus.PUBLISHED.value)

        by_course: Dict[str, List[GradeEntry]] = OrderedDict()
        for grade in sorted(grades, key=lambda g: (g.course_id, g.assignment_id)):
            by_course.setdefault(grade.course_id, []).append(grade)

        courses = []
        for course_id, course_grades in by_course.items():
            line = self._course_line(student_id, course_id, course_grades, academic_year, semester)
            if line is not None:
                courses.append(line)
        return courses

    def generate_transcript(
        self,
        student_id: str,
        academic_year: Optional[str] = None,
        semester: Optional[str] = None,
        generated_by: Optional[str] = None,
    ) -> Transcript:
        """
        Generate or regenerate a student's transcript for a term

        Args:
            student_id: Student id, user id or email
            academic_year: Academic year; defaults to the current year
            semester: Fall/Spring/Summer; defaults from the current month

        Returns:
            The stored transcript
        """
        student = self.resolver.resolve(student_id)
        default_year, default_semester = current_term()
        academic_year = str(academic_year) if academic_year is not None else default_year
        semester = Semester(semester or default_semester).value

        self.generation_log = [f"📄 Generating transcript for {student.id} ({semester} {academic_year})"]

        existing = self.store.find_transcript(student.id, academic_year, semester)
        if existing is not None and existing.is_official:
            raise TranscriptLockedError(f"Transcript {existing.id} is official and cannot be regenerated")

        courses = self.build_courses(student.id, academic_year, semester)

        if existing is not None:
            transcript = existing
            transcript.courses = courses
        else:
            transcript = Transcript(
                student_id=student.id,
                academic_year=academic_year,
                semester=semester,
                courses=courses,
                verification_code=secrets.token_hex(16),
            )
        transcript.generated_by = generated_by
        transcript.generated_at = datetime.now()

        self.gpa_calculator.finalize(transcript, self.store.list_transcripts(student.id))
        self.generation_log.extend(self.gpa_calculator.get_calculation_log())

        self.store.save_transcript(transcript)
        logger.info(
            "Transcript %s for %s: %d courses, GPA %.3f, %s",
            transcript.id, student.id, len(courses), transcript.semester_gpa, transcript.academic_standing,
        )
        return transcript

    def mark_transcript_official(self, transcript_id: str, marked_by: Optional[str] = None) -> Transcript:
        """Freeze and sign a transcript; grades are not recomputed"""
        transcript = self.store.get_transcript(transcript_id)
        if transcript is None:
            raise TranscriptNotFoundError(f"Transcript not found: {transcript_id}")
        if transcript.is_official:
            raise TranscriptLockedError(f"Transcript {transcript_id} is already official")

        now = datetime.now()
        if not transcript.verification_code:
            transcript.verification_code = secrets.token_hex(16)
        transcript.is_official = True
        transcript.official_at = now
        transcript.marked_official_by = marked_by
        transcript.digital_signature = sign_transcript(transcript, now)

        self.store.save_transcript(transcript)
        logger.info("Transcript %s marked as official", transcript_id)
        return transcript

    def verify_transcript(self, verification_code: str) -> TranscriptVerification:
        transcript = self.store.find_transcript_by_code(verification_code)
        if transcript is None:
            raise TranscriptNotFoundError("Invalid verification code")

        student = self.store.get_student(transcript.student_id)
        return TranscriptVerification(
            student_id=transcript.student_id,
            student_name=student.full_name if student else None,
            academic_year=transcript.academic_year,
            semester=transcript.semester,
            semester_gpa=transcript.semester_gpa,
            cumulative_gpa=transcript.cumulative_gpa,
            total_credits=transcript.total_credits,
            is_official=transcript.is_official,
            generated_at=transcript.generated_at,
            courses=[
                course.model_dump(
                    mode="json",
                    include={"course_name", "course_code", "credits", "final_grade", "completed_at"},
                )
                for course in transcript.courses
            ],
        )

    def list_transcripts(
        self,
        student_id: str,
        academic_year: Optional[str] = None,
        semester: Optional[str] = None,
        official_only: bool = False,
    ) -> List[Transcript]:
        """Student's transcripts, newest term first"""
        student = self.resolver.resolve(student_id)
        found = [
            t for t in self.store.list_transcripts(student.id)
            if (academic_year is None or t.academic_year == str(academic_year))
            and (semester is None or t.semester == semester)
            and (t.is_official or not official_only)
        ]
        return sorted(found, key=term_sort_key, reverse=True)

    def cumulative_record(self, student_id: str) -> CumulativeRecord:
        """All transcripts oldest first with cumulative GPA and totals"""
        student = self.resolver.resolve(student_id)
        transcripts = sorted(self.store.list_transcripts(student.id), key=term_sort_key)
        gpa, credits, points, course_count = self.gpa_calculator.cumulative(transcripts)
        return CumulativeRecord(
            student_id=student.id,
            transcripts=transcripts,
            cumulative_gpa=round(gpa, 2),
            total_credits=credits,
            total_grade_points=points,
            total_courses=course_count,
        )

    def get_generation_log(self) -> List[str]:
        return self.generation_log
