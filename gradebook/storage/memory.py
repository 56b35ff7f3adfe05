"""
In-memory document store

Holds deep copies of every saved model, mimicking a document database.
"""

import logging
from typing import Dict, List, Optional

from gradebook.core.models import CourseRecord, GradeCategory, GradeEntry, StudentRef, Transcript

logger = logging.getLogger(__name__)


class InMemoryGradebookStore:
    """GradebookStore backed by dictionaries"""

    def __init__(self):
        self.students: Dict[str, StudentRef] = {}
        self.courses: Dict[str, CourseRecord] = {}
        self.categories: Dict[str, GradeCategory] = {}
        self.grades: Dict[str, GradeEntry] = {}
        self.transcripts: Dict[str, Transcript] = {}

    @staticmethod
    def _copy(model):
        return model.model_copy(deep=True) if model is not None else None

    # Students
    def get_student(self, student_id: str) -> Optional[StudentRef]:
        return self._copy(self.students.get(student_id))

    def find_student_by_user_id(self, user_id: str) -> Optional[StudentRef]:
        for student in self.students.values():
            if student.user_id == user_id:
                return self._copy(student)
        return None

    def find_student_by_email(self, email: str) -> Optional[StudentRef]:
        email = email.strip().lower()
        for student in self.students.values():
            if student.email == email:
                return self._copy(student)
        return None

    def save_student(self, student: StudentRef) -> StudentRef:
        self.students[student.id] = self._copy(student)
        return student

    def list_students(self) -> List[StudentRef]:
        return [self._copy(s) for s in self.students.values()]

    # Courses
    def get_course(self, course_id: str) -> Optional[CourseRecord]:
        return self._copy(self.courses.get(course_id))

    def save_course(self, course: CourseRecord) -> CourseRecord:
        self.courses[course.id] = self._copy(course)
        return course

    # Categories
    def get_category(self, category_id: str) -> Optional[GradeCategory]:
        return self._copy(self.categories.get(category_id))

    def list_categories(self, course_id: str, active_only: bool = True) -> List[GradeCategory]:
        found = [
            c for c in self.categories.values()
            if c.course_id == course_id and (c.is_active or not active_only)
        ]
        return [self._copy(c) for c in sorted(found, key=lambda c: c.order)]

    def save_category(self, category: GradeCategory) -> GradeCategory:
        self.categories[category.id] = self._copy(category)
        return category

    # Grade entries
    def get_grade(self, grade_id: str) -> Optional[GradeEntry]:
        return self._copy(self.grades.get(grade_id))

    def find_grade(self, student_id: str, assignment_id: str) -> Optional[GradeEntry]:
        for entry in self.grades.values():
            if entry.student_id == student_id and entry.assignment_id == assignment_id:
                return self._copy(entry)
        return None

    def list_grades(
        self,
        student_id: Optional[str] = None,
        course_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[GradeEntry]:
        found = []
        for entry in self.grades.values():
            if student_id is not None and entry.student_id != student_id:
                continue
            if course_id is not None and entry.course_id != course_id:
                continue
            if status is not None and entry.status != status:
                continue
            found.append(self._copy(entry))
        return found

    def save_grade(self, entry: GradeEntry) -> GradeEntry:
        self.grades[entry.id] = self._copy(entry)
        return entry

    # Transcripts
    def get_transcript(self, transcript_id: str) -> Optional[Transcript]:
        return self._copy(self.transcripts.get(transcript_id))

    def find_transcript(self, student_id: str, academic_year: str, semester: str) -> Optional[Transcript]:
        for transcript in self.transcripts.values():
            if transcript.scope == (student_id, academic_year, semester):
                return self._copy(transcript)
        return None

    def find_transcript_by_code(self, verification_code: str) -> Optional[Transcript]:
        for transcript in self.transcripts.values():
            if transcript.verification_code == verification_code:
                return self._copy(transcript)
        return None

    def list_transcripts(self, student_id: str) -> List[Transcript]:
        return [self._copy(t) for t in self.transcripts.values() if t.student_id == student_id]

    def save_transcript(self, transcript: Transcript) -> Transcript:
        existing = self.find_transcript(transcript.student_id, transcript.academic_year, transcript.semester)
        if existing is not None and existing.id != transcript.id:
            # One document per scope
            logger.debug("Replacing transcript %s with %s", existing.id, transcript.id)
            del self.transcripts[existing.id]
        self.transcripts[transcript.id] = self._copy(transcript)
        return transcript
