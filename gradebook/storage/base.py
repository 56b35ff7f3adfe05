"""
Storage contract consumed by the grading services

Saves replace whole documents (last writer wins). Getters return copies, so
callers may mutate what they read without touching stored state.
"""

from typing import List, Optional, Protocol

from gradebook.core.models import CourseRecord, GradeCategory, GradeEntry, StudentRef, Transcript


class GradebookStore(Protocol):
    # Students
    def get_student(self, student_id: str) -> Optional[StudentRef]: ...

    def find_student_by_user_id(self, user_id: str) -> Optional[StudentRef]: ...

    def find_student_by_email(self, email: str) -> Optional[StudentRef]: ...

    def save_student(self, student: StudentRef) -> StudentRef: ...

    def list_students(self) -> List[StudentRef]: ...

    # Courses
    def get_course(self, course_id: str) -> Optional[CourseRecord]: ...

    def save_course(self, course: CourseRecord) -> CourseRecord: ...

    # Categories
    def get_category(self, category_id: str) -> Optional[GradeCategory]: ...

    def list_categories(self, course_id: str, active_only: bool = True) -> List[GradeCategory]: ...

    def save_category(self, category: GradeCategory) -> GradeCategory: ...

    # Grade entries
    def get_grade(self, grade_id: str) -> Optional[GradeEntry]: ...

    def find_grade(self, student_id: str, assignment_id: str) -> Optional[GradeEntry]: ...

    def list_grades(
        self,
        student_id: Optional[str] = None,
        course_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[GradeEntry]: ...

    def save_grade(self, entry: GradeEntry) -> GradeEntry: ...

    # Transcripts
    def get_transcript(self, transcript_id: str) -> Optional[Transcript]: ...

    def find_transcript(self, student_id: str, academic_year: str, semester: str) -> Optional[Transcript]: ...

    def find_transcript_by_code(self, verification_code: str) -> Optional[Transcript]: ...

    def list_transcripts(self, student_id: str) -> List[Transcript]: ...

    def save_transcript(self, transcript: Transcript) -> Transcript: ...
