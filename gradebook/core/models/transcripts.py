"""
TRANSCRIPT MODELS - Computed grade results and stored transcript documents

FinalGrade is computed on demand. Transcript is the stored document, one per
(student, academic year, semester).
"""

import math
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gradebook.core.models.courses import Semester, normalize_academic_year


class AcademicStanding(str, Enum):
    """Academic standing tiers"""
    GOOD_STANDING = "Good Standing"
    ACADEMIC_WARNING = "Academic Warning"
    ACADEMIC_PROBATION = "Academic Probation"
    ACADEMIC_SUSPENSION = "Academic Suspension"


class AssignmentScore(BaseModel):
    """One assignment's contribution to a category average"""

    assignment_id: str
    name: Optional[str] = None
    score: float
    max_points: float
    percentage: float
    submitted_at: Optional[datetime] = None


class CategoryAggregate(BaseModel):
    """Category average after dropping the lowest scores"""

    category_id: Optional[str] = None
    category_name: str
    category_type: str
    weight: float
    average: float = Field(..., description="Mean of the kept percentages, 0 if all were dropped")
    count: int = Field(..., ge=0, description="Number of contributing entries")
    dropped: int = Field(0, ge=0, description="Number of entries dropped")
    assignments: List[AssignmentScore] = Field(default_factory=list, description="Kept entries, highest first")


class FinalGrade(BaseModel):
    """Weighted combination of a student's category averages in one course"""

    student_id: str
    course_id: str
    categories: List[CategoryAggregate] = Field(default_factory=list)
    total_weight: float = Field(0.0, description="Sum of weights of categories with data")
    final_percentage: float = 0.0
    letter_grade: str = "F"

    @property
    def rounded_percentage(self) -> float:
        return round(self.final_percentage, 2)

    @property
    def category_scores(self) -> Dict[str, CategoryAggregate]:
        return {c.category_name: c for c in self.categories}


class StudentFinalGrade(BaseModel):
    """Roster row for a course's final grade listing"""

    student_id: str
    student_name: Optional[str] = None
    final_grade: FinalGrade
    total_assignments: int = 0


class CourseFinalGrade(BaseModel):
    """Final grade stored on a transcript line"""

    percentage: float
    letter_grade: str
    grade_points: float = 0.0


class TranscriptCourse(BaseModel):
    """One course line on a transcript"""

    course_id: str
    course_name: str
    course_code: str
    credits: float = Field(..., ge=0.0)
    final_grade: Optional[CourseFinalGrade] = None
    instructor: Optional[str] = None
    completed_at: Optional[datetime] = None
    category_grades: List[CategoryAggregate] = Field(default_factory=list)


class HonorRecord(BaseModel):
    """Honor earned in a term"""

    type: str
    semester: str
    year: str


class Transcript(BaseModel):
    """Stored transcript document for one student and term"""

    id: str = Field(default_factory=lambda: uuid4().hex)
    student_id: str
    academic_year: str
    semester: Semester

    courses: List[TranscriptCourse] = Field(default_factory=list)

    semester_gpa: float = Field(0.0, ge=0.0)
    cumulative_gpa: float = Field(0.0, ge=0.0)
    total_credits: float = Field(0.0, ge=0.0)
    total_grade_points: float = Field(0.0, ge=0.0)

    academic_standing: AcademicStanding = AcademicStanding.GOOD_STANDING
    honors: List[HonorRecord] = Field(default_factory=list)

    is_official: bool = False
    generated_by: Optional[str] = None
    generated_at: datetime = Field(default_factory=datetime.now)
    official_at: Optional[datetime] = None
    marked_official_by: Optional[str] = None

    verification_code: Optional[str] = None
    digital_signature: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    @field_validator("academic_year", mode="before")
    @classmethod
    def coerce_academic_year(cls, v):
        return normalize_academic_year(v)

    @property
    def scope(self) -> tuple:
        return (self.student_id, self.academic_year, self.semester)

    @property
    def term_label(self) -> str:
        return f"{self.semester} {self.academic_year}"


class TranscriptVerification(BaseModel):
    """Public view returned when a verification code is checked"""

    verified: bool = True
    student_id: str
    student_name: Optional[str] = None
    academic_year: str
    semester: str
    semester_gpa: float
    cumulative_gpa: float
    total_credits: float
    is_official: bool
    generated_at: datetime
    courses: List[Dict] = Field(default_factory=list)


class CumulativeRecord(BaseModel):
    """All of a student's transcripts with cumulative totals"""

    student_id: str
    transcripts: List[Transcript] = Field(default_factory=list)
    cumulative_gpa: float = 0.0
    total_credits: float = 0.0
    total_grade_points: float = 0.0
    total_courses: int = 0


class CourseGradeStatistics(BaseModel):
    """Published-grade statistics for one course"""

    course_id: str
    average_grade: float = 0.0
    highest_grade: float = 0.0
    lowest_grade: float = 0.0
    total_grades: int = 0
    distribution: Dict[str, int] = Field(default_factory=dict)

    @field_validator("average_grade", "highest_grade", "lowest_grade", mode="before")
    @classmethod
    def nan_to_zero(cls, v):
        if isinstance(v, float) and math.isnan(v):
            return 0.0
        return v
