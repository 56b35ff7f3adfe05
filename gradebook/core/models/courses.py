"""
Course registry and student reference records
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Semester(str, Enum):
    """Academic terms"""
    FALL = "Fall"
    SPRING = "Spring"
    SUMMER = "Summer"


def normalize_academic_year(v):
    """Academic years are stored as strings ("2024", "2024-2025")"""
    if v is None:
        return v
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v).strip()


class StudentRef(BaseModel):
    """Student identity as seen by the grading engine"""

    id: str = Field(..., description="Student record id")
    user_id: Optional[str] = Field(None, description="Login account id")
    email: Optional[str] = Field(None, description="Student email address")
    first_name: str = Field("", description="Student first name")
    last_name: str = Field("", description="Student last name")
    student_number: Optional[str] = Field(None, description="Registrar student number")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v and "@" not in v:
            raise ValueError("Invalid email format")
        return v.strip().lower() if v else v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class CourseRecord(BaseModel):
    """Course registry entry"""

    id: str = Field(..., description="Course id")
    course_code: str = Field(..., description="Course code, stored uppercase")
    course_name: str = Field(..., description="Course title")
    credits: Optional[float] = Field(None, gt=0, le=6, description="Credit hours")
    instructor: Optional[str] = Field(None, description="Instructor user id")
    semester: Optional[Semester] = Field(None, description="Term the course runs in")
    academic_year: Optional[str] = Field(None, description="Academic year the course runs in")
    enrolled_students: List[str] = Field(default_factory=list, description="Enrolled student ids")
    is_active: bool = Field(True, description="Whether the course is active")

    @field_validator("academic_year", mode="before")
    @classmethod
    def coerce_academic_year(cls, v):
        return normalize_academic_year(v)

    @field_validator("course_code")
    @classmethod
    def upper_course_code(cls, v):
        return v.strip().upper()

    def offered_in(self, academic_year: str, semester: str) -> bool:
        """Whether the course belongs to a transcript scope; unset terms match any scope"""
        if self.semester is not None and self.semester != semester:
            return False
        if self.academic_year is not None and self.academic_year != academic_year:
            return False
        return True

    model_config = ConfigDict(use_enum_values=True, validate_default=True)
