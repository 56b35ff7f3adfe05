"""
GRADE ENTRIES - Per-assignment grade records

LIFECYCLE:
- Created or updated by an instructor (status: draft)
- Visible to the student once published
- Every update appends the prior state to the revision log

DERIVED FIELDS:
- percentage = points_earned / max_points * 100 (not clamped)
- letter_grade = grading scale banding of percentage, derived with the default
  scale only when no letter is supplied (a stored letter keeps its scale)
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gradebook.core.models.calculations import DEFAULT_GRADING_SCALE, GradingScale
from gradebook.core.models.categories import CategoryType


class GradeStatus(str, Enum):
    """Grade visibility status"""
    DRAFT = "draft"
    PUBLISHED = "published"
    RETURNED = "returned"


class LatePenalty(BaseModel):
    """Late submission penalty (recorded, not applied to the percentage)"""

    applied: bool = Field(False, description="Whether a penalty was applied")
    percentage: Optional[float] = Field(None, description="Penalty percentage")
    reason: Optional[str] = Field(None, description="Penalty reason")


class GradeRevision(BaseModel):
    """Snapshot of a grade before it was changed"""

    graded_by: Optional[str] = None
    points_earned: float
    percentage: float
    letter_grade: str
    feedback: Optional[str] = None
    graded_at: Optional[datetime] = None
    reason: str = "Grade updated"


class GradeEntry(BaseModel):
    """One student's grade on one assignment"""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Grade entry id")
    student_id: str = Field(..., description="Student id")
    assignment_id: str = Field(..., description="Assignment id")
    course_id: str = Field(..., description="Course id")
    assignment_title: Optional[str] = Field(None, description="Assignment title")
    category: CategoryType = Field(..., description="Assignment category tag")
    graded_by: Optional[str] = Field(None, description="Grader user id")

    points_earned: float = Field(..., description="Points earned")
    max_points: float = Field(..., gt=0, description="Maximum points")
    percentage: float = Field(0.0, description="Derived percentage")
    letter_grade: str = Field("F", description="Derived letter grade")

    feedback: Optional[str] = Field(None, description="Feedback visible to the student")
    private_notes: Optional[str] = Field(None, description="Instructor-only notes")

    status: GradeStatus = Field(GradeStatus.DRAFT, description="Visibility status")
    late_penalty: LatePenalty = Field(default_factory=LatePenalty)

    graded_at: Optional[datetime] = Field(None, description="When the grade was last set")
    published_at: Optional[datetime] = Field(None, description="When the grade was first published")
    revisions: List[GradeRevision] = Field(default_factory=list, description="Prior states, oldest first")

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    @model_validator(mode="after")
    def derive_grade(self):
        letter_supplied = "letter_grade" in self.model_fields_set
        self.percentage = (self.points_earned / self.max_points) * 100
        if not letter_supplied:
            self.letter_grade = DEFAULT_GRADING_SCALE.letter_for(self.percentage)
        return self

    def recalculate(self, grading_scale: GradingScale = DEFAULT_GRADING_SCALE) -> None:
        """Re-derive percentage and letter grade from the raw points"""
        self.percentage = (self.points_earned / self.max_points) * 100
        self.letter_grade = grading_scale.letter_for(self.percentage)

    @property
    def is_published(self) -> bool:
        return self.status == GradeStatus.PUBLISHED

    def snapshot(self, reason: str = "Grade updated") -> GradeRevision:
        """Capture the current state for the revision log"""
        return GradeRevision(
            graded_by=self.graded_by,
            points_earned=self.points_earned,
            percentage=self.percentage,
            letter_grade=self.letter_grade,
            feedback=self.feedback,
            graded_at=self.graded_at,
            reason=reason,
        )
