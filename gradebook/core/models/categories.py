"""
GRADE CATEGORIES - Per-course weighting configuration

A course's grade is split into categories (assignments, exams, ...), each with
a weight percentage and an optional number of lowest scores to drop.

VALIDATION RULES:
- Weight must be 0-100 per category
- drop_lowest must be non-negative
- Active categories of one course may not total more than 100%
"""

from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Tolerance for float weight sums such as 33.3 + 33.3 + 33.4
WEIGHT_TOLERANCE = 1e-6


class CategoryType(str, Enum):
    """Assignment category tags"""
    ASSIGNMENTS = "assignments"
    EXAMS = "exams"
    QUIZZES = "quizzes"
    PARTICIPATION = "participation"
    PROJECTS = "projects"
    OTHER = "other"


class GradingMode(str, Enum):
    """How scores in a category are entered"""
    POINTS = "points"
    PERCENTAGE = "percentage"


class GradeCategory(BaseModel):
    """One weighted category of a course's grade"""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Category id")
    course_id: str = Field(..., description="Owning course id")
    name: str = Field(..., min_length=1, description="Display name")
    description: Optional[str] = Field(None, description="Category description")
    type: CategoryType = Field(CategoryType.ASSIGNMENTS, description="Assignment category tag")
    weight: float = Field(..., ge=0.0, le=100.0, description="Weight percentage")
    drop_lowest: int = Field(0, ge=0, description="Number of lowest scores to drop")
    grading_mode: GradingMode = Field(GradingMode.POINTS, description="Points or percentage entry")
    is_active: bool = Field(True, description="Inactive categories are ignored")
    order: int = Field(0, description="Display and evaluation order")

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class CategoryScheme(BaseModel):
    """Validated set of a course's grade categories"""

    course_id: str
    categories: List[GradeCategory] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_scheme(self):
        foreign = [c.name for c in self.categories if c.course_id != self.course_id]
        if foreign:
            raise ValueError(f"Categories belong to another course: {', '.join(foreign)}")

        total = sum(c.weight for c in self.categories if c.is_active)
        if total > 100.0 + WEIGHT_TOLERANCE:
            raise ValueError(f"Total weight cannot exceed 100%. Current total: {total:g}%")
        return self

    @property
    def active_categories(self) -> List[GradeCategory]:
        """Active categories in evaluation order"""
        return sorted((c for c in self.categories if c.is_active), key=lambda c: c.order)

    @property
    def total_weight(self) -> float:
        return sum(c.weight for c in self.active_categories)

    @property
    def is_complete(self) -> bool:
        """True when active weights total exactly 100%"""
        return abs(self.total_weight - 100.0) <= WEIGHT_TOLERANCE


# Built-in category templates
CATEGORY_TEMPLATES: Dict[str, List[dict]] = {
    "Standard Grading": [
        {"name": "Assignments", "type": "assignments", "weight": 40, "drop_lowest": 1},
        {"name": "Exams", "type": "exams", "weight": 40, "drop_lowest": 0},
        {"name": "Participation", "type": "participation", "weight": 20, "drop_lowest": 0},
    ],
    "Project-Based": [
        {"name": "Projects", "type": "projects", "weight": 60, "drop_lowest": 0},
        {"name": "Quizzes", "type": "quizzes", "weight": 25, "drop_lowest": 2},
        {"name": "Participation", "type": "participation", "weight": 15, "drop_lowest": 0},
    ],
    "Exam Heavy": [
        {"name": "Midterm Exam", "type": "exams", "weight": 30, "drop_lowest": 0},
        {"name": "Final Exam", "type": "exams", "weight": 40, "drop_lowest": 0},
        {"name": "Assignments", "type": "assignments", "weight": 20, "drop_lowest": 1},
        {"name": "Participation", "type": "participation", "weight": 10, "drop_lowest": 0},
    ],
}
