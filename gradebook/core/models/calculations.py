"""
Grading scale and grade-point lookup results

The scale is the single source of truth for percentage -> letter banding and
letter -> grade-point conversion. Grading and transcript paths share it.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from pydantic import BaseModel, Field, model_validator


class GradingScale(BaseModel):
    """Percentage breakpoints and grade-point values"""

    breakpoints: List[Tuple[float, str]] = Field(
        ..., description="(minimum percentage, letter) pairs, highest first"
    )
    fallback_letter: str = Field("F", description="Letter below the lowest breakpoint")
    grade_points: Dict[str, float] = Field(..., description="Letter grade to grade points")

    @model_validator(mode="after")
    def validate_scale(self):
        minimums = [minimum for minimum, _ in self.breakpoints]
        if any(a <= b for a, b in zip(minimums, minimums[1:])):
            raise ValueError("Breakpoints must be strictly descending")

        letters = [letter for _, letter in self.breakpoints] + [self.fallback_letter]
        missing = [letter for letter in letters if letter not in self.grade_points]
        if missing:
            raise ValueError(f"No grade points defined for: {', '.join(missing)}")
        return self

    def letter_for(self, percentage: float) -> str:
        for minimum, letter in self.breakpoints:
            if percentage >= minimum:
                return letter
        return self.fallback_letter

    @property
    def letters(self) -> List[str]:
        """All letters in descending order"""
        return [letter for _, letter in self.breakpoints] + [self.fallback_letter]


DEFAULT_GRADING_SCALE = GradingScale(
    breakpoints=[
        (97, "A+"),
        (93, "A"),
        (90, "A-"),
        (87, "B+"),
        (83, "B"),
        (80, "B-"),
        (77, "C+"),
        (73, "C"),
        (70, "C-"),
        (67, "D+"),
        (63, "D"),
        (60, "D-"),
    ],
    fallback_letter="F",
    grade_points={
        "A+": 4.0, "A": 4.0, "A-": 3.7,
        "B+": 3.3, "B": 3.0, "B-": 2.7,
        "C+": 2.3, "C": 2.0, "C-": 1.7,
        "D+": 1.3, "D": 1.0, "D-": 0.7,
        "F": 0.0,
    },
)


@dataclass(frozen=True)
class GradePoints:
    """Grade points found for a letter grade"""
    letter: str
    points: float

    def points_or(self, default: float) -> float:
        return self.points


@dataclass(frozen=True)
class UnknownGrade:
    """Letter grade with no entry in the grading scale"""
    letter: str

    def points_or(self, default: float) -> float:
        return default


GradePointResult = Union[GradePoints, UnknownGrade]
