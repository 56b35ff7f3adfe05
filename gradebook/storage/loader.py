"""
DATA LOADER - CSV export loading, validation, and store population

DATA SOURCES:
✅ students.csv - Student ids, login ids, emails, names
✅ courses.csv - Course registry: codes, names, credits, term, enrollment
✅ grade_categories.csv - Category weights and drop-lowest counts per course
✅ grades.csv - Per-assignment grade entries

VALIDATION STRATEGY:
1. Schema Validation: required columns must exist
2. Row Validation: each row must build a valid model; bad rows are reported and skipped
3. Scheme Validation: each course's active category weights must not exceed 100%
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import ValidationError

from gradebook.core.models import CategoryScheme, CourseRecord, GradeCategory, GradeEntry, StudentRef
from gradebook.storage.base import GradebookStore

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {
    "students": ["student_id", "first_name", "last_name"],
    "courses": ["course_id", "course_code", "course_name"],
    "grade_categories": ["course_id", "name", "type", "weight"],
    "grades": ["student_id", "assignment_id", "course_id", "category", "points_earned", "max_points"],
}


def clean_value(val: Any) -> Any:
    """Map pandas NaN/blank cells to None"""
    if val is None:
        return None
    if isinstance(val, float) and np.isnan(val):
        return None
    if isinstance(val, str) and not val.strip():
        return None
    return val


def clean_id(val: Any) -> Optional[str]:
    """Ids read as floats by pandas (1001.0) become '1001'"""
    val = clean_value(val)
    if val is None:
        return None
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    return str(val).strip()


class GradebookDataLoader:
    """Load CSV exports into a GradebookStore"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

        self.students_df: Optional[pd.DataFrame] = None
        self.courses_df: Optional[pd.DataFrame] = None
        self.categories_df: Optional[pd.DataFrame] = None
        self.grades_df: Optional[pd.DataFrame] = None

        self.students: List[StudentRef] = []
        self.courses: List[CourseRecord] = []
        self.categories: List[GradeCategory] = []
        self.grades: List[GradeEntry] = []

        self.validation_errors: List[str] = []

    def _read_csv(self, name: str) -> Optional[pd.DataFrame]:
        path = self.data_dir / f"{name}.csv"
        if not path.exists():
            self.validation_errors.append(f"Missing file: {path.name}")
            return None

        df = pd.read_csv(path, dtype=str, keep_default_na=True)
        missing = [c for c in REQUIRED_COLUMNS[name] if c not in df.columns]
        if missing:
            self.validation_errors.append(f"{path.name}: missing columns {', '.join(missing)}")
            return None

        logger.info(f"Loaded {len(df)} rows from {path.name}")
        return df

    def load_all_data(self) -> bool:
        """
        Read and validate every CSV source

        Returns:
            True when all four files were read; row-level problems are
            recorded in validation_errors without failing the load
        """
        self.validation_errors = []

        self.students_df = self._read_csv("students")
        self.courses_df = self._read_csv("courses")
        self.categories_df = self._read_csv("grade_categories")
        self.grades_df = self._read_csv("grades")

        frames = [self.students_df, self.courses_df, self.categories_df, self.grades_df]
        if any(df is None for df in frames):
            logger.error("Data loading failed: %s", "; ".join(self.validation_errors))
            return False

        self.students = self._build(self.students_df, "students.csv", self._student_from_row)
        self.courses = self._build(self.courses_df, "courses.csv", self._course_from_row)
        self.categories = self._build(self.categories_df, "grade_categories.csv", self._category_from_row)
        self.grades = self._build(self.grades_df, "grades.csv", self._grade_from_row)
        self._check_category_schemes()
        return True

    def _build(self, df: pd.DataFrame, source: str, factory) -> list:
        built = []
        for index, row in df.iterrows():
            try:
                built.append(factory(row))
            except (ValidationError, ValueError) as e:
                self.validation_errors.append(f"{source} row {index + 2}: {e}")
        return built

    @staticmethod
    def _student_from_row(row: pd.Series) -> StudentRef:
        return StudentRef(
            id=clean_id(row["student_id"]),
            user_id=clean_id(row.get("user_id")),
            email=clean_value(row.get("email")),
            first_name=clean_value(row["first_name"]) or "",
            last_name=clean_value(row["last_name"]) or "",
            student_number=clean_id(row.get("student_number")),
        )

    @staticmethod
    def _course_from_row(row: pd.Series) -> CourseRecord:
        enrolled = clean_value(row.get("enrolled_students"))
        return CourseRecord(
            id=clean_id(row["course_id"]),
            course_code=clean_value(row["course_code"]),
            course_name=clean_value(row["course_name"]),
            credits=clean_value(row.get("credits")),
            instructor=clean_id(row.get("instructor")),
            semester=clean_value(row.get("semester")),
            academic_year=clean_id(row.get("academic_year")),
            enrolled_students=[s.strip() for s in enrolled.split(";") if s.strip()] if enrolled else [],
        )

    @staticmethod
    def _category_from_row(row: pd.Series) -> GradeCategory:
        fields = dict(
            course_id=clean_id(row["course_id"]),
            name=clean_value(row["name"]),
            type=clean_value(row["type"]),
            weight=clean_value(row["weight"]),
            drop_lowest=clean_value(row.get("drop_lowest")) or 0,
            order=clean_value(row.get("order")) or 0,
        )
        category_id = clean_id(row.get("category_id"))
        if category_id:
            fields["id"] = category_id
        return GradeCategory(**fields)

    @staticmethod
    def _grade_from_row(row: pd.Series) -> GradeEntry:
        fields = dict(
            student_id=clean_id(row["student_id"]),
            assignment_id=clean_id(row["assignment_id"]),
            course_id=clean_id(row["course_id"]),
            assignment_title=clean_value(row.get("assignment_title")),
            category=clean_value(row["category"]),
            points_earned=clean_value(row["points_earned"]),
            max_points=clean_value(row["max_points"]),
            status=clean_value(row.get("status")) or "draft",
            graded_by=clean_id(row.get("graded_by")),
            feedback=clean_value(row.get("feedback")),
            graded_at=clean_value(row.get("graded_at")),
            published_at=clean_value(row.get("published_at")),
        )
        grade_id = clean_id(row.get("grade_id"))
        if grade_id:
            fields["id"] = grade_id
        return GradeEntry(**fields)

    def _check_category_schemes(self) -> None:
        """Drop every category of a course whose scheme fails validation"""
        by_course: Dict[str, List[GradeCategory]] = {}
        for category in self.categories:
            by_course.setdefault(category.course_id, []).append(category)

        rejected = set()
        for course_id, categories in by_course.items():
            try:
                CategoryScheme(course_id=course_id, categories=categories)
            except ValidationError as e:
                self.validation_errors.append(f"grade_categories.csv course {course_id}: {e.errors()[0]['msg']}")
                rejected.add(course_id)

        self.categories = [c for c in self.categories if c.course_id not in rejected]

    def populate(self, store: GradebookStore) -> Dict[str, int]:
        """Save everything loaded into a store"""
        for student in self.students:
            store.save_student(student)
        for course in self.courses:
            store.save_course(course)
        for category in self.categories:
            store.save_category(category)
        for grade in self.grades:
            store.save_grade(grade)

        counts = {
            "students": len(self.students),
            "courses": len(self.courses),
            "categories": len(self.categories),
            "grades": len(self.grades),
        }
        logger.info(f"Populated store: {counts}")
        return counts

    def get_all_student_ids(self) -> List[str]:
        return [s.id for s in self.students]

    def generate_validation_report(self) -> str:
        """Human-readable summary of what was loaded and what was rejected"""
        lines = [
            "📋 DATA VALIDATION REPORT",
            "=" * 50,
            f"Students:   {len(self.students)}",
            f"Courses:    {len(self.courses)}",
            f"Categories: {len(self.categories)}",
            f"Grades:     {len(self.grades)}",
        ]
        if self.validation_errors:
            lines.append(f"\n⚠️ {len(self.validation_errors)} issue(s):")
            lines.extend(f"  - {error}" for error in self.validation_errors)
        else:
            lines.append("\n✅ No validation issues")
        return "\n".join(lines)
