"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- An in-memory store seeded with students, courses and categories
- Grade entry factories
- Services wired to the seeded store
"""

from datetime import datetime

import pytest

from gradebook.config import Settings
from gradebook.core.models import CourseRecord, GradeCategory, GradeEntry, StudentRef
from gradebook.core.services import CategoryService, GradingService, TranscriptBuilder
from gradebook.storage import InMemoryGradebookStore


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file"""
    return Settings(_env_file=None, DEFAULT_COURSE_CREDITS=3.0, STRICT_GRADE_POINTS=False)


@pytest.fixture
def student() -> StudentRef:
    return StudentRef(
        id="S1001",
        user_id="U1001",
        email="Ada.Lovelace@School.edu",
        first_name="Ada",
        last_name="Lovelace",
        student_number="2025-001",
    )


@pytest.fixture
def math_course() -> CourseRecord:
    return CourseRecord(
        id="C100",
        course_code="math101",
        course_name="Calculus I",
        credits=4,
        instructor="T1",
        semester="Fall",
        academic_year="2024",
        enrolled_students=["S1001", "S1002"],
    )


@pytest.fixture
def history_course() -> CourseRecord:
    return CourseRecord(
        id="C200",
        course_code="HIST210",
        course_name="Modern History",
        credits=3,
        instructor="T2",
        semester="Fall",
        academic_year="2024",
        enrolled_students=["S1001"],
    )


@pytest.fixture
def store(student, math_course, history_course) -> InMemoryGradebookStore:
    """Store with two students, two Fall 2024 courses and their categories"""
    store = InMemoryGradebookStore()
    store.save_student(student)
    store.save_student(StudentRef(id="S1002", user_id="U1002", first_name="Alan", last_name="Turing"))
    store.save_course(math_course)
    store.save_course(history_course)

    # Calculus: 40% assignments (drop 1), 60% exams
    store.save_category(GradeCategory(
        id="cat-math-hw", course_id="C100", name="Homework", type="assignments",
        weight=40, drop_lowest=1, order=0,
    ))
    store.save_category(GradeCategory(
        id="cat-math-ex", course_id="C100", name="Exams", type="exams", weight=60, order=1,
    ))
    # History: single 100% projects category
    store.save_category(GradeCategory(
        id="cat-hist-pr", course_id="C200", name="Projects", type="projects", weight=100, order=0,
    ))
    return store


@pytest.fixture
def make_entry():
    """Factory for published grade entries"""
    def _make(
        assignment_id: str,
        points_earned: float,
        max_points: float = 100,
        category: str = "assignments",
        student_id: str = "S1001",
        course_id: str = "C100",
        status: str = "published",
        published_at: datetime = datetime(2024, 12, 1, 9, 0),
    ) -> GradeEntry:
        return GradeEntry(
            student_id=student_id,
            assignment_id=assignment_id,
            course_id=course_id,
            category=category,
            points_earned=points_earned,
            max_points=max_points,
            status=status,
            published_at=published_at if status == "published" else None,
        )
    return _make


@pytest.fixture
def graded_store(store, make_entry) -> InMemoryGradebookStore:
    """
    Seeded store with published grades for S1001

    Calculus: homework 90, 70, 50 (50 dropped -> 80), exams 90 -> final 86.0 (B)
    History: projects 95 -> final 95.0 (A)
    """
    for entry in [
        make_entry("hw1", 90),
        make_entry("hw2", 70),
        make_entry("hw3", 50),
        make_entry("ex1", 90, category="exams"),
        make_entry("pr1", 95, category="projects", course_id="C200"),
        make_entry("draft1", 10, category="exams", status="draft"),
    ]:
        store.save_grade(entry)
    return store


@pytest.fixture
def grading_service(graded_store) -> GradingService:
    return GradingService(graded_store)


@pytest.fixture
def category_service(store) -> CategoryService:
    return CategoryService(store)


@pytest.fixture
def transcript_builder(graded_store, test_settings) -> TranscriptBuilder:
    return TranscriptBuilder(graded_store, settings=test_settings)
