"""
Integration Tests for the SQL Store

Runs the services against SqlGradebookStore on a temporary SQLite file.
"""

import pytest

from gradebook.core.models import CourseRecord, GradeCategory, GradeEntry, GradingScale, StudentRef, Transcript
from gradebook.core.services import GradingService, TranscriptBuilder
from gradebook.storage import SqlGradebookStore


@pytest.fixture
def sql_store(tmp_path, student, math_course):
    store = SqlGradebookStore(f"sqlite:///{tmp_path / 'gradebook.db'}")
    store.create_schema()
    store.save_student(student)
    store.save_course(math_course)
    store.save_category(GradeCategory(
        id="cat-hw", course_id="C100", name="Homework", type="assignments", weight=40, drop_lowest=1,
    ))
    store.save_category(GradeCategory(
        id="cat-ex", course_id="C100", name="Exams", type="exams", weight=60, order=1,
    ))
    return store


class TestSqlStore:
    """Tests for SqlGradebookStore lookups"""

    def test_student_lookups(self, sql_store):
        assert sql_store.get_student("S1001").full_name == "Ada Lovelace"
        assert sql_store.find_student_by_user_id("U1001").id == "S1001"
        assert sql_store.find_student_by_email(" ADA.LOVELACE@school.edu").id == "S1001"
        assert sql_store.get_student("missing") is None

    def test_course_round_trip(self, sql_store, math_course):
        stored = sql_store.get_course("C100")
        assert stored == math_course
        assert stored.enrolled_students == ["S1001", "S1002"]

    def test_categories_filtered_and_ordered(self, sql_store):
        category = sql_store.get_category("cat-ex")
        category.is_active = False
        sql_store.save_category(category)

        assert [c.id for c in sql_store.list_categories("C100")] == ["cat-hw"]
        assert [c.id for c in sql_store.list_categories("C100", active_only=False)] == ["cat-hw", "cat-ex"]

    def test_grade_filters(self, sql_store):
        sql_store.save_grade(GradeEntry(
            student_id="S1001", assignment_id="hw1", course_id="C100",
            category="assignments", points_earned=9, max_points=10, status="published",
        ))
        sql_store.save_grade(GradeEntry(
            student_id="S1001", assignment_id="hw2", course_id="C100",
            category="assignments", points_earned=5, max_points=10,
        ))

        assert len(sql_store.list_grades(student_id="S1001")) == 2
        published = sql_store.list_grades(course_id="C100", status="published")
        assert [g.assignment_id for g in published] == ["hw1"]
        assert sql_store.find_grade("S1001", "hw2").percentage == pytest.approx(50.0)

    def test_transcript_upsert_by_scope(self, sql_store):
        first = Transcript(student_id="S1001", academic_year="2024", semester="Fall", verification_code="a" * 32)
        sql_store.save_transcript(first)
        replacement = Transcript(student_id="S1001", academic_year="2024", semester="Fall", verification_code="b" * 32)
        sql_store.save_transcript(replacement)

        stored = sql_store.list_transcripts("S1001")
        assert [t.id for t in stored] == [replacement.id]
        assert sql_store.find_transcript("S1001", "2024", "Fall").id == replacement.id
        assert sql_store.find_transcript_by_code("b" * 32).id == replacement.id
        assert sql_store.find_transcript_by_code("a" * 32) is None


class TestServicesOnSql:
    """End-to-end grading and transcript flow on SQL storage"""

    def test_grade_to_transcript(self, sql_store):
        grading = GradingService(sql_store)
        entries = [
            grading.record_grade("S1001", "hw1", "C100", "assignments", 100, 100),
            grading.record_grade("S1001", "hw2", "C100", "assignments", 70, 100),
            grading.record_grade("U1001", "ex1", "C100", "exams", 45, 50),
        ]
        grading.record_grade("S1001", "hw2", "C100", "assignments", 80, 100, feedback="Regraded")
        assert grading.publish_grades([e.id for e in entries]) == 3

        revised = sql_store.find_grade("S1001", "hw2")
        assert len(revised.revisions) == 1
        assert revised.revisions[0].points_earned == 70

        builder = TranscriptBuilder(sql_store)
        transcript = builder.generate_transcript("ada.lovelace@school.edu", "2024", "Fall")
        regenerated = builder.generate_transcript("S1001", "2024", "Fall")

        # Homework 100/80 drop 1 -> 100; exams 90 -> 94.0 overall
        course = transcript.courses[0]
        assert course.final_grade.percentage == pytest.approx(94.0)
        assert course.final_grade.letter_grade == "A"
        assert regenerated.id == transcript.id
        assert regenerated.courses == transcript.courses
        assert len(sql_store.list_transcripts("S1001")) == 1

        official = builder.mark_transcript_official(transcript.id)
        stored = sql_store.get_transcript(transcript.id)
        assert stored.is_official
        assert stored.digital_signature == official.digital_signature
        assert builder.verify_transcript(transcript.verification_code).is_official

    def test_models_survive_json_documents(self, sql_store):
        sql_store.save_student(StudentRef(id="S2", first_name="Grace", last_name="Hopper"))
        sql_store.save_course(CourseRecord(id="C2", course_code="cs50", course_name="CS", semester="Spring"))

        assert sql_store.get_course("C2").semester == "Spring"
        assert [s.id for s in sql_store.list_students()] == ["S1001", "S2"]

    def test_custom_scale_letter_survives_reload(self, sql_store):
        scale = GradingScale(breakpoints=[(50, "P")], fallback_letter="NP", grade_points={"P": 4.0, "NP": 0.0})
        grading = GradingService(sql_store, grading_scale=scale)

        entry = grading.record_grade("S1001", "lab1", "C100", "projects", 55, 100)
        assert entry.letter_grade == "P"

        reloaded = sql_store.get_grade(entry.id)
        assert reloaded.letter_grade == "P"
        assert reloaded.percentage == pytest.approx(55.0)

        grading.publish_grades([entry.id])
        stats = grading.course_statistics("C100")
        assert stats.distribution == {"P": 1, "NP": 0}
