"""
SQL DOCUMENT STORE - GradebookStore on top of SQLAlchemy

Each table keeps the lookup keys as real columns and the full model as a JSON
document. Saves replace the whole document; the unique constraint on
(student_id, academic_year, semester) keeps one transcript per term.

Schema mirrors alembic/versions/20250110_0001_gradebook_schema.py.
"""

import logging
from datetime import datetime
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    String,
    UniqueConstraint,
    create_engine,
    delete,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from gradebook.config import settings
from gradebook.core.models import CourseRecord, GradeCategory, GradeEntry, StudentRef, Transcript

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Base(DeclarativeBase):
    pass


class StudentRow(Base):
    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)


class CourseRow(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_code: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)


class CategoryRow(Base):
    __tablename__ = "grade_categories"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)


class GradeRow(Base):
    __tablename__ = "grade_entries"
    __table_args__ = (
        UniqueConstraint("student_id", "assignment_id", name="uq_grade_student_assignment"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    assignment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    course_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)


class TranscriptRow(Base):
    __tablename__ = "transcripts"
    __table_args__ = (
        UniqueConstraint("student_id", "academic_year", "semester", name="uq_transcript_scope"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    academic_year: Mapped[str] = mapped_column(String(20), nullable=False)
    semester: Mapped[str] = mapped_column(String(10), nullable=False)
    verification_code: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    is_official: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)


class SqlGradebookStore:
    """GradebookStore backed by a SQL database"""

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None:
            engine = create_engine(database_url or settings.DATABASE_URL)
        self.engine = engine
        self.session_factory = sessionmaker(engine, expire_on_commit=False)

    def create_schema(self) -> None:
        """Create all tables (tests and local use; production runs alembic)"""
        Base.metadata.create_all(self.engine)

    @staticmethod
    def _to_model(model_cls: Type[ModelT], row) -> Optional[ModelT]:
        if row is None:
            return None
        return model_cls.model_validate(row.document)

    def _get(self, row_cls, model_cls: Type[ModelT], key: str) -> Optional[ModelT]:
        with self.session_factory() as session:
            return self._to_model(model_cls, session.get(row_cls, key))

    def _first(self, model_cls: Type[ModelT], stmt) -> Optional[ModelT]:
        with self.session_factory() as session:
            return self._to_model(model_cls, session.scalars(stmt).first())

    def _all(self, model_cls: Type[ModelT], stmt) -> List[ModelT]:
        with self.session_factory() as session:
            return [self._to_model(model_cls, row) for row in session.scalars(stmt)]

    @staticmethod
    def _upsert(session: Session, row_cls, model: BaseModel, **columns) -> None:
        document = model.model_dump(mode="json")
        row = session.get(row_cls, model.id)
        if row is None:
            session.add(row_cls(id=model.id, document=document, **columns))
            return
        row.document = document
        for name, value in columns.items():
            setattr(row, name, value)

    # Students
    def get_student(self, student_id: str) -> Optional[StudentRef]:
        return self._get(StudentRow, StudentRef, student_id)

    def find_student_by_user_id(self, user_id: str) -> Optional[StudentRef]:
        return self._first(StudentRef, select(StudentRow).where(StudentRow.user_id == user_id))

    def find_student_by_email(self, email: str) -> Optional[StudentRef]:
        stmt = select(StudentRow).where(StudentRow.email == email.strip().lower())
        return self._first(StudentRef, stmt)

    def save_student(self, student: StudentRef) -> StudentRef:
        with self.session_factory.begin() as session:
            self._upsert(session, StudentRow, student, user_id=student.user_id, email=student.email)
        return student

    def list_students(self) -> List[StudentRef]:
        return self._all(StudentRef, select(StudentRow).order_by(StudentRow.id))

    # Courses
    def get_course(self, course_id: str) -> Optional[CourseRecord]:
        return self._get(CourseRow, CourseRecord, course_id)

    def save_course(self, course: CourseRecord) -> CourseRecord:
        with self.session_factory.begin() as session:
            self._upsert(session, CourseRow, course, course_code=course.course_code)
        return course

    # Categories
    def get_category(self, category_id: str) -> Optional[GradeCategory]:
        return self._get(CategoryRow, GradeCategory, category_id)

    def list_categories(self, course_id: str, active_only: bool = True) -> List[GradeCategory]:
        stmt = select(CategoryRow).where(CategoryRow.course_id == course_id)
        if active_only:
            stmt = stmt.where(CategoryRow.is_active.is_(True))
        return sorted(self._all(GradeCategory, stmt), key=lambda c: c.order)

    def save_category(self, category: GradeCategory) -> GradeCategory:
        with self.session_factory.begin() as session:
            self._upsert(
                session, CategoryRow, category,
                course_id=category.course_id, is_active=category.is_active,
            )
        return category

    # Grade entries
    def get_grade(self, grade_id: str) -> Optional[GradeEntry]:
        return self._get(GradeRow, GradeEntry, grade_id)

    def find_grade(self, student_id: str, assignment_id: str) -> Optional[GradeEntry]:
        stmt = select(GradeRow).where(
            GradeRow.student_id == student_id, GradeRow.assignment_id == assignment_id
        )
        return self._first(GradeEntry, stmt)

    def list_grades(
        self,
        student_id: Optional[str] = None,
        course_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[GradeEntry]:
        stmt = select(GradeRow)
        if student_id is not None:
            stmt = stmt.where(GradeRow.student_id == student_id)
        if course_id is not None:
            stmt = stmt.where(GradeRow.course_id == course_id)
        if status is not None:
            stmt = stmt.where(GradeRow.status == status)
        return self._all(GradeEntry, stmt)

    def save_grade(self, entry: GradeEntry) -> GradeEntry:
        with self.session_factory.begin() as session:
            self._upsert(
                session, GradeRow, entry,
                student_id=entry.student_id,
                assignment_id=entry.assignment_id,
                course_id=entry.course_id,
                status=entry.status,
            )
        return entry

    # Transcripts
    def get_transcript(self, transcript_id: str) -> Optional[Transcript]:
        return self._get(TranscriptRow, Transcript, transcript_id)

    def find_transcript(self, student_id: str, academic_year: str, semester: str) -> Optional[Transcript]:
        stmt = select(TranscriptRow).where(
            TranscriptRow.student_id == student_id,
            TranscriptRow.academic_year == str(academic_year),
            TranscriptRow.semester == str(getattr(semester, "value", semester)),
        )
        return self._first(Transcript, stmt)

    def find_transcript_by_code(self, verification_code: str) -> Optional[Transcript]:
        stmt = select(TranscriptRow).where(TranscriptRow.verification_code == verification_code)
        return self._first(Transcript, stmt)

    def list_transcripts(self, student_id: str) -> List[Transcript]:
        stmt = select(TranscriptRow).where(TranscriptRow.student_id == student_id)
        return self._all(Transcript, stmt)

    def save_transcript(self, transcript: Transcript) -> Transcript:
        with self.session_factory.begin() as session:
            session.execute(
                delete(TranscriptRow).where(
                    TranscriptRow.student_id == transcript.student_id,
                    TranscriptRow.academic_year == transcript.academic_year,
                    TranscriptRow.semester == transcript.semester,
                    TranscriptRow.id != transcript.id,
                )
            )
            self._upsert(
                session, TranscriptRow, transcript,
                student_id=transcript.student_id,
                academic_year=transcript.academic_year,
                semester=transcript.semester,
                verification_code=transcript.verification_code,
                is_official=transcript.is_official,
            )
        return transcript
