"""Initial schema - gradebook document tables

Revision ID: 0001
Revises:
Create Date: 2025-01-10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Students table
    op.create_table('students',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_students_user_id', 'students', ['user_id'])
    op.create_index('ix_students_email', 'students', ['email'])

    # Courses table
    op.create_table('courses',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('course_code', sa.String(50), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_courses_course_code', 'courses', ['course_code'])

    # Grade categories table
    op.create_table('grade_categories',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('course_id', sa.String(64), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_grade_categories_course_id', 'grade_categories', ['course_id'])

    # Grade entries table
    op.create_table('grade_entries',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('student_id', sa.String(64), nullable=False),
        sa.Column('assignment_id', sa.String(64), nullable=False),
        sa.Column('course_id', sa.String(64), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'assignment_id', name='uq_grade_student_assignment')
    )
    op.create_index('ix_grade_entries_student_id', 'grade_entries', ['student_id'])
    op.create_index('ix_grade_entries_course_id', 'grade_entries', ['course_id'])

    # Transcripts table
    op.create_table('transcripts',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('student_id', sa.String(64), nullable=False),
        sa.Column('academic_year', sa.String(20), nullable=False),
        sa.Column('semester', sa.String(10), nullable=False),
        sa.Column('verification_code', sa.String(64), nullable=True),
        sa.Column('is_official', sa.Boolean(), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'academic_year', 'semester', name='uq_transcript_scope'),
        sa.UniqueConstraint('verification_code')
    )
    op.create_index('ix_transcripts_student_id', 'transcripts', ['student_id'])


def downgrade() -> None:
    op.drop_table('transcripts')
    op.drop_table('grade_entries')
    op.drop_table('grade_categories')
    op.drop_table('courses')
    op.drop_table('students')
