"""Create students, teachers and subjects tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

subjects.teacher_id is intentionally not a foreign key: deleting a teacher
leaves their subjects in place, displayed as "Unassigned".
"""
from alembic import op
import sqlalchemy as sa

revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "teachers",
        *_base_columns(),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("specialization", sa.String(length=100), nullable=False),
    )
    op.create_index("ix_teachers_specialization", "teachers", ["specialization"])
    op.create_index("ix_teachers_created_at", "teachers", ["created_at"])

    op.create_table(
        "students",
        *_base_columns(),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("student_number", sa.String(length=20), nullable=False),
        sa.Column("level", sa.String(length=20), nullable=False),
    )
    op.create_index("ix_students_student_number", "students", ["student_number"], unique=True)
    op.create_index("ix_students_level", "students", ["level"])
    op.create_index("ix_students_created_at", "students", ["created_at"])

    op.create_table(
        "subjects",
        *_base_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("coefficient", sa.Integer(), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), nullable=True),
        sa.CheckConstraint("coefficient BETWEEN 1 AND 10", name="ck_subjects_coefficient_range"),
    )
    op.create_index("ix_subjects_code", "subjects", ["code"], unique=True)
    op.create_index("ix_subjects_teacher_id", "subjects", ["teacher_id"])
    op.create_index("ix_subjects_created_at", "subjects", ["created_at"])


def downgrade() -> None:
    op.drop_table("subjects")
    op.drop_table("students")
    op.drop_table("teachers")
