"""initial progress-monitoring schema

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "teachers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_teachers_email", "teachers", ["email"], unique=True)

    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("teacher_id", sa.Integer(), sa.ForeignKey("teachers.id"), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("grade_level", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_students_teacher_id", "students", ["teacher_id"])

    op.create_table(
        "goals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("area", sa.String(length=40), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("goal_grade_level", sa.String(length=20), nullable=False),
        sa.Column("mastery_criteria", sa.Text(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_goals_student_id", "goals", ["student_id"])
    op.create_index("ix_goals_area", "goals", ["area"])

    op.create_table(
        "general_assessments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_general_assessments_student_id", "general_assessments", ["student_id"])
    op.create_index("ix_general_assessments_date", "general_assessments", ["date"])

    op.create_table(
        "general_assessment_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("assessment_id", sa.Integer(), sa.ForeignKey("general_assessments.id"), nullable=False),
        sa.Column("goal_id", sa.Integer(), sa.ForeignKey("goals.id"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("score", sa.String(length=10), nullable=False, server_default="incorrect"),
    )
    op.create_index("ix_general_assessment_items_assessment_id", "general_assessment_items", ["assessment_id"])
    op.create_index("ix_general_assessment_items_goal_id", "general_assessment_items", ["goal_id"])

    op.create_table(
        "fluency_assessments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("total_words_attempted", sa.Integer(), nullable=False),
        sa.Column("errors", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wcpm", sa.Integer(), nullable=False),
        sa.Column("accuracy_percent", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("total_words_attempted > 0", name="ck_fluency_attempted_positive"),
        sa.CheckConstraint("errors >= 0 AND errors <= total_words_attempted", name="ck_fluency_errors_range"),
    )
    op.create_index("ix_fluency_assessments_student_id", "fluency_assessments", ["student_id"])
    op.create_index("ix_fluency_assessments_date", "fluency_assessments", ["date"])


def downgrade():
    op.drop_table("fluency_assessments")
    op.drop_table("general_assessment_items")
    op.drop_table("general_assessments")
    op.drop_table("goals")
    op.drop_table("students")
    op.drop_table("teachers")
