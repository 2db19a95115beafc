"""Initial schema: teams, questions, positions and applications

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 09:00:00.000000

Creates every table of the recruitment portal. Position slugs are unique
case-insensitively and order positions are unique per position.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "teams",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("question", sa.String(255), nullable=False),
        sa.Column("short_name", sa.String(255), nullable=False),
        sa.Column("question_type", sa.String(50), nullable=False),
        sa.Column("hint", sa.Text(), nullable=True),
        sa.Column("default_value", sa.String(255), nullable=True),
        sa.Column("required_by_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "positions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("team_id", sa.Uuid(), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("short_description", sa.Text(), nullable=True),
        sa.Column("general_description", sa.Text(), nullable=True),
        sa.Column("rendered_general_description", sa.Text(), nullable=True),
        sa.Column("position_description", sa.Text(), nullable=True),
        sa.Column("rendered_position_description", sa.Text(), nullable=True),
        sa.Column("applicant_description", sa.Text(), nullable=True),
        sa.Column("rendered_applicant_description", sa.Text(), nullable=True),
        sa.Column("paid_description", sa.Text(), nullable=True),
        sa.Column("rendered_paid_description", sa.Text(), nullable=True),
        sa.Column("duration", sa.String(255), nullable=True),
        sa.Column("time_commitment", sa.String(50), nullable=True),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_positions_team_id", "positions", ["team_id"])
    op.create_index("ix_positions_published_at", "positions", ["published_at"])
    op.create_index("ix_positions_expires_at", "positions", ["expires_at"])
    op.create_index("uq_positions_slug_lower", "positions", [sa.text("lower(slug)")], unique=True)

    op.create_table(
        "position_questions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("position_id", sa.Uuid(), sa.ForeignKey("positions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_id", sa.Uuid(), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("order_position", sa.Integer(), nullable=True),
        sa.Column("required", sa.Boolean(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("position_id", "order_position", name="uq_position_question_order"),
    )
    op.create_index("ix_position_questions_position_id", "position_questions", ["position_id"])
    op.create_index("ix_position_questions_question_id", "position_questions", ["question_id"])

    op.create_table(
        "contact_emails",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("position_id", sa.Uuid(), sa.ForeignKey("positions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_contact_emails_position_id", "contact_emails", ["position_id"])

    op.create_table(
        "position_applications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("position_id", sa.Uuid(), sa.ForeignKey("positions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_position_applications_position_id", "position_applications", ["position_id"])

    op.create_table(
        "answers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "application_id",
            sa.Uuid(),
            sa.ForeignKey("position_applications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "position_question_id",
            sa.Uuid(),
            sa.ForeignKey("position_questions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("value", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_answers_application_id", "answers", ["application_id"])
    op.create_index("ix_answers_position_question_id", "answers", ["position_question_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("answers")
    op.drop_table("position_applications")
    op.drop_table("contact_emails")
    op.drop_table("position_questions")
    op.drop_index("uq_positions_slug_lower", table_name="positions")
    op.drop_table("positions")
    op.drop_table("questions")
    op.drop_table("teams")
