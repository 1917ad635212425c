"""add delibs sessions and votes

Revision ID: 7a4e2d91c6b3
Revises: 3f1c9a2b7d40
Create Date: 2026-10-02 16:47:09.553871

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7a4e2d91c6b3"
down_revision = "3f1c9a2b7d40"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "delibs_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recruitment_round_id", sa.Integer(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="open"),
        sa.Column("locked_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.ForeignKeyConstraint(
            ["recruitment_round_id"], ["recruitment_rounds.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("recruitment_round_id"),
    )
    op.create_table(
        "delibs_votes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("delibs_session_id", sa.Integer(), nullable=False),
        sa.Column("applicant_round_id", sa.Integer(), nullable=False),
        sa.Column("voter_user_id", sa.Integer(), nullable=False),
        sa.Column("vote_value", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "vote_value IN (-10, -5, 0, 5, 10)", name="ck_delibs_votes_vote_value"
        ),
        sa.ForeignKeyConstraint(
            ["applicant_round_id"], ["applicant_rounds.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["delibs_session_id"], ["delibs_sessions.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["voter_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "delibs_session_id",
            "applicant_round_id",
            "voter_user_id",
            name="uq_delibs_votes_session_applicant_voter",
        ),
    )
    with op.batch_alter_table("applicant_rounds", schema=None) as batch_op:
        batch_op.add_column(
            sa.Column("last_decision", sa.String(length=20), nullable=True)
        )
        batch_op.add_column(sa.Column("decided_by", sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            "fk_applicant_rounds_decided_by_users", "users", ["decided_by"], ["id"]
        )


def downgrade():
    op.drop_table("delibs_votes")
    op.drop_table("delibs_sessions")

    with op.batch_alter_table("applicant_rounds", schema=None) as batch_op:
        batch_op.drop_constraint(
            "fk_applicant_rounds_decided_by_users", type_="foreignkey"
        )
        batch_op.drop_column("decided_by")
        batch_op.drop_column("last_decision")
