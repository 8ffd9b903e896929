"""Create wellness tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the seven MindfulSpace tables: users, journal_entries,
       mood_entries, gratitude_entries, friend_requests,
       support_interactions, user_achievements.
How:   Integer identity keys, TIMESTAMP WITH TIME ZONE timestamps, every
       user foreign key ON DELETE CASCADE.

Unique constraints:
    users (email)
    mood_entries (user_id, date)                      one mood per day
    friend_requests (requester_id, requested_id)      one request per ordered pair
    user_achievements (user_id, achievement_type)     unlock once

Rollback: downgrade() drops all seven tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.Integer(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(50), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_complete", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("join_date"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "journal_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("user_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("idx_journal_entries_user_id", "journal_entries", ["user_id"])
    op.create_index("idx_journal_entries_public", "journal_entries", ["is_public"])
    op.create_index("idx_journal_entries_created_at", "journal_entries", ["created_at"])

    op.create_table(
        "mood_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("user_id"),
        sa.Column("mood", sa.String(50), nullable=False),
        sa.Column("emoji", sa.String(10), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        _timestamp("created_at"),
        sa.UniqueConstraint("user_id", "date", name="uq_mood_entries_user_date"),
    )
    op.create_index("idx_mood_entries_user_date", "mood_entries", ["user_id", "date"])

    op.create_table(
        "gratitude_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("user_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("idx_gratitude_entries_user_date", "gratitude_entries", ["user_id", "date"])

    op.create_table(
        "friend_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("requester_id"),
        _user_fk("requested_id"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("requester_id", "requested_id", name="uq_friend_requests_pair"),
    )
    op.create_index("idx_friend_requests_requester", "friend_requests", ["requester_id"])
    op.create_index("idx_friend_requests_requested", "friend_requests", ["requested_id"])

    op.create_table(
        "support_interactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("sender_id"),
        _user_fk("receiver_id"),
        sa.Column(
            "journal_entry_id",
            sa.Integer(),
            sa.ForeignKey("journal_entries.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("interaction_type", sa.String(50), nullable=False, server_default="support"),
        _timestamp("created_at"),
    )
    op.create_index("idx_support_interactions_sender", "support_interactions", ["sender_id"])
    op.create_index("idx_support_interactions_receiver", "support_interactions", ["receiver_id"])

    op.create_table(
        "user_achievements",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _user_fk("user_id"),
        sa.Column("achievement_type", sa.String(100), nullable=False),
        _timestamp("unlocked_at"),
        sa.UniqueConstraint("user_id", "achievement_type", name="uq_user_achievements_type"),
    )
    op.create_index("idx_user_achievements_user_id", "user_achievements", ["user_id"])


def downgrade() -> None:
    # Children before parents
    op.drop_table("user_achievements")
    op.drop_table("support_interactions")
    op.drop_table("friend_requests")
    op.drop_table("gratitude_entries")
    op.drop_table("mood_entries")
    op.drop_table("journal_entries")
    op.drop_table("users")
