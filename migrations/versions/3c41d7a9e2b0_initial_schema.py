"""initial_schema

Create the schema for personality votes:
- Comments on personality profiles, with a denormalized total_votes
- Comment vote tallies (one counter per comment/system/value)
- Votes (one active vote per voter, comment and personality system)

Revision ID: 3c41d7a9e2b0
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d7a9e2b0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM type (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE personality_system AS ENUM ('mbti', 'enneagram', 'zodiac');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    personality_system = postgresql.ENUM(
        "mbti", "enneagram", "zodiac", name="personality_system", create_type=False
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("total_votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("total_votes >= 0", name="total_votes_non_negative"),
    )
    op.create_index("idx_comments_profile_id", "comments", ["profile_id"])
    op.create_index(
        "idx_comments_created_at", "comments", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # COMMENT_VOTE_TALLIES table
    # ========================================================================
    op.create_table(
        "comment_vote_tallies",
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("personality_system", personality_system, nullable=False),
        sa.Column("personality_value", sa.String(20), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint(
            "comment_id", "personality_system", "personality_value"
        ),
        sa.CheckConstraint("count >= 0", name="tally_count_non_negative"),
    )

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("voter_identifier", sa.String(100), nullable=False),
        sa.Column("personality_system", personality_system, nullable=False),
        sa.Column("personality_value", sa.String(20), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_votes_comment_id", "votes", ["comment_id"])
    op.create_index(
        "idx_votes_voter_created", "votes", ["voter_identifier", "created_at"]
    )
    op.create_index(
        "idx_votes_system_value", "votes", ["personality_system", "personality_value"]
    )

    # Partial unique constraint: one active vote per voter, comment and system
    op.execute("""
        CREATE UNIQUE INDEX uq_votes_active_voter_system
        ON votes (comment_id, voter_identifier, personality_system)
        WHERE active
    """)

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER update_comments_updated_at
        BEFORE UPDATE ON comments
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)

    op.execute("""
        CREATE TRIGGER update_votes_updated_at
        BEFORE UPDATE ON votes
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_votes_updated_at ON votes")
    op.execute("DROP TRIGGER IF EXISTS update_comments_updated_at ON comments")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("votes")
    op.drop_table("comment_vote_tallies")
    op.drop_table("comments")

    op.execute("DROP TYPE IF EXISTS personality_system")
