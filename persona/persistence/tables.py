"""SQLAlchemy table definitions for persona votes.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

personality_system_enum = postgresql.ENUM(
    "mbti", "enneagram", "zodiac", name="personality_system", create_type=False
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("profile_id", Integer, nullable=False),
    Column("author", String(100), nullable=False),
    Column("title", String(200), nullable=True),
    Column("content", Text, nullable=False),
    Column("is_visible", Boolean, nullable=False, server_default="true"),
    Column("total_votes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("total_votes >= 0", name="total_votes_non_negative"),
)

Index("idx_comments_profile_id", comments_table.c.profile_id)
Index("idx_comments_created_at", comments_table.c.created_at.desc())

# ============================================================================
# COMMENT VOTE TALLIES TABLE (one counter row per comment/system/value)
# ============================================================================
comment_vote_tallies_table = Table(
    "comment_vote_tallies",
    metadata,
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("personality_system", personality_system_enum, primary_key=True),
    Column("personality_value", String(20), primary_key=True),
    Column("count", Integer, nullable=False, server_default="0"),
    CheckConstraint("count >= 0", name="tally_count_non_negative"),
)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("profile_id", Integer, nullable=False),  # Denormalized from comments
    Column("voter_identifier", String(100), nullable=False),
    Column("personality_system", personality_system_enum, nullable=False),
    Column("personality_value", String(20), nullable=False),
    Column("active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# One active vote per voter, comment and personality system.
# Deactivated votes are kept, so the constraint only covers active rows.
Index(
    "uq_votes_active_voter_system",
    votes_table.c.comment_id,
    votes_table.c.voter_identifier,
    votes_table.c.personality_system,
    unique=True,
    postgresql_where=votes_table.c.active,
)
Index("idx_votes_comment_id", votes_table.c.comment_id)
Index("idx_votes_voter_created", votes_table.c.voter_identifier, votes_table.c.created_at)
Index(
    "idx_votes_system_value",
    votes_table.c.personality_system,
    votes_table.c.personality_value,
)

__all__ = [
    "comment_vote_tallies_table",
    "comments_table",
    "metadata",
    "votes_table",
]
