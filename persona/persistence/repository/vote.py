"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from persona.domain.error import DuplicateVoteError
from persona.domain.model import (
    CommentVoteCount,
    PersonalityValueCount,
    Vote,
    VoteValueChange,
)
from persona.domain.repository import VoteRepository
from persona.domain.value import CommentId, PersonalitySystem
from persona.persistence.mappers import row_to_value_count, row_to_vote, vote_to_dict
from persona.persistence.tables import votes_table

ACTIVE_VOTE_INDEX = "uq_votes_active_voter_system"


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _active_match(
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ):
        return and_(
            votes_table.c.comment_id == comment_id,
            votes_table.c.voter_identifier == voter_identifier,
            votes_table.c.personality_system == personality_system.value,
            votes_table.c.active.is_(True),
        )

    async def find_active_vote(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[Vote]:
        """Find a voter's active vote on a comment for one system."""
        stmt = select(votes_table).where(
            self._active_match(comment_id, voter_identifier, personality_system)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        The insert runs in a SAVEPOINT so a uniqueness violation leaves the
        surrounding transaction usable.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if ACTIVE_VOTE_INDEX in str(e.orig):
                raise DuplicateVoteError(
                    str(vote.comment_id), vote.personality_system.value
                ) from e
            raise
        return vote

    async def update_value(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> Optional[VoteValueChange]:
        """Change the value of the matching active vote in one statement.

        The prior value is read with FOR UPDATE, so a change that waited on
        a concurrent one sees the value that change committed, not the
        value from before it.
        """
        prior = (
            select(
                votes_table.c.id,
                votes_table.c.personality_value.label("previous_value"),
            )
            .where(self._active_match(comment_id, voter_identifier, personality_system))
            .with_for_update()
            .cte("prior")
        )
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == prior.c.id)
            .where(votes_table.c.active.is_(True))
            .values(personality_value=personality_value, updated_at=datetime.now())
            .returning(*votes_table.c, prior.c.previous_value)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return VoteValueChange(
            previous_value=row.previous_value, vote=row_to_vote(row._asdict())
        )

    async def deactivate(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[Vote]:
        """Deactivate the matching active vote, returning its prior state.

        The prior row is read with FOR UPDATE, so it reflects any value
        change committed while this removal waited, and of two concurrent
        removals only one still finds the row active.
        """
        prior = (
            select(votes_table)
            .where(self._active_match(comment_id, voter_identifier, personality_system))
            .with_for_update()
            .cte("prior")
        )
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == prior.c.id)
            .where(votes_table.c.active.is_(True))
            .values(active=False, updated_at=datetime.now())
            .returning(*prior.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None

        await self.session.flush()
        return row_to_vote(row._asdict())

    async def find_by_comment(
        self,
        comment_id: CommentId,
        personality_system: Optional[PersonalitySystem] = None,
    ) -> List[Vote]:
        """Find active votes on a comment, newest first."""
        stmt = select(votes_table).where(
            votes_table.c.comment_id == comment_id,
            votes_table.c.active.is_(True),
        )
        if personality_system:
            stmt = stmt.where(
                votes_table.c.personality_system == personality_system.value
            )
        stmt = stmt.order_by(votes_table.c.created_at.desc())

        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_voter(
        self,
        voter_identifier: str,
        personality_system: Optional[PersonalitySystem] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Vote]:
        """Find a voter's active votes, newest first."""
        stmt = select(votes_table).where(
            votes_table.c.voter_identifier == voter_identifier,
            votes_table.c.active.is_(True),
        )
        if personality_system:
            stmt = stmt.where(
                votes_table.c.personality_system == personality_system.value
            )
        stmt = (
            stmt.order_by(votes_table.c.created_at.desc(), votes_table.c.id)
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def count_active(
        self,
        comment_id: Optional[CommentId] = None,
        personality_system: Optional[PersonalitySystem] = None,
        voter_identifier: Optional[str] = None,
    ) -> int:
        """Count active votes matching all given filters."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(votes_table.c.active.is_(True))
        )
        if comment_id:
            stmt = stmt.where(votes_table.c.comment_id == comment_id)
        if personality_system:
            stmt = stmt.where(
                votes_table.c.personality_system == personality_system.value
            )
        if voter_identifier:
            stmt = stmt.where(votes_table.c.voter_identifier == voter_identifier)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def top_voted_comments(
        self,
        personality_system: Optional[PersonalitySystem] = None,
        limit: int = 10,
    ) -> List[CommentVoteCount]:
        """Group active votes by comment, most votes first."""
        vote_count = func.count().label("total_votes")
        stmt = (
            select(
                votes_table.c.comment_id,
                vote_count,
                func.array_agg(votes_table.c.personality_system.distinct()).label(
                    "personality_systems"
                ),
            )
            .where(votes_table.c.active.is_(True))
            .group_by(votes_table.c.comment_id)
            .order_by(vote_count.desc(), votes_table.c.comment_id)
            .limit(limit)
        )
        if personality_system:
            stmt = stmt.where(
                votes_table.c.personality_system == personality_system.value
            )

        result = await self.session.execute(stmt)
        return [
            CommentVoteCount(
                comment_id=CommentId(row.comment_id),
                total_votes=row.total_votes,
                personality_systems=sorted(
                    (PersonalitySystem(s) for s in row.personality_systems),
                    key=lambda s: s.value,
                ),
            )
            for row in result.fetchall()
        ]

    async def value_counts(
        self, comment_id: Optional[CommentId] = None
    ) -> List[PersonalityValueCount]:
        """Count active votes per (system, value)."""
        stmt = (
            select(
                votes_table.c.personality_system,
                votes_table.c.personality_value,
                func.count().label("count"),
            )
            .where(votes_table.c.active.is_(True))
            .group_by(
                votes_table.c.personality_system, votes_table.c.personality_value
            )
            .order_by(
                votes_table.c.personality_system, votes_table.c.personality_value
            )
        )
        if comment_id:
            stmt = stmt.where(votes_table.c.comment_id == comment_id)

        result = await self.session.execute(stmt)
        return [row_to_value_count(row._asdict()) for row in result.fetchall()]
