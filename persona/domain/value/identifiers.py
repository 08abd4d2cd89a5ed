"""Strongly typed identifiers for persona domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)

# Profiles are numbered externally, not by UUID
ProfileId = NewType("ProfileId", int)
