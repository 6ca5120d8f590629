"""
Suggestions Vote Store
In-memory up/down voter sets per suggestion message.

State is transient: it lives for the lifetime of the process and is never persisted.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Set, Tuple

logger = logging.getLogger(__name__)


class VoteDirection(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "VoteDirection":
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP


@dataclass
class VoteRecord:
    """Voters for a single suggestion. A user id is never in both sets."""
    up_voters: Set[int] = field(default_factory=set)
    down_voters: Set[int] = field(default_factory=set)

    def voters(self, direction: VoteDirection) -> Set[int]:
        return self.up_voters if direction is VoteDirection.UP else self.down_voters


@dataclass(frozen=True)
class VoteSnapshot:
    """Read-only copy of a VoteRecord handed out to renderers and the results view."""
    up_voters: FrozenSet[int]
    down_voters: FrozenSet[int]

    @property
    def up_count(self) -> int:
        return len(self.up_voters)

    @property
    def down_count(self) -> int:
        return len(self.down_voters)


class VoteStore:
    """Owns every VoteRecord. Records are created lazily on first reference."""

    def __init__(self):
        self._records: Dict[int, VoteRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, suggestion_id: int) -> bool:
        return suggestion_id in self._records

    def _record(self, suggestion_id: int) -> VoteRecord:
        record = self._records.get(suggestion_id)
        if record is None:
            record = VoteRecord()
            self._records[suggestion_id] = record
        return record

    def cast_vote(self, suggestion_id: int, user_id: int, direction: VoteDirection) -> Tuple[int, int]:
        """
        Toggle a user's vote in one direction.

        Clicking the direction the user already holds withdraws the vote.
        Clicking the other direction moves the vote across.

        Args:
            suggestion_id: Message ID of the suggestion
            user_id: ID of the voting user
            direction: VoteDirection.UP or VoteDirection.DOWN

        Returns:
            Tuple of (up_count, down_count) after the change
        """
        direction = VoteDirection(direction)
        record = self._record(suggestion_id)
        chosen = record.voters(direction)

        if user_id in chosen:
            chosen.discard(user_id)
            logger.debug(f"User {user_id} withdrew {direction.value} vote on {suggestion_id}")
        else:
            chosen.add(user_id)
            record.voters(direction.opposite).discard(user_id)
            logger.debug(f"User {user_id} voted {direction.value} on {suggestion_id}")

        return len(record.up_voters), len(record.down_voters)

    def get_record(self, suggestion_id: int) -> VoteSnapshot:
        """Return a snapshot of the voters for a suggestion (empty for unknown IDs)."""
        record = self._record(suggestion_id)
        return VoteSnapshot(
            up_voters=frozenset(record.up_voters),
            down_voters=frozenset(record.down_voters),
        )
