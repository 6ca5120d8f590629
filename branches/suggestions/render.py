"""
Suggestions Renderer
Derives the voting controls for a suggestion from the vote store.
"""

from dataclasses import dataclass
from typing import List, Union

from .actions import CastVote, ViewResults
from .store import VoteDirection, VoteStore

UP_EMOJI = "👍"
DOWN_EMOJI = "👎"
VIEW_RESULTS_LABEL = "View results"


@dataclass(frozen=True)
class ControlDescriptor:
    label: str
    action: Union[CastVote, ViewResults]


def render_controls(store: VoteStore, suggestion_id: int) -> List[ControlDescriptor]:
    """Build the up, down and view-results controls with counts in the labels."""
    record = store.get_record(suggestion_id)
    return [
        ControlDescriptor(f"{UP_EMOJI} {record.up_count}", CastVote(VoteDirection.UP, suggestion_id)),
        ControlDescriptor(f"{DOWN_EMOJI} {record.down_count}", CastVote(VoteDirection.DOWN, suggestion_id)),
        ControlDescriptor(VIEW_RESULTS_LABEL, ViewResults(suggestion_id)),
    ]
