"""
Suggestions Actions
Structured actions carried in component custom IDs.

Custom ID formats:
- fb_open:public / fb_open:anon      open the submission form
- fb_modal:0 / fb_modal:1            submit the form (1 = anonymous)
- vote:up:<id> / vote:down:<id>      cast a vote on a suggestion message
- vote:view:<id>                     view who voted (staff only)
"""

from dataclasses import dataclass
from typing import Optional, Union

from .store import VoteDirection

OPEN_PREFIX = "fb_open"
MODAL_PREFIX = "fb_modal"
VOTE_PREFIX = "vote"

OWNED_PREFIXES = (OPEN_PREFIX, MODAL_PREFIX, VOTE_PREFIX)


@dataclass(frozen=True)
class OpenForm:
    anonymous: bool

    @property
    def custom_id(self) -> str:
        return f"{OPEN_PREFIX}:{'anon' if self.anonymous else 'public'}"


@dataclass(frozen=True)
class SubmitForm:
    anonymous: bool
    text: str = ""

    @property
    def custom_id(self) -> str:
        return f"{MODAL_PREFIX}:{1 if self.anonymous else 0}"


@dataclass(frozen=True)
class CastVote:
    direction: VoteDirection
    suggestion_id: int

    @property
    def custom_id(self) -> str:
        return f"{VOTE_PREFIX}:{self.direction.value}:{self.suggestion_id}"


@dataclass(frozen=True)
class ViewResults:
    suggestion_id: int

    @property
    def custom_id(self) -> str:
        return f"{VOTE_PREFIX}:view:{self.suggestion_id}"


Action = Union[OpenForm, SubmitForm, CastVote, ViewResults]


def is_owned(custom_id: str) -> bool:
    """Check whether a custom ID belongs to the suggestions system."""
    return bool(custom_id) and custom_id.split(":", 1)[0] in OWNED_PREFIXES


def decode(custom_id: str) -> Optional[Action]:
    """
    Decode a component custom ID into an action.

    Args:
        custom_id: The raw custom ID from the interaction payload

    Returns:
        The decoded action, or None if the ID belongs to something else

    Raises:
        ValueError: If the ID has one of our prefixes but is malformed
    """
    if not is_owned(custom_id):
        return None

    prefix, _, rest = custom_id.partition(":")

    if prefix == OPEN_PREFIX:
        if rest not in ("public", "anon"):
            raise ValueError(f"Malformed form custom_id: {custom_id!r}")
        return OpenForm(anonymous=rest == "anon")

    if prefix == MODAL_PREFIX:
        if rest not in ("0", "1"):
            raise ValueError(f"Malformed modal custom_id: {custom_id!r}")
        return SubmitForm(anonymous=rest == "1")

    kind, _, raw_id = rest.partition(":")
    if not kind or not raw_id.isdigit():
        raise ValueError(f"Malformed vote custom_id: {custom_id!r}")

    suggestion_id = int(raw_id)
    if kind == "view":
        return ViewResults(suggestion_id)
    try:
        return CastVote(VoteDirection(kind), suggestion_id)
    except ValueError:
        raise ValueError(f"Unknown vote action in custom_id: {custom_id!r}") from None
