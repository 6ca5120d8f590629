"""
Suggestions Router
Dispatches decoded actions to the vote store and gateway, and decides the
effect to send back on the interaction.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from utils import sanitize_text
from .actions import Action, CastVote, OpenForm, SubmitForm, ViewResults
from .errors import AuthorizationError, ConfigurationError, SuggestionError, ValidationError
from .gateway import SuggestionGateway, SuggestionPost
from .helpers import format_vote_results, is_authorized, merge_messages, pick_display_name
from .render import render_controls
from .store import VoteDirection, VoteStore

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"
FORM_TEXT_FIELD = "text"

DEFAULT_MESSAGES = {
    "submitted": "Thanks! Your suggestion was submitted.",
    "empty": ValidationError.default_message,
    "config_error": ConfigurationError.default_message,
    "not_authorized": AuthorizationError.default_message,
    "form_title": "Submit Feedback",
    "form_label": "Your suggestion or feedback",
}


@dataclass(frozen=True)
class Requester:
    """The user behind an interaction, with the name fields in precedence order."""
    user_id: int
    role_ids: FrozenSet[int] = frozenset()
    nickname: Optional[str] = None
    display_name: Optional[str] = None
    global_name: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class FormField:
    custom_id: str
    label: str
    max_length: int
    required: bool = True


@dataclass(frozen=True)
class PrivateReply:
    text: str


@dataclass(frozen=True)
class ShowForm:
    custom_id: str
    title: str
    fields: Tuple[FormField, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Acknowledge:
    pass


Effect = Union[PrivateReply, ShowForm, Acknowledge]


class SuggestionRouter:
    """Routes suggestion interactions. Holds the only reference to the vote store."""

    def __init__(self, store: VoteStore, gateway: SuggestionGateway, staff_role_ids: Sequence[int],
                 max_length: int = 1024, messages: Optional[Dict[str, str]] = None):
        self.store = store
        self.gateway = gateway
        self.staff_role_ids = list(staff_role_ids)
        self.max_length = max_length
        self.messages = merge_messages(DEFAULT_MESSAGES, messages)

    async def dispatch(self, action: Action, requester: Requester) -> Effect:
        """Run an action and turn any user-facing error into a private reply."""
        try:
            if isinstance(action, OpenForm):
                return self.request_form(action.anonymous)
            if isinstance(action, SubmitForm):
                return await self.submit_form(action.anonymous, action.text, requester)
            if isinstance(action, CastVote):
                return await self.cast_vote(action.direction, action.suggestion_id, requester.user_id)
            if isinstance(action, ViewResults):
                return await self.view_results(action.suggestion_id, requester.role_ids)
        except ValidationError as e:
            return PrivateReply(e.user_message)
        except ConfigurationError as e:
            logger.error(f"Configuration error while handling {action!r}: {e}")
            return PrivateReply(e.user_message)
        except SuggestionError as e:
            return PrivateReply(e.user_message)

        raise TypeError(f"Unsupported action: {action!r}")

    def request_form(self, anonymous: bool) -> ShowForm:
        """Build the submission form. The anonymity flag rides along in its custom ID."""
        return ShowForm(
            custom_id=SubmitForm(anonymous=anonymous).custom_id,
            title=self.messages["form_title"],
            fields=(FormField(FORM_TEXT_FIELD, self.messages["form_label"], self.max_length),),
        )

    async def submit_form(self, anonymous: bool, raw_text: str, submitter: Requester) -> PrivateReply:
        """
        Post a suggestion and attach voting controls to it.

        Args:
            anonymous: Hide the submitter's name on the posted suggestion
            raw_text: Text entered in the form
            submitter: The submitting user

        Returns:
            Private confirmation for the submitter

        Raises:
            ValidationError: If the text is empty after trimming
            ConfigurationError: If the suggestion could not be posted
        """
        text = sanitize_text(raw_text, max_length=self.max_length)
        if not text:
            raise ValidationError(user_message=self.messages["empty"])

        author_label = None
        if not anonymous:
            author_label = await self._submitter_name(submitter)

        post = SuggestionPost(text=text, author_label=author_label, submitted_at=datetime.now(timezone.utc))
        try:
            message_id = await self.gateway.post_suggestion(post)
        except ConfigurationError as e:
            raise ConfigurationError(str(e), user_message=self.messages["config_error"]) from e

        # Controls carry the message ID, so they can only be attached after posting
        outcome = await self.gateway.edit_controls(message_id, render_controls(self.store, message_id))
        if not outcome.ok:
            logger.warning(f"Suggestion {message_id} posted without voting controls: {outcome.error}")

        logger.info(
            f"New suggestion {message_id} from {submitter.user_id}"
            f"{' (anonymous)' if anonymous else ''}"
        )
        return PrivateReply(self.messages["submitted"])

    async def _submitter_name(self, submitter: Requester) -> str:
        name = pick_display_name(
            submitter.nickname,
            submitter.display_name,
            submitter.global_name,
            submitter.username,
        )
        if name is None:
            name = await self.gateway.resolve_display_name(submitter.user_id)
        return name or UNKNOWN_NAME

    async def cast_vote(self, direction: VoteDirection, suggestion_id: int, voter_id: int) -> Acknowledge:
        """Record a vote and refresh the counts on the suggestion message."""
        up_count, down_count = self.store.cast_vote(suggestion_id, voter_id, direction)

        outcome = await self.gateway.edit_controls(suggestion_id, render_controls(self.store, suggestion_id))
        if not outcome.ok:
            logger.warning(f"Could not edit message to update votes: {outcome.error}")
        else:
            logger.debug(f"Suggestion {suggestion_id} now at {up_count} up / {down_count} down")

        return Acknowledge()

    async def view_results(self, suggestion_id: int, requester_role_ids: Iterable[int],
                           staff_role_ids: Optional[Sequence[int]] = None) -> PrivateReply:
        """
        Disclose who voted which way, to staff only.

        Raises:
            AuthorizationError: If the requester holds none of the staff roles
        """
        if staff_role_ids is None:
            staff_role_ids = self.staff_role_ids
        if not is_authorized(requester_role_ids, staff_role_ids):
            raise AuthorizationError(user_message=self.messages["not_authorized"])

        record = self.store.get_record(suggestion_id)
        up_names = await self._resolve_names(sorted(record.up_voters))
        down_names = await self._resolve_names(sorted(record.down_voters))
        return PrivateReply(format_vote_results(up_names, down_names))

    async def _resolve_names(self, user_ids: List[int]) -> List[str]:
        results = await asyncio.gather(
            *(self.gateway.resolve_display_name(user_id) for user_id in user_ids),
            return_exceptions=True,
        )
        names = []
        for user_id, result in zip(user_ids, results):
            if isinstance(result, Exception):
                logger.debug(f"Could not resolve name for {user_id}: {result}")
                names.append(UNKNOWN_NAME)
            else:
                names.append(result or UNKNOWN_NAME)
        return names
