from __future__ import annotations

from typing import Any

import pytest

from branches.suggestions.errors import ConfigurationError, Outcome, TransientRenderError
from branches.suggestions.gateway import ChannelMessage, SuggestionPost
from branches.suggestions.render import ControlDescriptor
from branches.suggestions.router import SuggestionRouter
from branches.suggestions.store import VoteStore

BOT_USER_ID = 999
STAFF_ROLE_ID = 4242


class FakeGateway:
    """In-memory stand-in for DiscordGateway."""

    def __init__(self, bot_user_id: int = BOT_USER_ID) -> None:
        self.bot_user_id = bot_user_id
        self.posts: dict[int, SuggestionPost] = {}
        self.controls: dict[int, list[ControlDescriptor]] = {}
        self.edit_calls: list[int] = []
        self.form_channel: list[ChannelMessage] = []
        self.pinned: set[int] = set()
        self.names: dict[int, Any] = {}
        self.roles: dict[int, set[int]] = {}

        self.fail_post = False
        self.fail_edit = False
        self.fail_pin = False
        self.fail_history = False
        self.undeletable: set[int] = set()

        self._next_id = 1000

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def post_suggestion(self, post: SuggestionPost) -> int:
        if self.fail_post:
            raise ConfigurationError("suggestions channel missing")
        message_id = self._new_id()
        self.posts[message_id] = post
        return message_id

    async def post_panel(self, title: str, description: str, color: int) -> int:
        message_id = self._new_id()
        self.form_channel.insert(0, ChannelMessage(message_id, self.bot_user_id, title))
        return message_id

    async def edit_controls(self, message_id: int, controls: Any) -> Outcome:
        self.edit_calls.append(message_id)
        if self.fail_edit:
            return Outcome.failure(TransientRenderError("message deleted"))
        self.controls[message_id] = list(controls)
        return Outcome.success()

    async def delete_message(self, message_id: int) -> Outcome:
        if message_id in self.undeletable:
            return Outcome.failure(TransientRenderError("missing permissions"))
        self.form_channel = [m for m in self.form_channel if m.message_id != message_id]
        return Outcome.success()

    async def pin_message(self, message_id: int) -> Outcome:
        if self.fail_pin:
            return Outcome.failure(TransientRenderError("too many pins"))
        self.pinned.add(message_id)
        return Outcome.success()

    async def list_recent_messages(self, limit: int) -> list[ChannelMessage]:
        if self.fail_history:
            raise TransientRenderError("history unavailable")
        return list(self.form_channel[:limit])

    async def fetch_member_roles(self, user_id: int) -> set[int]:
        return set(self.roles.get(user_id, set()))

    async def resolve_display_name(self, user_id: int) -> Any:
        name = self.names.get(user_id)
        if isinstance(name, Exception):
            raise name
        return name


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def store() -> VoteStore:
    return VoteStore()


@pytest.fixture
def router(store: VoteStore, gateway: FakeGateway) -> SuggestionRouter:
    return SuggestionRouter(store, gateway, staff_role_ids=[STAFF_ROLE_ID])
