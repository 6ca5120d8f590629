"""
Suggestions Gateway
The narrow platform interface used by the router and the panel reconciler,
plus its discord.py implementation.
"""

import discord
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Set

from constants import EMBED_FOOTER_MAX, EMBED_TITLE_MAX, truncate_for_embed_description
from utils import truncate_text
from .errors import ConfigurationError, Outcome, TransientRenderError
from .helpers import pick_display_name
from .render import ControlDescriptor
from .views import PanelView, VoteView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionPost:
    """A suggestion ready to be posted. Used once, then discarded."""
    text: str
    author_label: Optional[str]
    submitted_at: datetime

    @property
    def anonymous(self) -> bool:
        return self.author_label is None

    @property
    def footer(self) -> str:
        if self.anonymous:
            return "Submitted anonymously"
        return f"Submitted by {self.author_label}"


@dataclass(frozen=True)
class ChannelMessage:
    message_id: int
    author_id: int
    title: Optional[str]


class SuggestionGateway(Protocol):
    async def post_suggestion(self, post: SuggestionPost) -> int: ...

    async def post_panel(self, title: str, description: str, color: int) -> int: ...

    async def edit_controls(self, message_id: int, controls: Sequence[ControlDescriptor]) -> Outcome: ...

    async def delete_message(self, message_id: int) -> Outcome: ...

    async def pin_message(self, message_id: int) -> Outcome: ...

    async def list_recent_messages(self, limit: int) -> List[ChannelMessage]: ...

    async def fetch_member_roles(self, user_id: int) -> Set[int]: ...

    async def resolve_display_name(self, user_id: int) -> Optional[str]: ...


class DiscordGateway:
    """SuggestionGateway backed by a discord.py client for one guild."""

    def __init__(self, bot, guild_id: int, form_channel_id: int, suggestions_channel_id: int,
                 suggestion_color: int = 0x2B2D31):
        self.bot = bot
        self.guild_id = guild_id
        self.form_channel_id = form_channel_id
        self.suggestions_channel_id = suggestions_channel_id
        self.suggestion_color = suggestion_color

    async def _get_channel(self, channel_id: int, name: str):
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self.bot.fetch_channel(channel_id)
            except (discord.HTTPException, discord.InvalidData) as e:
                raise ConfigurationError(f"{name} {channel_id} is not accessible: {e}") from e
        return channel

    async def _form_channel(self) -> discord.TextChannel:
        channel = await self._get_channel(self.form_channel_id, "FORM_CHANNEL_ID")
        if not isinstance(channel, discord.TextChannel):
            raise ConfigurationError("FORM_CHANNEL_ID must be a text channel.")
        return channel

    async def _suggestions_channel(self) -> discord.abc.Messageable:
        channel = await self._get_channel(self.suggestions_channel_id, "SUGGESTIONS_CHANNEL_ID")
        if not isinstance(channel, discord.abc.Messageable):
            raise ConfigurationError("SUGGESTIONS_CHANNEL_ID must be a text-based channel.")
        return channel

    async def _get_member(self, user_id: int) -> Optional[discord.Member]:
        guild = self.bot.get_guild(self.guild_id)
        if guild is None:
            return None
        member = guild.get_member(user_id)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(user_id)
        except (discord.NotFound, discord.Forbidden):
            return None

    async def post_suggestion(self, post: SuggestionPost) -> int:
        channel = await self._suggestions_channel()

        embed = discord.Embed(
            title="New Suggestion",
            description=truncate_for_embed_description(post.text),
            color=self.suggestion_color,
            timestamp=post.submitted_at,
        )
        embed.set_footer(text=truncate_text(post.footer, EMBED_FOOTER_MAX))

        try:
            message = await channel.send(embed=embed)
        except discord.HTTPException as e:
            raise ConfigurationError(f"Could not post to suggestions channel: {e}") from e
        return message.id

    async def post_panel(self, title: str, description: str, color: int) -> int:
        channel = await self._form_channel()
        embed = discord.Embed(
            title=truncate_text(title, EMBED_TITLE_MAX),
            description=truncate_for_embed_description(description),
            color=color,
        )
        try:
            message = await channel.send(embed=embed, view=PanelView())
        except discord.HTTPException as e:
            raise ConfigurationError(f"Could not post panel to #{channel.name}: {e}") from e
        logger.info(f"Suggestion panel posted in #{channel.name} ({channel.id})")
        return message.id

    async def edit_controls(self, message_id: int, controls: Sequence[ControlDescriptor]) -> Outcome:
        try:
            channel = await self._suggestions_channel()
            await channel.get_partial_message(message_id).edit(view=VoteView(controls))
        except (discord.HTTPException, ConfigurationError) as e:
            return Outcome.failure(TransientRenderError(f"Could not update controls on {message_id}: {e}"))
        return Outcome.success()

    async def delete_message(self, message_id: int) -> Outcome:
        try:
            channel = await self._form_channel()
            await channel.get_partial_message(message_id).delete()
        except (discord.HTTPException, ConfigurationError) as e:
            return Outcome.failure(TransientRenderError(f"Could not delete message {message_id}: {e}"))
        return Outcome.success()

    async def pin_message(self, message_id: int) -> Outcome:
        try:
            channel = await self._form_channel()
            await channel.get_partial_message(message_id).pin()
        except (discord.HTTPException, ConfigurationError) as e:
            return Outcome.failure(TransientRenderError(f"Could not pin message {message_id}: {e}"))
        return Outcome.success()

    async def list_recent_messages(self, limit: int) -> List[ChannelMessage]:
        try:
            channel = await self._form_channel()
            messages = [message async for message in channel.history(limit=limit)]
        except (discord.HTTPException, ConfigurationError) as e:
            raise TransientRenderError(f"Could not read recent form channel messages: {e}") from e

        return [
            ChannelMessage(
                message_id=message.id,
                author_id=message.author.id,
                title=message.embeds[0].title if message.embeds else None,
            )
            for message in messages
        ]

    async def fetch_member_roles(self, user_id: int) -> Set[int]:
        member = await self._get_member(user_id)
        if member is None:
            return set()
        return {role.id for role in member.roles}

    async def resolve_display_name(self, user_id: int) -> Optional[str]:
        member = await self._get_member(user_id)
        if member is None:
            return None
        return pick_display_name(member.nick, member.display_name, member.global_name, member.name)
