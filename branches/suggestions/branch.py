"""
Suggestions Branch Implementation
Handles suggestion submission, voting and the submission panel
"""

import dataclasses
import discord
from discord import app_commands
from discord.ext import commands
import logging

from utils import load_branch_config
from .actions import SubmitForm, ViewResults, decode, is_owned
from .errors import ConfigurationError
from .gateway import DiscordGateway
from .handlers import apply_effect, requester_from_interaction, send_generic_error, submitted_value
from .helpers import get_config_path
from .panel import PANEL_COLOR, PANEL_DESCRIPTION, PANEL_TITLE, PanelReconciler
from .router import DEFAULT_MESSAGES, FORM_TEXT_FIELD, SuggestionRouter
from .store import VoteStore
from .views import PanelView

logger = logging.getLogger(__name__)

HANDLED_INTERACTIONS = (discord.InteractionType.component, discord.InteractionType.modal_submit)


# Default configuration for this branch
DEFAULT_CONFIG = {
    "enabled": True,
    "version": "1.0.0",
    "settings": {
        "validation": {
            "max_length": 1024,
        },

        "panel": {
            "title": PANEL_TITLE,
            "description": PANEL_DESCRIPTION,
            "color": PANEL_COLOR,
            "history_limit": 20,
        },

        "ui": {
            "embed_colors": {
                "suggestion": 0x2B2D31,
            },
        },

        "messages": dict(DEFAULT_MESSAGES),
    }
}


class Suggestions(commands.Cog):
    """Handles suggestion submission and voting."""

    def __init__(self, bot, store: VoteStore = None):
        self.bot = bot
        settings = bot.settings

        # Load config
        self.config = self.load_config()
        branch_settings = self.config.get("settings", {})

        validation = branch_settings.get("validation", {})
        max_length = validation.get("max_length", 1024)

        self.panel_settings = branch_settings.get("panel", {})
        colors = branch_settings.get("ui", {}).get("embed_colors", {})

        self.gateway = DiscordGateway(
            bot,
            guild_id=settings.guild_id,
            form_channel_id=settings.form_channel_id,
            suggestions_channel_id=settings.suggestions_channel_id,
            suggestion_color=colors.get("suggestion", 0x2B2D31),
        )
        self.router = SuggestionRouter(
            store or VoteStore(),
            self.gateway,
            staff_role_ids=settings.staff_role_ids,
            max_length=max_length,
            messages=branch_settings.get("messages"),
        )
        self._panel_posted = False

        logger.info(
            f"Suggestions branch initialized (form: {settings.form_channel_id}, "
            f"suggestions: {settings.suggestions_channel_id}, staff roles: {settings.staff_role_ids})"
        )

    def load_config(self) -> dict:
        """Load config from config.yml in this branch's folder."""
        config_path = get_config_path()
        return load_branch_config(config_path, DEFAULT_CONFIG, "Suggestions")

    @commands.Cog.listener()
    async def on_ready(self):
        """Post the submission panel once per process."""
        if self._panel_posted:
            return
        self._panel_posted = True

        reconciler = PanelReconciler(
            self.gateway,
            bot_user_id=self.bot.user.id,
            title=self.panel_settings.get("title", PANEL_TITLE),
            description=self.panel_settings.get("description", PANEL_DESCRIPTION),
            color=self.panel_settings.get("color", PANEL_COLOR),
            history_limit=self.panel_settings.get("history_limit", 20),
        )
        try:
            await reconciler.reconcile()
        except ConfigurationError as e:
            logger.error(f"Failed to post panel: {e}")
        except discord.HTTPException as e:
            logger.error(f"Failed to post panel: {e}", exc_info=True)

    @commands.Cog.listener()
    async def on_interaction(self, interaction: discord.Interaction):
        """Handle panel clicks, form submissions and voting button clicks."""
        if interaction.type not in HANDLED_INTERACTIONS:
            return

        custom_id = (interaction.data or {}).get("custom_id", "")
        if not is_owned(custom_id):
            return

        try:
            try:
                action = decode(custom_id)
            except ValueError as e:
                logger.debug(f"Ignoring malformed custom_id: {e}")
                await interaction.response.defer()
                return

            if isinstance(action, SubmitForm):
                text = submitted_value(interaction.data, FORM_TEXT_FIELD)
                action = dataclasses.replace(action, text=text)

            requester = requester_from_interaction(interaction)
            if isinstance(action, ViewResults) and not requester.role_ids:
                role_ids = await self.gateway.fetch_member_roles(requester.user_id)
                requester = dataclasses.replace(requester, role_ids=frozenset(role_ids))

            effect = await self.router.dispatch(action, requester)
            await apply_effect(interaction, effect)

        except Exception as e:
            logger.error(f"Interaction error for {custom_id!r}: {e}", exc_info=True)
            await send_generic_error(interaction)

    @app_commands.command(name="feedback", description="Open the feedback form (not required if panel is present)")
    @app_commands.guild_only()
    async def feedback(self, interaction: discord.Interaction):
        """Show the submission buttons privately."""
        await interaction.response.send_message("Choose how to submit:", view=PanelView(), ephemeral=True)

    def cog_unload(self):
        """Called when the branch is unloaded."""
        logger.info("Suggestions branch unloaded")
