"""
Suggestions Handlers
Turns interactions into requesters and router effects into interaction responses.
"""

import discord
from discord import Interaction
import logging

from .modals import SuggestionModal
from .router import Acknowledge, PrivateReply, Requester, ShowForm

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Sorry, something went wrong handling that action."


def requester_from_interaction(interaction: Interaction) -> Requester:
    """Capture the interaction user's ID, roles and name fields."""
    user = interaction.user
    role_ids = frozenset()
    nickname = None
    if isinstance(user, discord.Member):
        role_ids = frozenset(role.id for role in user.roles)
        nickname = user.nick

    return Requester(
        user_id=user.id,
        role_ids=role_ids,
        nickname=nickname,
        display_name=user.display_name,
        global_name=user.global_name,
        username=user.name,
    )


def submitted_value(data, custom_id: str) -> str:
    """
    Read a text input's value from a raw modal submit payload.

    Inputs arrive either inside action rows ("components") or inside
    label components ("component").
    """
    for row in (data or {}).get("components", []):
        children = row.get("components") or [row.get("component") or {}]
        for child in children:
            if child.get("custom_id") == custom_id:
                return child.get("value") or ""
    return ""


async def apply_effect(interaction: Interaction, effect) -> None:
    """
    Send the router's decided effect as the interaction response.

    Args:
        interaction: The interaction being answered
        effect: PrivateReply, ShowForm or Acknowledge
    """
    if isinstance(effect, PrivateReply):
        await interaction.response.send_message(effect.text, ephemeral=True)
    elif isinstance(effect, ShowForm):
        await interaction.response.send_modal(SuggestionModal(effect))
    elif isinstance(effect, Acknowledge):
        # Acknowledge without a visible reply
        await interaction.response.defer()
    else:
        raise TypeError(f"Unsupported effect: {effect!r}")


async def send_generic_error(interaction: Interaction) -> None:
    """Tell the user something went wrong, if the interaction can still be answered."""
    try:
        if interaction.response.is_done():
            await interaction.followup.send(GENERIC_ERROR, ephemeral=True)
        else:
            await interaction.response.send_message(GENERIC_ERROR, ephemeral=True)
    except discord.HTTPException as err:
        logger.error(f"Failed to send error response: {err}")
