"""
Suggestions Views
Discord UI components for the suggestions system.

Both views are purely visual. Clicks are handled by the Suggestions cog's
on_interaction listener, which decodes the custom ID of the pressed button.
"""

import discord
from discord import ui
from typing import Sequence

from .actions import CastVote, OpenForm
from .render import ControlDescriptor
from .store import VoteDirection

VOTE_BUTTON_STYLES = {
    VoteDirection.UP: discord.ButtonStyle.success,
    VoteDirection.DOWN: discord.ButtonStyle.danger,
}


class PanelView(ui.View):
    """Submission entry points shown on the panel and by /feedback."""

    def __init__(self):
        super().__init__(timeout=None)
        self.add_item(ui.Button(
            label="Submit (with name)",
            style=discord.ButtonStyle.primary,
            custom_id=OpenForm(anonymous=False).custom_id,
        ))
        self.add_item(ui.Button(
            label="Submit Anonymously",
            style=discord.ButtonStyle.secondary,
            custom_id=OpenForm(anonymous=True).custom_id,
        ))


class VoteView(ui.View):
    """Voting buttons for a posted suggestion, built from rendered controls."""

    def __init__(self, controls: Sequence[ControlDescriptor]):
        super().__init__(timeout=None)
        for control in controls:
            if isinstance(control.action, CastVote):
                style = VOTE_BUTTON_STYLES[control.action.direction]
            else:
                style = discord.ButtonStyle.secondary
            self.add_item(ui.Button(label=control.label, style=style, custom_id=control.action.custom_id))
