"""
Suggestions Modals
Handles modal forms for the suggestions system.
"""

import discord
from discord import ui

from constants import MODAL_TEXT_INPUT_LABEL_MAX, MODAL_TEXT_INPUT_VALUE_MAX, MODAL_TITLE_MAX
from utils import truncate_text


class SuggestionModal(ui.Modal):
    """
    Suggestion form. Its custom ID carries the anonymity flag.

    Purely visual: submissions are handled by the cog's on_interaction listener
    from the submitted custom ID, so forms opened before a restart still work.
    """

    def __init__(self, form):
        super().__init__(title=truncate_text(form.title, MODAL_TITLE_MAX), custom_id=form.custom_id)

        self.inputs = {}
        for field in form.fields:
            text_input = ui.TextInput(
                label=truncate_text(field.label, MODAL_TEXT_INPUT_LABEL_MAX),
                custom_id=field.custom_id,
                style=discord.TextStyle.paragraph,
                max_length=min(field.max_length, MODAL_TEXT_INPUT_VALUE_MAX),
                required=field.required,
            )
            self.inputs[field.custom_id] = text_input
            self.add_item(text_input)
