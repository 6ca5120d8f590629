"""
Suggestions Panel
Keeps a single "Submit a Suggestion" panel in the form channel.
"""

import logging

from .errors import TransientRenderError
from .gateway import SuggestionGateway

logger = logging.getLogger(__name__)

PANEL_TITLE = "Submit a Suggestion"
PANEL_DESCRIPTION = (
    "Click a button to open the form.\n\n"
    "• **Submit (with name)** posts your Discord name with the suggestion.\n"
    "• **Submit Anonymously** hides your identity in the posted message."
)
PANEL_COLOR = 0x5865F2


class PanelReconciler:
    """Deletes earlier panels posted by the bot, then posts and pins a fresh one."""

    def __init__(self, gateway: SuggestionGateway, bot_user_id: int, title: str = PANEL_TITLE,
                 description: str = PANEL_DESCRIPTION, color: int = PANEL_COLOR, history_limit: int = 20):
        self.gateway = gateway
        self.bot_user_id = bot_user_id
        self.title = title
        self.description = description
        self.color = color
        self.history_limit = history_limit

    async def reconcile(self) -> int:
        """
        Replace any recent panels with a single new one.

        Only the last `history_limit` messages are checked for old panels.

        Returns:
            Message ID of the new panel

        Raises:
            ConfigurationError: If the form channel is missing or the panel cannot be posted
        """
        removed = await self._remove_stale_panels()
        if removed:
            logger.info(f"Removed {removed} old panel message(s)")

        message_id = await self.gateway.post_panel(self.title, self.description, self.color)

        outcome = await self.gateway.pin_message(message_id)
        if not outcome.ok:
            logger.warning(f"Could not pin panel {message_id}: {outcome.error}")

        return message_id

    async def _remove_stale_panels(self) -> int:
        try:
            recent = await self.gateway.list_recent_messages(self.history_limit)
        except TransientRenderError as e:
            logger.warning(f"Skipping old panel cleanup: {e}")
            return 0

        removed = 0
        for message in recent:
            if message.author_id != self.bot_user_id or message.title != self.title:
                continue
            outcome = await self.gateway.delete_message(message.message_id)
            if outcome.ok:
                removed += 1
            else:
                logger.warning(f"Failed to delete old panel {message.message_id}: {outcome.error}")
        return removed
