"""
Suggestions Branch
Anonymous or named suggestions with up/down voting and staff-only results.

Structure:
- branch.py: Main Suggestions cog, interaction listener and /feedback command
- store.py: VoteStore (in-memory voter sets per suggestion)
- render.py: render_controls (button labels with counts)
- actions.py: Structured actions encoded in component custom IDs
- router.py: SuggestionRouter (decides the effect for each action)
- panel.py: PanelReconciler (keeps one submission panel in the form channel)
- gateway.py: SuggestionGateway interface and its discord.py implementation
- views.py / modals.py / handlers.py: Discord UI components and response glue
- helpers.py: Utility functions and config loading
"""

from .branch import Suggestions
from .store import VoteStore

__all__ = ['Suggestions', 'VoteStore', 'setup']

async def setup(bot):
    """Load the Suggestions branch."""
    await bot.add_cog(Suggestions(bot))
