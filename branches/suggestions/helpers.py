"""
Suggestions Helper Functions
Shared utility functions for the suggestions system.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Iterable, List, Optional
from constants import BRANCH_CONFIG_FILE, MESSAGE_CONTENT_MAX, truncate_for_message

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """Get the config path for this branch."""
    return Path(__file__).parent / BRANCH_CONFIG_FILE


def is_authorized(requester_role_ids: Iterable[int], staff_role_ids: Iterable[int]) -> bool:
    """
    Check whether a requester holds at least one staff role.

    Args:
        requester_role_ids: Role IDs held by the requesting member
        staff_role_ids: Configured staff role IDs

    Returns:
        True if the two collections share any role ID
    """
    return not set(requester_role_ids).isdisjoint(staff_role_ids)


def pick_display_name(*candidates: Optional[str]) -> Optional[str]:
    """Return the first non-empty name, in order of preference."""
    for name in candidates:
        if name and name.strip():
            return name
    return None


def format_vote_results(up_names: List[str], down_names: List[str]) -> str:
    """Format the upvote/downvote name lists for the staff results reply."""
    def bullets(names):
        return "\n".join(f"• {name}" for name in names) if names else "• None"

    summary = "\n".join([
        f"👍 Upvotes ({len(up_names)}):",
        bullets(up_names),
        "",
        f"👎 Downvotes ({len(down_names)}):",
        bullets(down_names),
    ])
    if len(summary) > MESSAGE_CONTENT_MAX:
        summary = truncate_for_message(summary, "…")
    return summary


def merge_messages(defaults: Dict[str, str], overrides: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Overlay configured user-facing messages on top of the defaults."""
    merged = dict(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, str) and value:
            merged[key] = value
    return merged
