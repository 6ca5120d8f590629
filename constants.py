"""
Global constants for Quorum.

Contains Discord API limits and other constant values used throughout
the bot and branches.
"""

# ============================================================================
# Discord API Limits
# ============================================================================

# Embed Limits (from Discord API documentation)
EMBED_TITLE_MAX = 256
EMBED_DESCRIPTION_MAX = 4096
EMBED_FOOTER_MAX = 2048

# Message Limits
MESSAGE_CONTENT_MAX = 2000

# Modal Limits
MODAL_TITLE_MAX = 45
MODAL_TEXT_INPUT_LABEL_MAX = 45
MODAL_TEXT_INPUT_VALUE_MAX = 4000

# ============================================================================
# Quorum Constants
# ============================================================================

# Branch Configuration
BRANCH_CONFIG_FILE = "config.yml"

# Logging
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# ============================================================================
# Helper Functions
# ============================================================================

def truncate_for_embed_description(text: str, suffix: str = "...") -> str:
    """
    Truncate text to fit in an embed description.

    Args:
        text: Text to truncate
        suffix: Suffix to add if truncated (default: "...")

    Returns:
        Truncated text that fits within EMBED_DESCRIPTION_MAX
    """
    if not text:
        return ""

    if len(text) <= EMBED_DESCRIPTION_MAX:
        return text

    return text[:EMBED_DESCRIPTION_MAX - len(suffix)] + suffix


def truncate_for_message(text: str, suffix: str = "...") -> str:
    """
    Truncate text to fit in a Discord message.

    Args:
        text: Text to truncate
        suffix: Suffix to add if truncated (default: "...")

    Returns:
        Truncated text that fits within MESSAGE_CONTENT_MAX
    """
    if not text:
        return ""

    if len(text) <= MESSAGE_CONTENT_MAX:
        return text

    return text[:MESSAGE_CONTENT_MAX - len(suffix)] + suffix
