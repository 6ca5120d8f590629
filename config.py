"""
Global configuration loader for Quorum.
Loads environment variables from .env file.
"""
from dotenv import load_dotenv
from dataclasses import dataclass
from typing import List
import os
import sys

load_dotenv()

# Role allowed to view voting results when STAFF_ROLE_IDS is not set
DEFAULT_STAFF_ROLE_IDS = "1356279578200637490"

PLACEHOLDER_TOKENS = ["your_bot_token_here", "your_token_here", "placeholder", ""]


def get_env(key: str, required: bool = True, default=None):
    """Safely get environment variable with validation."""
    value = os.getenv(key, default)
    if required and value is None:
        print(f"ERROR: Missing required environment variable: {key}")
        print(f"Please add {key} to your .env file")
        sys.exit(1)
    return value

def get_env_int(key: str, required: bool = True, default=None):
    """Get environment variable as integer."""
    value = get_env(key, required, default)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        print(f"ERROR: Environment variable {key} must be a valid integer, got: {value}")
        sys.exit(1)

def get_env_int_list(key: str, required: bool = True, default=None):
    """Get environment variable as list of integers."""
    value = get_env(key, required, default)
    if value is None:
        return []
    try:
        return [int(rid.strip()) for rid in value.split(",") if rid.strip()]
    except ValueError:
        print(f"ERROR: Environment variable {key} must be comma-separated integers, got: {value}")
        sys.exit(1)


@dataclass(frozen=True)
class Settings:
    """Bot settings read from the environment at startup."""
    discord_token: str
    app_id: int
    guild_id: int
    form_channel_id: int
    suggestions_channel_id: int
    staff_role_ids: List[int]


def load_settings() -> Settings:
    """
    Read and validate all settings. Exits the process if any are missing or invalid.

    Returns:
        Validated Settings
    """
    # Discord Bot Token (REQUIRED)
    discord_token = get_env("DISCORD_TOKEN")

    # Validate token is not a placeholder
    if discord_token.strip() in PLACEHOLDER_TOKENS:
        print("ERROR: DISCORD_TOKEN is still set to a placeholder value!")
        print("Please update your .env file with a real Discord bot token.")
        print("Get one from: https://discord.com/developers/applications")
        sys.exit(1)

    app_id = get_env_int("APP_ID")

    # Validate Application ID is not placeholder
    if app_id == 0:
        print("ERROR: APP_ID is still set to 0 (placeholder)!")
        print("Please update your .env file with your application ID.")
        sys.exit(1)

    guild_id = get_env_int("GUILD_ID")

    # Validate Guild ID is not placeholder
    if guild_id == 0:
        print("ERROR: GUILD_ID is still set to 0 (placeholder)!")
        print("Please update your .env file with your Discord server ID.")
        sys.exit(1)

    form_channel_id = get_env_int("FORM_CHANNEL_ID")
    suggestions_channel_id = get_env_int("SUGGESTIONS_CHANNEL_ID")
    staff_role_ids = get_env_int_list("STAFF_ROLE_IDS", required=False, default=DEFAULT_STAFF_ROLE_IDS)

    for name, channel_id in (("FORM_CHANNEL_ID", form_channel_id), ("SUGGESTIONS_CHANNEL_ID", suggestions_channel_id)):
        if not validate_channel_id(channel_id, name) or channel_id == 0:
            print(f"ERROR: {name} must be set to a real channel ID.")
            sys.exit(1)

    if not validate_role_ids(staff_role_ids, "STAFF_ROLE_IDS"):
        sys.exit(1)

    return Settings(
        discord_token=discord_token,
        app_id=app_id,
        guild_id=guild_id,
        form_channel_id=form_channel_id,
        suggestions_channel_id=suggestions_channel_id,
        staff_role_ids=staff_role_ids,
    )

# ============================================================================
# Configuration Validation Helpers
# ============================================================================

def validate_channel_id(channel_id: int, name: str = "channel_id") -> bool:
    """
    Validate a Discord channel ID.

    Args:
        channel_id: The channel ID to validate
        name: Name of the setting (for error messages)

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(channel_id, int):
        print(f"ERROR: {name} must be an integer, got {type(channel_id)}")
        return False

    if channel_id != 0 and (channel_id < 0 or channel_id > 2**63):
        print(f"ERROR: {name} must be a valid Discord ID (got {channel_id})")
        return False

    return True


def validate_role_ids(role_ids: list, name: str = "role_ids") -> bool:
    """
    Validate a list of Discord role IDs.

    Args:
        role_ids: List of role IDs to validate
        name: Name of the setting (for error messages)

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(role_ids, list):
        print(f"ERROR: {name} must be a list, got {type(role_ids)}")
        return False

    for i, role_id in enumerate(role_ids):
        if not isinstance(role_id, int):
            print(f"ERROR: {name}[{i}] must be an integer, got {type(role_id)}")
            return False

        if role_id != 0 and (role_id < 0 or role_id > 2**63):
            print(f"ERROR: {name}[{i}] must be a valid Discord ID (got {role_id})")
            return False

    return True
