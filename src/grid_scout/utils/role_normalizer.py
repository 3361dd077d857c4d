"""Role vocabulary shared by every per-role analytic.

The canonical format is lowercase: top, jungle, mid, bot, support. Players
whose role cannot be resolved are tagged with UNKNOWN_ROLE and skipped by
per-role statistics.
"""

from typing import Optional

CANONICAL_ROLES = frozenset({"top", "jungle", "mid", "bot", "support"})

UNKNOWN_ROLE = "unknown"

# Mapping from role spellings found in roster tables to canonical lowercase
ROLE_ALIASES: dict[str, str] = {
    # Top lane
    "top": "top",
    "top laner": "top",
    "toplane": "top",

    # Jungle
    "jungle": "jungle",
    "jungler": "jungle",
    "jng": "jungle",
    "jg": "jungle",

    # Mid lane
    "mid": "mid",
    "middle": "mid",
    "mid laner": "mid",
    "midlane": "mid",

    # Bottom-lane carry - all normalize to "bot"
    "bot": "bot",
    "adc": "bot",
    "bottom": "bot",
    "bot laner": "bot",
    "ad carry": "bot",
    "duo carry": "bot",
    "marksman": "bot",
    "carry": "bot",

    # Support
    "support": "support",
    "sup": "support",
    "supp": "support",
    "duo support": "support",
}

# Role ordering for consistent display/sorting
ROLE_ORDER = ["top", "jungle", "mid", "bot", "support"]


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to canonical lowercase format.

    Args:
        role: Role string in any known format (e.g., "JNG", "ADC", "Duo Carry")

    Returns:
        Normalized role string (top/jungle/mid/bot/support) or None if unrecognized

    Examples:
        >>> normalize_role("JNG")
        'jungle'
        >>> normalize_role("ADC")
        'bot'
        >>> normalize_role("coach") is None
        True
    """
    if role is None:
        return None
    return ROLE_ALIASES.get(role.strip().lower())
