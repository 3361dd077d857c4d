"""Player display name to role lookup."""

import json
import logging
from pathlib import Path
from typing import Optional

from grid_scout.utils.role_normalizer import UNKNOWN_ROLE, normalize_role

logger = logging.getLogger(__name__)


class RoleLookup:
    """Resolve a player's role from their display name.

    Backed by a static table of player name -> role. Every name resolves to a
    canonical role or to UNKNOWN_ROLE; the lookup never raises.
    """

    def __init__(self, roles: Optional[dict[str, str]] = None):
        self._exact: dict[str, str] = {}
        self._folded: dict[str, str] = {}
        for name, role in (roles or {}).items():
            normalized = normalize_role(role)
            if normalized is None:
                continue
            self._exact[name] = normalized
            self._folded.setdefault(name.strip().lower(), normalized)

    @classmethod
    def from_file(cls, path: Path) -> "RoleLookup":
        """Load a player_roles.json table.

        Accepts either a flat ``{name: role}`` mapping or the
        ``{"players": {name: {"role": role}}}`` layout.
        """
        if not path.exists():
            logger.warning(f"Role table not found at {path}; every player resolves to unknown")
            return cls()

        with open(path) as f:
            data = json.load(f)

        entries = data.get("players", data)
        roles = {}
        for name, value in entries.items():
            role = value.get("role") if isinstance(value, dict) else value
            if isinstance(role, str):
                roles[name] = role
        logger.info(f"Loaded {len(roles)} player roles from {path}")
        return cls(roles)

    def role_for(self, player_name: str) -> str:
        """Get the canonical role for a player, or UNKNOWN_ROLE.

        Exact name match first, then case-insensitive.
        """
        role = self._exact.get(player_name)
        if role is None:
            role = self._folded.get(player_name.strip().lower())
        return role or UNKNOWN_ROLE

    def __len__(self) -> int:
        return len(self._exact)
