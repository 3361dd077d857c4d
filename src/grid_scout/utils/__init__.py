"""Utility modules for grid_scout."""

from grid_scout.utils.role_normalizer import (
    CANONICAL_ROLES,
    ROLE_ALIASES,
    ROLE_ORDER,
    UNKNOWN_ROLE,
    normalize_role,
)

__all__ = [
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "UNKNOWN_ROLE",
    "normalize_role",
]
