"""Champion class lookup utilities."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ChampionClass:
    """Class tags of a champion and whether its kit carries hard crowd control."""

    classes: list[str] = field(default_factory=list)
    has_hard_cc: bool = False


class ChampionClassLookup:
    """Lookup champion class tags from the static class table."""

    def __init__(self, table: Optional[dict[str, ChampionClass]] = None):
        self._table: dict[str, ChampionClass] = dict(table or {})

    @classmethod
    def from_dict(cls, data: dict) -> "ChampionClassLookup":
        """Build from ``{champion: {"class": [...], "hasHardCC": bool}}``."""
        return cls(
            {
                champion: ChampionClass(
                    classes=list(entry.get("class", [])),
                    has_hard_cc=bool(entry.get("hasHardCC", False)),
                )
                for champion, entry in data.items()
            }
        )

    @classmethod
    def from_file(cls, path: Path) -> "ChampionClassLookup":
        if not path.exists():
            logger.warning(f"Champion class table not found at {path}")
            return cls()
        with open(path) as f:
            data = json.load(f)
        lookup = cls.from_dict(data.get("champions", data))
        logger.info(f"Loaded {len(lookup)} champion classes from {path}")
        return lookup

    def get(self, champion_name: str) -> Optional[ChampionClass]:
        """Get the class entry for a champion, or None if the champion is not tabled."""
        return self._table.get(champion_name)

    def __len__(self) -> int:
        return len(self._table)
