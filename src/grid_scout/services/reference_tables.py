"""Static lookup tables handed to every extractor."""

from dataclasses import dataclass, field
from pathlib import Path

from grid_scout.models.series import GamePlayer
from grid_scout.utils.champion_classes import ChampionClassLookup
from grid_scout.utils.roles import RoleLookup


@dataclass
class ReferenceTables:
    """Role and champion-class tables, loaded once and passed explicitly."""

    roles: RoleLookup = field(default_factory=RoleLookup)
    champion_classes: ChampionClassLookup = field(default_factory=ChampionClassLookup)

    @classmethod
    def load(cls, knowledge_dir: Path) -> "ReferenceTables":
        return cls(
            roles=RoleLookup.from_file(knowledge_dir / "player_roles.json"),
            champion_classes=ChampionClassLookup.from_file(knowledge_dir / "champion_classes.json"),
        )

    def role_of(self, player: GamePlayer) -> str:
        return self.roles.role_for(player.name)

    def player_with_role(self, players: list[GamePlayer], role: str) -> GamePlayer | None:
        """First player in the list holding the role, or None."""
        for player in players:
            if self.role_of(player) == role:
                return player
        return None
