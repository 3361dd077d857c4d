"""Valorant series models.

Parsed from the converted Valorant series JSON document. The map veto is
kept in submission order.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional

from grid_scout.models.series import RosterPlayer, Team, TwoTeamInvariantError


@dataclass
class MapVetoAction:
    """One ban, pick or decider step of the map veto."""

    sequence_number: int
    action: Literal["ban", "pick", "decider"]
    map_id: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None


@dataclass
class ValorantPlayer:
    """A player as they appeared on one map."""

    id: str
    name: str
    team_id: str
    agent_id: str
    agent_name: str


@dataclass
class ValorantGame:
    game_number: int
    map_id: str
    winner_team_id: Optional[str] = None
    players: list[ValorantPlayer] = field(default_factory=list)

    def players_of(self, team_id: str) -> list[ValorantPlayer]:
        return [p for p in self.players if p.team_id == team_id]


@dataclass
class ValorantSeries:
    series_id: str
    teams: list[Team]
    map_veto: list[MapVetoAction] = field(default_factory=list)
    games: list[ValorantGame] = field(default_factory=list)

    def require_two_teams(self) -> None:
        """Raise TwoTeamInvariantError unless the series has two distinct teams."""
        if len(self.teams) != 2 or len({team.id for team in self.teams}) != 2:
            raise TwoTeamInvariantError(
                f"Expected exactly two teams, got {[team.id for team in self.teams]}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "ValorantSeries":
        """Parse a converted Valorant series document."""
        return cls(
            series_id=str(data.get("seriesId", "")),
            teams=[
                Team(
                    id=str(t["id"]),
                    name=t.get("name", ""),
                    players=[
                        RosterPlayer(id=str(p["id"]), name=p.get("name", ""))
                        for p in t.get("players", [])
                    ],
                )
                for t in data.get("teams", [])
            ],
            map_veto=[
                MapVetoAction(
                    sequence_number=int(v.get("sequenceNumber", index)),
                    action=v["action"],
                    map_id=v["mapId"],
                    team_id=str(v["teamId"]) if v.get("teamId") is not None else None,
                    team_name=v.get("teamName"),
                )
                for index, v in enumerate(data.get("mapVeto", []), 1)
            ],
            games=[
                ValorantGame(
                    game_number=int(g.get("gameNumber", index)),
                    map_id=g.get("mapId", ""),
                    winner_team_id=str(g["winnerTeamId"]) if g.get("winnerTeamId") is not None else None,
                    players=[
                        ValorantPlayer(
                            id=str(p["id"]),
                            name=p.get("name", ""),
                            team_id=str(p.get("teamId", "")),
                            agent_id=p.get("characterId", ""),
                            agent_name=p.get("characterName") or format_name(p.get("characterId", "")),
                        )
                        for p in g.get("players", [])
                    ],
                )
                for index, g in enumerate(data.get("games", []), 1)
            ],
        )


def format_name(identifier: str) -> str:
    """Display name for a lowercase map or agent id ("ascent" -> "Ascent")."""
    return identifier[:1].upper() + identifier[1:]
