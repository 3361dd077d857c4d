"""League of Legends series models.

Parsed from the converted-series JSON document (camelCase keys). Event logs
and snapshot lists are kept in the order they arrive, which is ascending by
game time.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union


class TwoTeamInvariantError(ValueError):
    """A series did not have exactly two distinct teams."""


@dataclass
class RosterPlayer:
    """A player listed on a team roster."""

    id: str
    name: str


@dataclass
class Team:
    """One of the two teams in a series."""

    id: str
    name: str
    players: list[RosterPlayer] = field(default_factory=list)


@dataclass
class GamePlayer:
    """A player as they appeared in one game."""

    id: str
    name: str
    champion: str
    team_id: str


@dataclass
class DraftAction:
    """A single ban or pick submitted during champion select."""

    team_id: str
    champion: str
    action: Literal["ban", "pick"]


@dataclass
class PurchaseItemEvent:
    time: float
    player_id: str
    item_name: str


@dataclass
class ItemEvent:
    """Item acquired, lost or sold (not used for recall inference)."""

    time: float
    player_id: str
    item_name: str
    kind: str  # "acquire-item" | "lost-item" | "sold-item"


@dataclass
class LevelUpEvent:
    time: float
    player_id: str
    new_level: int


@dataclass
class MonsterKillEvent:
    time: float
    player_id: str
    monster_name: str
    tier: Literal["atier", "btier", "stier"]


@dataclass
class KillEvent:
    time: float
    player_id: str
    target_id: str
    assist_player_ids: list[str] = field(default_factory=list)


@dataclass
class StructureKillEvent:
    time: float
    player_id: str
    structure: Literal["tower", "inhibitor"]
    structure_name: str


GameEvent = Union[
    PurchaseItemEvent,
    ItemEvent,
    LevelUpEvent,
    MonsterKillEvent,
    KillEvent,
    StructureKillEvent,
]


@dataclass
class PlayerState:
    """Per-player entry of a periodic snapshot."""

    player_id: str
    x: float
    y: float
    gold: float  # currently held
    worth: float  # accumulated


@dataclass
class Snapshot:
    """Periodic recording of every player's position and economy."""

    time: float
    player_states: list[PlayerState] = field(default_factory=list)

    def state_of(self, player_id: str) -> Optional[PlayerState]:
        for state in self.player_states:
            if state.player_id == player_id:
                return state
        return None


@dataclass
class Game:
    """A single game within a series."""

    id: str
    blue_side_team_id: str
    winner_team_id: Optional[str]
    game_length: float  # seconds
    start_time: str = ""
    players: list[GamePlayer] = field(default_factory=list)
    draft_actions: list[DraftAction] = field(default_factory=list)
    events: list[GameEvent] = field(default_factory=list)
    snapshots: list[Snapshot] = field(default_factory=list)

    def player(self, player_id: str) -> Optional[GamePlayer]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def players_of(self, team_id: str) -> list[GamePlayer]:
        return [p for p in self.players if p.team_id == team_id]

    @property
    def picks(self) -> list[DraftAction]:
        """Pick actions in submission order."""
        return [a for a in self.draft_actions if a.action == "pick"]

    @property
    def bans(self) -> list[DraftAction]:
        """Ban actions in submission order."""
        return [a for a in self.draft_actions if a.action == "ban"]

    @property
    def first_pick_team_id(self) -> Optional[str]:
        """Team that submitted the first draft action."""
        if not self.draft_actions:
            return None
        return self.draft_actions[0].team_id


@dataclass
class Series:
    """A best-of-N match between exactly two teams."""

    teams: list[Team]
    games: list[Game] = field(default_factory=list)

    def require_two_teams(self) -> None:
        """Raise TwoTeamInvariantError unless the series has two distinct teams."""
        team_ids = {team.id for team in self.teams}
        if len(self.teams) != 2 or len(team_ids) != 2:
            raise TwoTeamInvariantError(
                f"Expected exactly two teams, got {[team.id for team in self.teams]}"
            )

    def team(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def team_name(self, team_id: Optional[str]) -> str:
        team = self.team(team_id) if team_id else None
        return team.name if team else "Unknown"

    def opponent_of(self, team_id: str) -> Team:
        """Return the other team of the series.

        Raises:
            TwoTeamInvariantError: If the series is malformed or team_id is not
                one of its two teams.
        """
        self.require_two_teams()
        if self.team(team_id) is None:
            raise TwoTeamInvariantError(f"Team {team_id} is not part of this series")
        return next(team for team in self.teams if team.id != team_id)

    @classmethod
    def from_dict(cls, data: dict) -> "Series":
        """Parse a converted-series document."""
        return cls(
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
            games=[_parse_game(g) for g in data.get("games", [])],
        )


_MONSTER_TIERS = {
    "kill-atier-monster": "atier",
    "kill-btier-monster": "btier",
    "kill-stier-monster": "stier",
}


def parse_event(raw: dict) -> Optional[GameEvent]:
    """Parse one event record, returning None for unknown event types."""
    event_type = raw.get("type")
    time = float(raw.get("time", 0))
    player_id = str(raw.get("playerId", ""))

    if event_type == "purchase-item":
        return PurchaseItemEvent(time=time, player_id=player_id, item_name=raw.get("itemName", ""))
    if event_type in ("acquire-item", "lost-item", "sold-item"):
        return ItemEvent(
            time=time, player_id=player_id, item_name=raw.get("itemName", ""), kind=event_type
        )
    if event_type == "level-up":
        return LevelUpEvent(time=time, player_id=player_id, new_level=int(raw.get("newLevel", 1)))
    if event_type in _MONSTER_TIERS:
        return MonsterKillEvent(
            time=time,
            player_id=player_id,
            monster_name=raw.get("monsterName", ""),
            tier=_MONSTER_TIERS[event_type],
        )
    if event_type == "kill":
        return KillEvent(
            time=time,
            player_id=player_id,
            target_id=str(raw.get("targetId", "")),
            assist_player_ids=[str(p) for p in raw.get("assistPlayerIds", [])],
        )
    if event_type == "destroy-tower":
        return StructureKillEvent(
            time=time, player_id=player_id, structure="tower", structure_name=raw.get("towerName", "")
        )
    if event_type == "destroy-inhibitor":
        return StructureKillEvent(
            time=time,
            player_id=player_id,
            structure="inhibitor",
            structure_name=raw.get("inhibitorName", ""),
        )
    return None


def _parse_game(data: dict) -> Game:
    events = [parse_event(e) for e in data.get("events", [])]
    return Game(
        id=str(data["id"]),
        blue_side_team_id=str(data.get("blueSideTeamId", "")),
        winner_team_id=str(data["winnerTeamId"]) if data.get("winnerTeamId") is not None else None,
        game_length=float(data.get("gameLength", 0)),
        start_time=data.get("startTime", ""),
        players=[
            GamePlayer(
                id=str(p["id"]),
                name=p.get("name", ""),
                champion=p.get("champName", ""),
                team_id=str(p.get("teamId", "")),
            )
            for p in data.get("players", [])
        ],
        draft_actions=[
            DraftAction(team_id=str(a["teamId"]), champion=a["champName"], action=a["action"])
            for a in data.get("draftingActions", [])
        ],
        events=[e for e in events if e is not None],
        snapshots=[
            Snapshot(
                time=float(s["time"]),
                player_states=[
                    PlayerState(
                        player_id=str(c["playerId"]),
                        x=float(c.get("x", 0)),
                        y=float(c.get("y", 0)),
                        gold=float(c.get("gold", 0)),
                        worth=float(c.get("worth", 0)),
                    )
                    for c in s.get("playerCoordinates", [])
                ],
            )
            for s in data.get("coordinateTracking", [])
        ],
    )
