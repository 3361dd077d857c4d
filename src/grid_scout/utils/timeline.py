"""Event and snapshot accessors.

Every helper assumes its input is sorted ascending by time, which holds for
converted series. Scans stop at the first entry past the requested time.
"""

from typing import Callable, Optional, TypeVar

from grid_scout.models.series import (
    Game,
    GameEvent,
    LevelUpEvent,
    MonsterKillEvent,
    Snapshot,
)

E = TypeVar("E")


def snapshot_at_or_before(snapshots: list[Snapshot], t: float) -> Optional[Snapshot]:
    """Return the last snapshot with time <= t, or None if every snapshot is later."""
    found = None
    for snapshot in snapshots:
        if snapshot.time > t:
            break
        found = snapshot
    return found


def first_event(events: list[GameEvent], predicate: Callable[[GameEvent], bool]) -> Optional[GameEvent]:
    """Return the first event satisfying predicate, or None."""
    for event in events:
        if predicate(event):
            return event
    return None


def events_of_type(events: list[GameEvent], event_type: type[E], player_id: Optional[str] = None) -> list[E]:
    """Events of one type, optionally restricted to a single acting player."""
    return [
        e
        for e in events
        if isinstance(e, event_type) and (player_id is None or e.player_id == player_id)
    ]


def is_first_tier_monster(prefix: Optional[str] = None, contains: Optional[str] = None):
    """Predicate for A-tier monster kills matched by name prefix or substring."""

    def predicate(event: GameEvent) -> bool:
        if not isinstance(event, MonsterKillEvent) or event.tier != "atier":
            return False
        if prefix is not None and not event.monster_name.startswith(prefix):
            return False
        if contains is not None and contains not in event.monster_name:
            return False
        return True

    return predicate


def level_at(level_ups: list[LevelUpEvent], t: float) -> tuple[int, float]:
    """Level reached by time t and when it was reached.

    A player is level 1 from time 0 until their first level-up.
    """
    level, level_up_time = 1, 0.0
    for event in level_ups:
        if event.time > t:
            break
        level, level_up_time = event.new_level, event.time
    return level, level_up_time


def worth_at(snapshots: list[Snapshot], player_id: str, t: float) -> float:
    """Accumulated worth of a player at time t (0 when unrecorded)."""
    snapshot = snapshot_at_or_before(snapshots, t)
    if snapshot is None:
        return 0
    state = snapshot.state_of(player_id)
    return state.worth if state else 0


def team_worth_at(game: Game, team_id: str, t: float) -> float:
    """Sum of the team's player worth at time t."""
    snapshot = snapshot_at_or_before(game.snapshots, t)
    if snapshot is None:
        return 0
    total = 0.0
    for player in game.players_of(team_id):
        state = snapshot.state_of(player.id)
        if state:
            total += state.worth
    return total
