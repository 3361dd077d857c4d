"""Tests for event and snapshot accessors."""

from grid_scout.models.series import KillEvent, LevelUpEvent, MonsterKillEvent, Snapshot
from grid_scout.utils.timeline import (
    events_of_type,
    first_event,
    is_first_tier_monster,
    level_at,
    snapshot_at_or_before,
    team_worth_at,
    worth_at,
)

from factories import TEAM_A, TEAM_B, even_worth, make_game, player_id, worth_snapshot


class TestSnapshotAtOrBefore:
    def test_returns_last_snapshot_not_after_time(self):
        """Should pick the latest snapshot at or before t."""
        snapshots = [Snapshot(time=t) for t in (60, 120, 180)]
        assert snapshot_at_or_before(snapshots, 150).time == 120

    def test_exact_time_matches(self):
        """A snapshot at exactly t counts."""
        snapshots = [Snapshot(time=t) for t in (60, 120, 180)]
        assert snapshot_at_or_before(snapshots, 180).time == 180

    def test_none_when_every_snapshot_is_later(self):
        """Should return None when nothing precedes t."""
        assert snapshot_at_or_before([Snapshot(time=100)], 50) is None
        assert snapshot_at_or_before([], 50) is None


class TestEventLookups:
    def test_first_tier_monster_by_prefix(self):
        """Only A-tier monsters whose name starts with the prefix match."""
        events = [
            MonsterKillEvent(time=300, player_id="a-jungle", monster_name="voidGrub", tier="btier"),
            MonsterKillEvent(time=320, player_id="a-jungle", monster_name="cloudDrake", tier="atier"),
            MonsterKillEvent(time=340, player_id="b-jungle", monster_name="voidGrub", tier="atier"),
        ]
        found = first_event(events, is_first_tier_monster(prefix="voidGrub"))
        assert found.time == 340

    def test_first_tier_monster_by_substring(self):
        """Drakes are matched anywhere in the monster name."""
        events = [MonsterKillEvent(time=400, player_id="a-jungle", monster_name="infernalDrake", tier="atier")]
        assert first_event(events, is_first_tier_monster(contains="Drake")) is events[0]

    def test_events_of_type_filters_player(self):
        """Should keep one event type and optionally one acting player."""
        events = [
            KillEvent(time=10, player_id="a-top", target_id="b-top"),
            KillEvent(time=20, player_id="b-mid", target_id="a-mid"),
            LevelUpEvent(time=30, player_id="a-top", new_level=2),
        ]
        assert len(events_of_type(events, KillEvent)) == 2
        assert [e.time for e in events_of_type(events, KillEvent, "a-top")] == [10]


class TestLevelAt:
    def test_level_one_before_any_level_up(self):
        """A player is level 1 at time 0."""
        assert level_at([], 500) == (1, 0.0)

    def test_latest_level_up_not_after_time(self):
        """Should return the level and when it was reached."""
        level_ups = [
            LevelUpEvent(time=100, player_id="a-bot", new_level=2),
            LevelUpEvent(time=200, player_id="a-bot", new_level=3),
            LevelUpEvent(time=400, player_id="a-bot", new_level=4),
        ]
        assert level_at(level_ups, 300) == (3, 200)


class TestWorth:
    def test_worth_of_unrecorded_player_is_zero(self):
        """Missing snapshot or player state reads as zero worth."""
        snapshots = [worth_snapshot(900, {"a-top": 5000})]
        assert worth_at(snapshots, "a-top", 900) == 5000
        assert worth_at(snapshots, "b-top", 900) == 0
        assert worth_at(snapshots, "a-top", 100) == 0

    def test_team_worth_sums_team_players(self):
        """Team worth is the sum over that team's players only."""
        worth = even_worth(1000)
        worth[player_id(TEAM_A, "mid")] = 3000
        game = make_game(snapshots=[worth_snapshot(900, worth)])
        assert team_worth_at(game, TEAM_A, 900) == 7000
        assert team_worth_at(game, TEAM_B, 900) == 5000
