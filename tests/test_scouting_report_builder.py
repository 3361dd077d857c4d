"""Tests for cross-series scouting report aggregation."""

import pytest

from grid_scout.models.analytics import AnalyticsBundle
from grid_scout.repositories.analytics_repository import lol_repository
from grid_scout.repositories.document_store import InMemoryDocumentStore
from grid_scout.services.analytics_runner import AnalyticsRunner
from grid_scout.services.ban_phase_report import (
    TeamSequence,
    adaptive_picks,
    first_pick_availability,
    game_n_bans,
    pick_pairs,
    second_ban_phase_patterns,
    second_pick_availability,
)
from grid_scout.services.scouting_report_builder import ScoutingReportBuilder, SeriesAnalytics

from factories import TEAM_A, TEAM_B, ban_sequence, make_game, make_series, scouting_game


@pytest.fixture
def runner(tables):
    return AnalyticsRunner(lol_repository(InMemoryDocumentStore()), tables)


@pytest.fixture
def two_series(runner):
    """A wins s1 from a 1000 gold lead, then throws the same lead in s2."""
    won = runner.compute("s1", make_series(scouting_game("s1g1")))
    thrown = runner.compute("s2", make_series(scouting_game("s2g1", winner=TEAM_B)))
    return [
        SeriesAnalytics("s1", won, opponent="Team B", date="2025-03-01"),
        SeriesAnalytics("s2", thrown, opponent="Team B", date="2025-03-08"),
    ]


class TestScoutingReport:
    def test_header(self, two_series):
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series)
        assert report.team_name == "Team A"
        assert report.series_analyzed == 2
        assert report.generated_at

    def test_objective_sections(self, two_series):
        """Grub, recall and drake sections only count the scouted team."""
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series)
        assert report.adc_grub_stats.total_first_grubs == 2
        assert report.adc_grub_stats.adc_present_rate == 100.0
        assert report.support_grub_stats.recall_times == [242, 242]
        assert report.support_grub_stats.avg_recall_time_before_grub == 242
        assert report.drake_prio_stats.total_drakes == 2
        assert report.drake_prio_stats.times_had_prio == 2
        assert report.drake_prio_stats.prio_win_rate == 100.0
        assert report.drake_gold_holding_stats.total_drakes == 2
        assert report.drake_gold_holding_stats.avg_mid_gold_held == 1200
        assert report.drake_gold_holding_stats.avg_adc_gold_held == 800

    def test_adc_presence_counts_games_with_a_grub(self, runner):
        """A game without a grub kill does not dilute the presence rate."""
        bundle = runner.compute("s1", make_series(scouting_game(), make_game("g2")))
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", [SeriesAnalytics("s1", bundle)])
        assert report.adc_grub_stats.total_first_grubs == 1
        assert report.adc_grub_stats.grubs_with_adc_present == 1
        assert report.adc_grub_stats.adc_present_rate == 100.0

    def test_opponent_view(self, two_series):
        """B never took the first grub, and had no drake priority."""
        report = ScoutingReportBuilder.build(TEAM_B, "Team B", two_series)
        assert report.adc_grub_stats.total_first_grubs == 0
        assert report.adc_grub_stats.adc_present_rate == 0.0
        assert report.support_grub_stats.recall_times == [292, 292]
        assert report.drake_prio_stats.times_had_prio == 0

    def test_gold_sections(self, two_series):
        """Leads by role, comebacks and counter picks from A's side."""
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series)
        assert report.gold_lead_at_15_by_role.top.values == [1000, 1000]
        assert report.gold_lead_at_15_by_role.top.avg == 1000
        assert report.gold_lead_at_15_by_role.mid.avg == 0

        comeback = report.comeback_stats
        assert comeback.total_games == 2
        assert comeback.lead_hold_rate == 50.0
        assert comeback.comeback_rate == 0.0
        assert comeback.avg_lead_when_held == 1000

        top = report.counter_pick_stats.top_lane
        assert top.games_counter_picked == 2
        assert top.games_as_counter_pick == 0
        assert top.avg_worth_diff_when_counter_picked == 1000

    def test_class_win_rates(self, two_series):
        """Classes seen at least twice, per role."""
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series)
        top = report.class_win_rate_stats.top
        assert [(c.class_name, c.wins, c.games, c.win_rate) for c in top] == [("Fighter", 1, 2, 50.0)]
        assert report.class_win_rate_stats.support[0].class_name == "Tank"

    def test_ban_phase(self, two_series):
        """First pick ban tendencies across both series."""
        stats = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series).ban_phase_stats
        assert stats.total_games == 2
        assert (stats.first_pick_games, stats.second_pick_games) == (2, 0)
        assert [(r.champion, r.percentage) for r in stats.first_pick.ban1] == [("Rell", 100.0)]
        assert stats.bans_by_game.game1[0].count == 2
        assert stats.first_pick.first_picks[0].champion == "Aatrox"
        assert stats.first_pick.first_picks[0].percentage == 100.0

    def test_series_breakdown(self, two_series):
        """One breakdown per series with our actions marked."""
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series)
        first = report.series_breakdown[0]
        assert (first.series_id, first.opponent, first.date) == ("s1", "Team B", "2025-03-01")
        game = first.games[0]
        assert game.is_first_pick is True
        assert game.enemy_team_id == TEAM_B
        assert len(game.draft_actions) == 20
        assert game.draft_actions[0].is_our_team is True
        assert game.draft_actions[1].is_our_team is False

    def test_missing_analytics(self, two_series):
        """A series without analytics contributes no data but is still listed."""
        empty = SeriesAnalytics("s3", AnalyticsBundle(series_id="s3", generated_at=""))
        report = ScoutingReportBuilder.build(TEAM_A, "Team A", [empty])
        assert report.series_analyzed == 1
        assert report.counter_pick_stats is None
        assert report.comeback_stats is None
        assert report.ban_phase_stats is None
        assert report.series_breakdown[0].games == []

        mixed = ScoutingReportBuilder.build(TEAM_A, "Team A", two_series + [empty])
        assert mixed.adc_grub_stats.total_first_grubs == 2


class TestGameNBans:
    def test_rates_over_games_where_available(self):
        """A champion already picked in the series is not counted as available."""
        entries = [
            TeamSequence("s1", ban_sequence(2, our_bans=["Azir", "Vi", "Ahri"], unavailable=["Rell"])),
            TeamSequence("s2", ban_sequence(2, our_bans=["Rell", "Azir", "Gnar"])),
        ]
        rows = {r.champion: (r.count, r.available, r.percentage) for r in game_n_bans(entries)}
        assert rows["Rell"] == (1, 1, 100.0)
        assert rows["Azir"] == (2, 2, 100.0)
        assert rows["Vi"] == (1, 2, 50.0)

    def test_games_are_keyed_by_series_and_number(self):
        """Game 2 of two different series are two games; a repeat of one is not."""
        s1 = ban_sequence(2, our_bans=["Azir", "Vi", "Ahri"])
        entries = [
            TeamSequence("s1", s1),
            TeamSequence("s1", s1),
            TeamSequence("s2", ban_sequence(2, our_bans=["Rell", "Vi", "Gnar"])),
        ]
        rows = {r.champion: (r.count, r.available) for r in game_n_bans(entries)}
        assert rows["Vi"] == (2, 2)
        assert rows["Azir"] == (1, 2)


class TestPickTendencies:
    def test_second_ban_phase_patterns(self):
        """Picks seen before the second ban phase at least twice become triggers."""
        sequences = [
            ban_sequence(picks_before_second_ban=["Azir", "Vi"], second_phase_bans=["Kalista", "Lulu"]),
            ban_sequence(picks_before_second_ban=["Azir", "Ahri"], second_phase_bans=["Kalista", "Corki"]),
            ban_sequence(picks_before_second_ban=["Gnar"], second_phase_bans=["Poppy"]),
            ban_sequence(picks_before_second_ban=["Azir"], second_phase_bans=[]),
        ]
        patterns = second_ban_phase_patterns(sequences)
        assert len(patterns) == 1
        assert patterns[0].if_we_pick == "Azir"
        assert patterns[0].sample_size == 2
        assert [(r.champion, r.percentage) for r in patterns[0].we_ban] == [
            ("Kalista", 100.0),
            ("Lulu", 50.0),
            ("Corki", 50.0),
        ]

    def test_first_pick_rate_when_available(self):
        """Banned champions are not available to first pick."""
        sequences = [
            ban_sequence(our_bans=["Rell", "Rumble", "Jax"], our_first_picks=["Azir"]),
            ban_sequence(our_bans=["Rell", "Rumble", "Kalista"], enemy_bans=["Azir", "Corki", "Poppy"], our_first_picks=["Vi"]),
        ]
        rows = first_pick_availability(sequences)
        assert (rows["Azir"].available, rows["Azir"].chosen) == (1, 1)
        assert (rows["Vi"].available, rows["Vi"].chosen) == (2, 1)

    def test_second_pick_excludes_enemy_first_pick(self):
        """The enemy's first pick is not available to us."""
        sequences = [
            ban_sequence(
                is_first_pick=False,
                our_bans=["Rell", "Rumble", "Jax"],
                our_first_picks=["Vi", "Ahri"],
                enemy_first_pick="Azir",
            ),
            ban_sequence(
                is_first_pick=False,
                our_bans=["Rell", "Rumble", "Jax"],
                our_first_picks=["Azir", "Gnar"],
                enemy_first_pick="Vi",
            ),
        ]
        rows = second_pick_availability(sequences)
        assert (rows["Vi"].available, rows["Vi"].chosen) == (1, 1)
        assert (rows["Azir"].available, rows["Azir"].chosen) == (1, 1)
        assert (rows["Ahri"].available, rows["Ahri"].chosen) == (2, 1)

    def test_pick_pairs_ignore_order(self):
        sequences = [
            ban_sequence(is_first_pick=False, our_first_picks=["Vi", "Ahri"]),
            ban_sequence(is_first_pick=False, our_first_picks=["Ahri", "Vi"]),
            ban_sequence(is_first_pick=False, our_first_picks=["Gnar"]),
        ]
        pairs = pick_pairs(sequences)
        assert [(p.pair, p.count) for p in pairs] == [(["Ahri", "Vi"], 2)]
        assert pairs[0].percentage == pytest.approx(200 / 3)

    def test_adaptive_picks(self):
        """Answers to the same enemy first pick, with how often each was banned."""
        sequences = [
            ban_sequence(
                is_first_pick=False,
                our_first_picks=["Vi", "Rell"],
                enemy_first_pick="Azir",
                enemy_bans=["Gnar", "Corki", "Poppy"],
            ),
            ban_sequence(is_first_pick=False, our_first_picks=["Vi", "Gnar"], enemy_first_pick="Azir"),
            ban_sequence(is_first_pick=False, our_first_picks=["Vi", "Ahri"], enemy_first_pick="Orianna"),
        ]
        result = adaptive_picks(sequences)
        assert len(result) == 1
        assert (result[0].if_enemy_picks, result[0].sample_size) == ("Azir", 2)
        responses = {r.champion: (r.count, r.percentage, r.ban_rate) for r in result[0].then_we_pick}
        assert responses["Vi"] == (2, 100.0, 0.0)
        assert responses["Gnar"] == (1, 50.0, 50.0)
