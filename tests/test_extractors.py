"""Tests for the per-match feature extractors."""

import pytest

from grid_scout.models.series import MonsterKillEvent, Snapshot
from grid_scout.services.extractors import (
    adc_joined_grubs,
    ban_phase_analysis,
    bot_lane_drake_prio,
    class_win_rate,
    comeback_stats,
    counter_pick_gold_diff,
    draft_analysis,
    drake_gold_holding,
    player_worth_at_15,
    support_grub_recall,
)
from grid_scout.services.extractors.adc_joined_grubs import is_in_grub_area
from grid_scout.services.extractors.bot_lane_drake_prio import determine_prio
from grid_scout.services.extractors.comeback_stats import classify_outcome

from factories import (
    A_CHAMPS,
    B_CHAMPS,
    TEAM_A,
    TEAM_B,
    even_worth,
    make_draft,
    make_game,
    make_series,
    scouting_game,
    state,
    worth_snapshot,
)


class TestAdcJoinedGrubs:
    def test_bot_laner_in_pit(self, tables):
        """A's bot laner stands in the pit when A takes the first grub."""
        data = adc_joined_grubs(make_series(scouting_game()), tables)
        assert data.total_first_grubs == 1
        assert data.grubs_with_adc_present == 1
        assert data.adc_present_rate == 100.0
        detail = data.grub_details[0]
        assert detail.killer_team_id == TEAM_A
        assert detail.adc_team_id == TEAM_A
        assert detail.adc_player_name == "A_bot"
        assert (detail.adc_x, detail.adc_y) == (4500, 9800)

    def test_bot_laner_elsewhere(self, tables):
        """The killing team's bot laner outside the pit counts as absent."""
        game = make_game(
            events=[MonsterKillEvent(time=480, player_id="b-jungle", monster_name="voidGrub", tier="atier")],
            snapshots=[Snapshot(time=470, player_states=[state("a-bot", 4500, 9800), state("b-bot", 9000, 3000)])],
        )
        data = adc_joined_grubs(make_series(game), tables)
        assert data.grub_details[0].adc_team_id == TEAM_B
        assert data.adc_present_rate == 0.0
        assert data.grubs_without_adc_present == 1

    def test_pit_bounds_are_inclusive(self):
        assert is_in_grub_area(3500, 8800)
        assert is_in_grub_area(5500, 10800)
        assert not is_in_grub_area(5501, 9000)

    def test_games_without_grub_or_snapshots(self, tables):
        """Returns None when no game has a grub kill and positions."""
        no_snapshots = make_game(
            events=[MonsterKillEvent(time=480, player_id="a-jungle", monster_name="voidGrub", tier="atier")]
        )
        assert adc_joined_grubs(make_series(no_snapshots, make_game("g2")), tables) is None


class TestSupportGrubRecall:
    def test_recall_times_per_side(self, tables):
        """Each support's last purchase before the grub, minus the recall channel."""
        data = support_grub_recall(make_series(scouting_game()), tables)
        detail = data.grub_details[0]
        assert detail.blue_team_id == TEAM_A
        assert detail.blue_support_recall_time == 242
        assert detail.red_support_recall_time == 292

    def test_support_without_purchase(self, tables):
        """No purchase before the grub means no recall time."""
        game = make_game(
            events=[MonsterKillEvent(time=480, player_id="a-jungle", monster_name="voidGrub", tier="atier")]
        )
        detail = support_grub_recall(make_series(game), tables).grub_details[0]
        assert detail.blue_support_recall_time is None
        assert detail.red_support_recall_time is None


class TestBotLaneDrakePrio:
    def test_prio_from_levels(self):
        """Higher level wins, then earlier level-up, else even."""
        assert determine_prio(7, 500, 6, 400) == "blue"
        assert determine_prio(6, 500, 6, 480) == "red"
        assert determine_prio(6, 480, 6, 480) == "even"

    @pytest.mark.parametrize(
        "levels",
        [(7, 500, 6, 400), (6, 500, 6, 480), (6, 480, 6, 480), (3, 100, 9, 900)],
    )
    def test_prio_is_symmetric(self, levels):
        """Swapping the sides swaps the answer."""
        swapped = {"blue": "red", "red": "blue", "even": "even"}
        blue_level, blue_time, red_level, red_time = levels
        assert determine_prio(red_level, red_time, blue_level, blue_time) == swapped[determine_prio(*levels)]

    def test_first_drake(self, tables):
        """A reached level 6 first and took the drake."""
        data = bot_lane_drake_prio(make_series(scouting_game()), tables)
        detail = data.drake_details[0]
        assert detail.drake_type == "cloudDrake"
        assert detail.team_with_prio == "blue"
        assert detail.prio_team_got_drake is True
        assert detail.blue_bot_level_at_drake == 6
        assert detail.blue_bot_last_level_up_time == 500
        assert data.drakes_when_had_prio == 1
        assert data.prio_win_rate == 100.0

    def test_counter_pick_teams(self, tables):
        """The side that picked the role later is the counter pick."""
        detail = bot_lane_drake_prio(make_series(scouting_game()), tables).drake_details[0]
        # A first pick: Ashe is pick 8, Varus pick 7, Leona pick 9, Nautilus pick 10
        assert detail.had_bot_counter_pick == "Team A"
        assert detail.had_support_counter_pick == "Team B"


class TestPlayerWorthAt15:
    def test_worth_and_roles(self, tables):
        """Worth at 15:00 with resolved roles and recall timers."""
        data = player_worth_at_15(make_series(scouting_game()), tables)
        players = {p.player_id: p for p in data.games[0].players}
        assert len(players) == 10
        assert players["a-top"].worth_at_15 == 6000
        assert players["a-top"].role == "top"
        assert players["a-support"].early_recall_timers == [242]
        assert players["b-mid"].early_recall_timers == []

    def test_short_games_are_excluded(self, tables):
        """Games shorter than 15 minutes produce nothing."""
        game = make_game(length=899, snapshots=[worth_snapshot(890, even_worth())])
        assert player_worth_at_15(make_series(game), tables) is None


class TestDrakeGoldHolding:
    def test_gold_held_at_each_drake(self, tables):
        """Mid and bot laners of both sides are reported per drake."""
        game = scouting_game()
        game.events.append(
            MonsterKillEvent(time=1500, player_id="b-jungle", monster_name="oceanDrake", tier="atier")
        )
        data = drake_gold_holding(make_series(game), tables)
        assert data.total_drakes == 2
        assert [d.drake_number for d in data.drake_details] == [1, 2]
        first = data.drake_details[0]
        held = {(p.team_id, p.role): p.holding_gold_when_drake_dies for p in first.players}
        assert held == {(TEAM_A, "mid"): 1200, (TEAM_A, "bot"): 800, (TEAM_B, "mid"): 300, (TEAM_B, "bot"): 100}
        assert data.drake_details[1].killer_team_id == TEAM_B


class TestComebackStats:
    def test_even_threshold(self):
        """A gap under 500 is even, 500 and above is a lead."""
        assert classify_outcome(499, True) == "even_at_15"
        assert classify_outcome(-499, False) == "even_at_15"
        assert classify_outcome(500, True) == "lead_held"
        assert classify_outcome(-500, False) == "comeback"

    def test_comeback(self, tables):
        """B was behind at 15 and won."""
        data = comeback_stats(make_series(scouting_game(winner=TEAM_B)), tables)
        game = data.games[0]
        assert game.outcome == "comeback"
        assert game.team_ahead_at_15_id == TEAM_A
        assert game.team_behind_at_15_id == TEAM_B
        assert game.lead_amount == 1000
        assert data.comeback_rate == 100.0
        assert data.avg_comeback_deficit == 1000

    def test_even_game_has_no_leader(self, tables):
        """An even game names neither side ahead."""
        data = comeback_stats(make_series(scouting_game(top_lead=499)), tables)
        game = data.games[0]
        assert game.outcome == "even_at_15"
        assert game.team_ahead_at_15_id is None
        assert game.team_behind_at_15_id is None
        assert game.lead_amount == 0
        assert data.total_even_at_15 == 1
        assert data.lead_hold_rate == 0.0

    def test_short_games_are_excluded(self, tables):
        game = make_game(length=600, snapshots=[worth_snapshot(590, even_worth())])
        assert comeback_stats(make_series(game), tables) is None


class TestCounterPickGoldDiff:
    def test_later_pick_is_counter_pick(self, tables):
        """B picked top and mid after A, so B counter picked both lanes."""
        data = counter_pick_gold_diff(make_series(scouting_game()), tables)
        top_counter = data.top_lane.counter_pick_games
        top_countered = data.top_lane.counter_picked_games
        assert [r.team_id for r in top_counter] == [TEAM_B]
        assert [r.team_id for r in top_countered] == [TEAM_A]
        assert top_countered[0].worth_diff == 1000
        assert top_counter[0].worth_diff == -1000
        assert data.top_lane.avg_worth_diff_when_counter_picking == -1000
        assert data.mid_lane.avg_worth_diff_when_counter_picked == 0

    def test_requires_draft(self, tables):
        game = make_game(snapshots=[worth_snapshot(900, even_worth())])
        assert counter_pick_gold_diff(make_series(game), tables) is None

    def test_short_games_are_excluded(self, tables):
        """A game that ends before 15 minutes has no gold diff at 15."""
        game = scouting_game()
        game.game_length = 899
        assert counter_pick_gold_diff(make_series(game), tables) is None


class TestDraftAnalysis:
    def test_draft_per_game(self, tables):
        """Draft order and per-side bans and picks for every drafted game."""
        series = make_series(scouting_game(), make_game("g2"), scouting_game("g3", first=TEAM_B))
        data = draft_analysis(series, tables)
        assert data.total_games == 2
        first, third = data.games
        assert (first.game_number, third.game_number) == (1, 3)
        assert first.first_pick_team_id == TEAM_A
        assert third.first_pick_team_id == TEAM_B
        assert first.blue_picks == A_CHAMPS
        assert first.red_bans == ["Kalista", "Corki", "Poppy", "Taliyah", "Yone"]
        assert len(first.drafting_actions) == 20


class TestBanPhaseAnalysis:
    def test_sequences_per_team(self, tables):
        """Each team's first ban phase and opening picks."""
        data = ban_phase_analysis(make_series(scouting_game()), tables)
        teams = {team.team_id: team for team in data.teams}

        a = teams[TEAM_A].ban_sequences[0]
        assert a.is_first_pick
        assert a.our_bans == ["Rell", "Azir", "Rumble"]
        assert a.enemy_bans == ["Kalista", "Corki", "Poppy"]
        assert a.our_first_picks == ["Aatrox"]
        assert a.enemy_first_pick is None
        assert a.our_picks_before_second_ban == ["Aatrox", "Vi", "Ahri"]
        assert a.our_second_phase_bans == ["Renekton", "Skarner"]

        b = teams[TEAM_B].ban_sequences[0]
        assert not b.is_first_pick
        assert b.our_first_picks == ["Gnar", "Sejuani"]
        assert b.enemy_first_pick == "Aatrox"

    def test_fearless_unavailable_champions(self, tables):
        """Everything picked in earlier games is unavailable later."""
        series = make_series(scouting_game(), scouting_game("g2", first=TEAM_B))
        a = ban_phase_analysis(series, tables).teams[0]
        assert a.ban_sequences[0].unavailable_champs == []
        assert sorted(a.ban_sequences[1].unavailable_champs) == sorted(A_CHAMPS + B_CHAMPS)
        assert a.ban_sequences[1].game_number == 2

    def test_incomplete_first_phase_is_skipped(self, tables):
        """A game with fewer than three bans per side yields no sequence."""
        draft = make_draft(TEAM_A, TEAM_B, ["Rell", "Azir", "Rumble"], ["Kalista", "Corki"], A_CHAMPS, B_CHAMPS)
        assert ban_phase_analysis(make_series(make_game(draft=draft)), tables) is None

    def test_priority_and_position_stats(self, tables):
        """First bans and priority bans are taken over the team's games."""
        series = make_series(scouting_game(), scouting_game("g2"))
        a = ban_phase_analysis(series, tables).teams[0]
        assert a.total_games == 2
        assert [(r.champion, r.percentage) for r in a.most_common_first_bans] == [("Rell", 100.0)]
        assert a.ban_position_stats.first_pick_ban2[0].champion == "Azir"
        assert a.ban_position_stats.second_pick_ban1 == []
        reaction = a.adaptive_ban_stats.reactions_to_enemy_first_ban[0]
        assert (reaction.if_enemy_bans, reaction.sample_size) == ("Kalista", 2)
        assert reaction.then_we_ban[0].champion == "Azir"


class TestClassWinRate:
    def test_records_for_class_roles(self, tables):
        """Top, jungle and support players with a class entry are recorded."""
        data = class_win_rate(make_series(scouting_game()), tables)
        assert len(data.games) == 6
        aatrox = next(r for r in data.games if r.champion_name == "Aatrox")
        assert aatrox.role == "top"
        assert aatrox.classes == ["Fighter"]
        assert aatrox.won is True
        assert aatrox.to_json_dict()["hasHardCC"] is True

    def test_unknown_champion_and_no_winner(self, tables):
        """Unclassed champions and games without a winner are skipped."""
        untabled = make_game(a_champs=["Teemo"] + A_CHAMPS[1:])
        no_winner = make_game("g2", winner=None)
        data = class_win_rate(make_series(untabled, no_winner), tables)
        assert len(data.games) == 5
        assert all(r.game_id == "g1" for r in data.games)
