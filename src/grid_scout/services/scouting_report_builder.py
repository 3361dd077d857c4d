"""Cross-series aggregation of per-series analytics into a scouting report.

Each section reads one analytic from every bundle, keeps only the rows
about the scouted team and aggregates them. A series without that analytic
contributes nothing; a section stays None when no series carried it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from grid_scout.models.analytics import (
    AdcJoinedGrubsResult,
    AnalyticsBundle,
    BanPhaseAnalysisResult,
    BotLaneDrakePrioResult,
    ClassWinRateResult,
    ComebackStatsResult,
    CounterPickGoldDiffResult,
    DraftAnalysisResult,
    DrakeGoldHoldingResult,
    LaneCounterPickData,
    PlayerWorthAt15Result,
    R,
    SupportGrubRecallResult,
)
from grid_scout.models.report import (
    AdcGrubStats,
    BanPhaseStats,
    BreakdownDraftAction,
    BreakdownGame,
    ClassWinRate,
    ClassWinRateStats,
    ComebackSummary,
    CounterPickStats,
    DrakeGoldHoldingStats,
    DrakePrioStats,
    GoldLeadByRole,
    LaneCounterPickStats,
    RoleGoldLead,
    ScoutingReport,
    SeriesBreakdown,
    SupportGrubStats,
)
from grid_scout.services.analytics_runner import utc_timestamp
from grid_scout.services.ban_phase_report import BanPhaseInput, build_ban_phase_stats
from grid_scout.services.frequency import MIN_CONDITIONAL_SAMPLES, average, percentage
from grid_scout.utils.role_normalizer import ROLE_ORDER

logger = logging.getLogger(__name__)

CLASS_ROLES = ("top", "jungle", "support")


@dataclass
class SeriesAnalytics:
    """One analysed series as seen from the scouted team."""

    series_id: str
    bundle: AnalyticsBundle
    opponent: str = ""
    date: str = ""


class ScoutingReportBuilder:
    """Builds a ScoutingReport for one team from many analytics bundles."""

    def __init__(self, team_id: str, team_name: str):
        self.team_id = team_id
        self.team_name = team_name

    @classmethod
    def build(cls, team_id: str, team_name: str, inputs: list[SeriesAnalytics]) -> ScoutingReport:
        return cls(team_id, team_name).aggregate(inputs)

    def aggregate(self, inputs: list[SeriesAnalytics]) -> ScoutingReport:
        logger.info(f"Building scouting report for {self.team_name} from {len(inputs)} series")
        return ScoutingReport(
            team_id=self.team_id,
            team_name=self.team_name,
            series_analyzed=len(inputs),
            generated_at=utc_timestamp(),
            counter_pick_stats=self._counter_pick_stats(inputs),
            drake_prio_stats=self._drake_prio_stats(inputs),
            support_grub_stats=self._support_grub_stats(inputs),
            adc_grub_stats=self._adc_grub_stats(inputs),
            gold_lead_at_15_by_role=self._gold_lead_by_role(inputs),
            drake_gold_holding_stats=self._drake_gold_holding_stats(inputs),
            comeback_stats=self._comeback_stats(inputs),
            class_win_rate_stats=self._class_win_rate_stats(inputs),
            ban_phase_stats=self._ban_phase_stats(inputs),
            series_breakdown=[self._series_breakdown(item) for item in inputs],
        )

    @staticmethod
    def _collect(inputs: list[SeriesAnalytics], result_type: type[R]) -> list:
        """Data of one analytic from every series that has it."""
        collected = []
        for item in inputs:
            result = item.bundle.find(result_type)
            if result is not None:
                collected.append(result.data)
        return collected

    def _lane_stats(self, lanes: list[LaneCounterPickData]) -> LaneCounterPickStats:
        counter_picking = [
            r.worth_diff for lane in lanes for r in lane.counter_pick_games if r.team_id == self.team_id
        ]
        counter_picked = [
            r.worth_diff for lane in lanes for r in lane.counter_picked_games if r.team_id == self.team_id
        ]
        return LaneCounterPickStats(
            games_as_counter_pick=len(counter_picking),
            games_counter_picked=len(counter_picked),
            avg_worth_diff_when_counter_picking=average(counter_picking),
            avg_worth_diff_when_counter_picked=average(counter_picked),
            counter_pick_values=counter_picking,
            counter_picked_values=counter_picked,
        )

    def _counter_pick_stats(self, inputs: list[SeriesAnalytics]) -> Optional[CounterPickStats]:
        collected = self._collect(inputs, CounterPickGoldDiffResult)
        if not collected:
            return None
        return CounterPickStats(
            top_lane=self._lane_stats([data.top_lane for data in collected]),
            mid_lane=self._lane_stats([data.mid_lane for data in collected]),
        )

    def _drake_prio_stats(self, inputs: list[SeriesAnalytics]) -> Optional[DrakePrioStats]:
        collected = self._collect(inputs, BotLaneDrakePrioResult)
        if not collected:
            return None

        total = had_prio = secured = 0
        for data in collected:
            for drake in data.drake_details:
                if self.team_id == drake.blue_team_id:
                    our_side = "blue"
                elif self.team_id == drake.red_team_id:
                    our_side = "red"
                else:
                    continue
                total += 1
                if drake.team_with_prio == our_side:
                    had_prio += 1
                    if drake.killer_team_id == self.team_id:
                        secured += 1

        return DrakePrioStats(
            total_drakes=total,
            times_had_prio=had_prio,
            drakes_secured_with_prio=secured,
            prio_win_rate=percentage(secured, had_prio),
        )

    def _support_grub_stats(self, inputs: list[SeriesAnalytics]) -> Optional[SupportGrubStats]:
        collected = self._collect(inputs, SupportGrubRecallResult)
        if not collected:
            return None

        recall_times = []
        for data in collected:
            for grub in data.grub_details:
                if grub.blue_team_id == self.team_id:
                    recall_time = grub.blue_support_recall_time
                elif grub.red_team_id == self.team_id:
                    recall_time = grub.red_support_recall_time
                else:
                    continue
                if recall_time is not None:
                    recall_times.append(recall_time)

        recall_times.sort()
        return SupportGrubStats(
            total_grubs=len(recall_times),
            avg_recall_time_before_grub=average(recall_times) if recall_times else None,
            recall_times=recall_times,
        )

    def _adc_grub_stats(self, inputs: list[SeriesAnalytics]) -> Optional[AdcGrubStats]:
        collected = self._collect(inputs, AdcJoinedGrubsResult)
        if not collected:
            return None

        ours = [g for data in collected for g in data.grub_details if g.adc_team_id == self.team_id]
        present = sum(1 for g in ours if g.adc_joined_for_grubs)
        return AdcGrubStats(
            total_first_grubs=len(ours),
            grubs_with_adc_present=present,
            adc_present_rate=percentage(present, len(ours)),
        )

    def _gold_lead_by_role(self, inputs: list[SeriesAnalytics]) -> Optional[GoldLeadByRole]:
        collected = self._collect(inputs, PlayerWorthAt15Result)
        if not collected:
            return None

        leads: dict[str, list[float]] = {role: [] for role in ROLE_ORDER}
        for data in collected:
            for game in data.games:
                ours: dict[str, float] = {}
                theirs: dict[str, float] = {}
                for player in game.players:
                    if player.role not in leads:
                        continue
                    side = ours if player.team_id == self.team_id else theirs
                    side.setdefault(player.role, player.worth_at_15)
                for role in ROLE_ORDER:
                    if role in ours and role in theirs:
                        leads[role].append(ours[role] - theirs[role])

        return GoldLeadByRole(
            **{role: RoleGoldLead(avg=average(values), values=values) for role, values in leads.items()}
        )

    def _drake_gold_holding_stats(self, inputs: list[SeriesAnalytics]) -> Optional[DrakeGoldHoldingStats]:
        collected = self._collect(inputs, DrakeGoldHoldingResult)
        if not collected:
            return None

        drakes = 0
        mid_gold, bot_gold = [], []
        for data in collected:
            for drake in data.drake_details:
                our_players = [p for p in drake.players if p.team_id == self.team_id]
                if not our_players:
                    continue
                drakes += 1
                for player in our_players:
                    if player.role == "mid":
                        mid_gold.append(player.holding_gold_when_drake_dies)
                    else:
                        bot_gold.append(player.holding_gold_when_drake_dies)

        return DrakeGoldHoldingStats(
            total_drakes=drakes,
            avg_mid_gold_held=average(mid_gold),
            avg_adc_gold_held=average(bot_gold),
        )

    def _comeback_stats(self, inputs: list[SeriesAnalytics]) -> Optional[ComebackSummary]:
        collected = self._collect(inputs, ComebackStatsResult)
        if not collected:
            return None

        total = 0
        comebacks, failed_comebacks = [], 0
        leads_held, leads_lost = [], 0
        for data in collected:
            for game in data.games:
                if self.team_id not in (game.blue_team_id, game.red_team_id):
                    continue
                total += 1
                if game.outcome == "even_at_15":
                    continue
                won = game.winner_team_id == self.team_id
                if game.team_behind_at_15_id == self.team_id:
                    if won:
                        comebacks.append(game.lead_amount)
                    else:
                        failed_comebacks += 1
                elif game.team_ahead_at_15_id == self.team_id:
                    if won:
                        leads_held.append(game.lead_amount)
                    else:
                        leads_lost += 1

        return ComebackSummary(
            total_games=total,
            comeback_rate=percentage(len(comebacks), len(comebacks) + failed_comebacks),
            lead_hold_rate=percentage(len(leads_held), len(leads_held) + leads_lost),
            avg_comeback_deficit=average(comebacks),
            avg_lead_when_held=average(leads_held),
        )

    def _class_win_rate_stats(self, inputs: list[SeriesAnalytics]) -> Optional[ClassWinRateStats]:
        collected = self._collect(inputs, ClassWinRateResult)
        if not collected:
            return None

        # role -> class -> [wins, games]
        tallies: dict[str, dict[str, list[int]]] = {role: {} for role in CLASS_ROLES}
        for data in collected:
            for record in data.games:
                if record.team_id != self.team_id:
                    continue
                for class_name in record.classes:
                    tally = tallies[record.role].setdefault(class_name, [0, 0])
                    tally[1] += 1
                    if record.won:
                        tally[0] += 1

        def rows(role: str) -> list[ClassWinRate]:
            result = [
                ClassWinRate(class_name=name, wins=wins, games=games, win_rate=percentage(wins, games))
                for name, (wins, games) in tallies[role].items()
                if games >= MIN_CONDITIONAL_SAMPLES
            ]
            result.sort(key=lambda r: r.games, reverse=True)
            return result

        return ClassWinRateStats(top=rows("top"), jungle=rows("jungle"), support=rows("support"))

    def _ban_phase_stats(self, inputs: list[SeriesAnalytics]) -> Optional[BanPhaseStats]:
        collected = BanPhaseInput()
        found = False
        for item in inputs:
            result = item.bundle.find(BanPhaseAnalysisResult)
            if result is None:
                continue
            found = True
            for team in result.data.teams:
                if team.team_id == self.team_id:
                    collected.add(item.series_id, team.total_games, team.ban_sequences)
        if not found:
            return None
        return build_ban_phase_stats(collected)

    def _series_breakdown(self, item: SeriesAnalytics) -> SeriesBreakdown:
        games = []
        result = item.bundle.find(DraftAnalysisResult)
        if result is not None:
            for game in result.data.games:
                enemy_team_id = game.red_team_id if game.blue_team_id == self.team_id else game.blue_team_id
                games.append(
                    BreakdownGame(
                        game_number=game.game_number,
                        is_first_pick=game.first_pick_team_id == self.team_id,
                        our_team_id=self.team_id,
                        enemy_team_id=enemy_team_id,
                        draft_actions=[
                            BreakdownDraftAction(
                                team_id=action.team_id,
                                champ_name=action.champ_name,
                                action=action.action,
                                is_our_team=action.team_id == self.team_id,
                            )
                            for action in game.drafting_actions
                        ],
                    )
                )
        return SeriesBreakdown(
            series_id=item.series_id,
            opponent=item.opponent,
            date=item.date,
            games=games,
        )
