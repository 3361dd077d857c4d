"""Cross-series Valorant scouting report: map veto habits and agent picks."""

import logging
from dataclasses import dataclass
from typing import Optional

from grid_scout.models.valorant import format_name
from grid_scout.models.valorant_analytics import (
    AgentPickAnalysisResult,
    MapVetoAnalysisResult,
    TeamAgentAnalysis,
    TeamVetoSequence,
    ValorantAnalyticsBundle,
)
from grid_scout.models.valorant_report import (
    AgentStats,
    BanPhase1Stats,
    BanPhase2Stats,
    MapAgentStats,
    MapFrequency,
    MapPickStats,
    MapVetoStats,
    PlayerPreference,
    ValorantBreakdownGame,
    ValorantScoutingReport,
    ValorantSeriesBreakdown,
    VetoBreakdownStep,
)
from grid_scout.services.analytics_runner import utc_timestamp
from grid_scout.services.frequency import (
    TOP_ENTRIES,
    Availability,
    availability_rows,
    counted,
    percentage,
)
from grid_scout.services.valorant.agent_pick_analysis import AgentPick, agent_frequencies

logger = logging.getLogger(__name__)


@dataclass
class ValorantSeriesAnalytics:
    series_id: str
    bundle: ValorantAnalyticsBundle
    opponent: str = ""
    date: str = ""


def map_frequencies(map_ids: list[str], denominator: int) -> list[MapFrequency]:
    return [
        MapFrequency(
            map_id=map_id,
            map_name=format_name(map_id),
            count=count,
            available=denominator,
            percentage=percentage(count, denominator),
        )
        for map_id, count in counted(map_ids)[:TOP_ENTRIES]
    ]


def _availability_frequencies(availability: dict[str, Availability]) -> list[MapFrequency]:
    return [
        MapFrequency(
            map_id=map_id,
            map_name=format_name(map_id),
            count=stats.chosen,
            available=stats.available,
            percentage=stats.rate,
        )
        for map_id, stats in availability_rows(availability)
    ]


def _maps_seen(seq: TeamVetoSequence) -> list[str]:
    """Every map the team's side of the veto touched, in veto order."""
    maps = [
        step.map_id
        for step in seq.ban_phase1_actions + seq.pick_actions + seq.ban_phase2_actions
    ]
    if seq.decider_map:
        maps.append(seq.decider_map)
    return list(dict.fromkeys(maps))


def map_veto_stats(sequences: list[TeamVetoSequence]) -> MapVetoStats:
    """Veto tendencies over every series in which the team vetoed.

    The first ban is rated over the series in which the map was still open
    when the team banned first; all picks over the series in which the map
    was not banned before the team's first pick.
    """
    first_ban: dict[str, Availability] = {}
    pick_when_open: dict[str, Availability] = {}
    phase2_series = 0

    for seq in sequences:
        seen = _maps_seen(seq)

        opponent_bans = seq.opponent_bans_before_our_first_ban
        our_first_ban = seq.ban_phase1_actions[0].map_id if seq.ban_phase1_actions else None
        for map_id in dict.fromkeys(seen + opponent_bans):
            first_ban.setdefault(map_id, Availability()).observe(
                map_id not in opponent_bans, map_id == our_first_ban
            )

        banned_before_pick = seq.all_bans_before_our_pick
        our_picks = [step.map_id for step in seq.pick_actions]
        for map_id in dict.fromkeys(seen + banned_before_pick):
            pick_when_open.setdefault(map_id, Availability()).observe(
                map_id not in banned_before_pick, map_id in our_picks
            )

        if seq.ban_phase2_actions:
            phase2_series += 1

    total = len(sequences)
    deciders = [seq.decider_map for seq in sequences if seq.decider_map]
    return MapVetoStats(
        ban_phase1=BanPhase1Stats(
            ban1=_availability_frequencies(first_ban),
            ban2=map_frequencies(
                [s.ban_phase1_actions[1].map_id for s in sequences if len(s.ban_phase1_actions) > 1], total
            ),
            all_bans=map_frequencies(
                [step.map_id for s in sequences for step in s.ban_phase1_actions], total
            ),
        ),
        map_picks=MapPickStats(
            pick1=map_frequencies([s.pick_actions[0].map_id for s in sequences if s.pick_actions], total),
            pick2=map_frequencies(
                [s.pick_actions[1].map_id for s in sequences if len(s.pick_actions) > 1], total
            ),
            all_picks=_availability_frequencies(pick_when_open),
        ),
        ban_phase2=BanPhase2Stats(
            all_bans=map_frequencies(
                [step.map_id for s in sequences for step in s.ban_phase2_actions], phase2_series
            )
        )
        if phase2_series
        else None,
        decider_maps=map_frequencies(deciders, len(deciders)),
    )


def agent_stats(teams: list[TeamAgentAnalysis]) -> AgentStats:
    all_picks: list[AgentPick] = []
    by_map: dict[str, list[AgentPick]] = {}
    games_by_map: dict[str, int] = {}
    by_player: dict[str, list[AgentPick]] = {}
    player_games: dict[str, list[bool]] = {}
    player_names: dict[str, str] = {}

    total_maps = 0
    for team in teams:
        for game in team.game_details:
            total_maps += 1
            games_by_map[game.map_id] = games_by_map.get(game.map_id, 0) + 1
            map_picks = by_map.setdefault(game.map_id, [])
            for agent in game.our_agents:
                pick = AgentPick(agent.agent_id, agent.agent_name, game.is_win)
                all_picks.append(pick)
                map_picks.append(pick)
                by_player.setdefault(agent.player_id, []).append(pick)
                player_games.setdefault(agent.player_id, []).append(game.is_win)
                player_names.setdefault(agent.player_id, agent.player_name)

    picks_by_map = [
        MapAgentStats(
            map_id=map_id,
            map_name=format_name(map_id),
            games_played=games_by_map[map_id],
            agent_picks=agent_frequencies(picks, games_by_map[map_id]),
        )
        for map_id, picks in by_map.items()
    ]
    picks_by_map.sort(key=lambda m: m.games_played, reverse=True)

    preferences = []
    for player_id, picks in by_player.items():
        results = player_games[player_id]
        wins = sum(1 for won in results if won)
        preferences.append(
            PlayerPreference(
                player_id=player_id,
                player_name=player_names[player_id],
                total_maps_played=len(results),
                wins=wins,
                win_percentage=percentage(wins, len(results)),
                agent_picks=agent_frequencies(picks, len(results)),
            )
        )
    preferences.sort(key=lambda p: p.player_name.lower())

    return AgentStats(
        overall_picks=agent_frequencies(all_picks, total_maps),
        picks_by_map=picks_by_map,
        player_preferences=preferences,
    )


class ValorantScoutingReportBuilder:
    """Builds a ValorantScoutingReport for one team from many analytics bundles."""

    def __init__(self, team_id: str, team_name: str):
        self.team_id = team_id
        self.team_name = team_name

    @classmethod
    def build(
        cls,
        team_id: str,
        team_name: str,
        inputs: list[ValorantSeriesAnalytics],
    ) -> ValorantScoutingReport:
        return cls(team_id, team_name).aggregate(inputs)

    def _our_veto(self, item: ValorantSeriesAnalytics) -> tuple[Optional[TeamVetoSequence], list[TeamVetoSequence]]:
        """(our veto sequence, the other teams' sequences) for a series."""
        result = item.bundle.find(MapVetoAnalysisResult)
        if result is None:
            return None, []
        ours = None
        others = []
        for team in result.data.teams:
            if team.team_id == self.team_id:
                ours = team
            else:
                others.append(team)
        return ours, others

    def _our_agents(self, item: ValorantSeriesAnalytics) -> Optional[TeamAgentAnalysis]:
        result = item.bundle.find(AgentPickAnalysisResult)
        if result is None:
            return None
        for team in result.data.teams:
            if team.team_id == self.team_id:
                return team
        return None

    def aggregate(self, inputs: list[ValorantSeriesAnalytics]) -> ValorantScoutingReport:
        logger.info(f"Building Valorant scouting report for {self.team_name} from {len(inputs)} series")
        veto_sequences = []
        agent_teams = []
        breakdown = []
        for item in inputs:
            ours, others = self._our_veto(item)
            if ours is not None:
                veto_sequences.append(ours)
            agents = self._our_agents(item)
            if agents is not None:
                agent_teams.append(agents)
            breakdown.append(self._series_breakdown(item, ours, others, agents))

        maps_played = sum(team.total_maps_played for team in agent_teams)
        return ValorantScoutingReport(
            team_id=self.team_id,
            team_name=self.team_name,
            series_analyzed=len(inputs),
            maps_played=maps_played,
            generated_at=utc_timestamp(),
            map_veto_stats=map_veto_stats(veto_sequences) if veto_sequences else None,
            agent_stats=agent_stats(agent_teams) if maps_played else None,
            series_breakdown=breakdown,
        )

    def _series_breakdown(
        self,
        item: ValorantSeriesAnalytics,
        ours: Optional[TeamVetoSequence],
        others: list[TeamVetoSequence],
        agents: Optional[TeamAgentAnalysis],
    ) -> ValorantSeriesBreakdown:
        steps = []
        if ours is not None:
            for seq in [ours] + others:
                is_ours = seq is ours
                for step in seq.ban_phase1_actions + seq.pick_actions + seq.ban_phase2_actions:
                    steps.append((step, is_ours))
        steps.sort(key=lambda entry: entry[0].sequence_number)

        veto = [
            VetoBreakdownStep(
                sequence_number=index,
                action=step.action,
                map_id=step.map_id,
                team_id=step.team_id,
                team_name=step.team_name,
                is_our_team=is_ours,
            )
            for index, (step, is_ours) in enumerate(steps, 1)
        ]
        # Decider has no team and always closes the veto
        if ours is not None and ours.decider_map:
            veto.append(
                VetoBreakdownStep(
                    sequence_number=len(veto) + 1,
                    action="decider",
                    map_id=ours.decider_map,
                    is_our_team=False,
                )
            )

        games = []
        if agents is not None:
            games = [
                ValorantBreakdownGame(
                    game_number=game.game_number,
                    map_id=game.map_id,
                    winner_team_id=game.winner_team_id,
                    is_win=game.is_win,
                    our_agents=game.our_agents,
                )
                for game in agents.game_details
            ]

        return ValorantSeriesBreakdown(
            series_id=item.series_id,
            opponent=item.opponent,
            date=item.date,
            maps_played=agents.total_maps_played if agents else 0,
            map_veto=veto,
            games=games,
        )
