"""Agent picks of each team in a Valorant series, overall, by map and by player."""

from typing import NamedTuple, Optional

from grid_scout.models.valorant import ValorantGame, ValorantSeries, format_name
from grid_scout.models.valorant_analytics import (
    AgentFrequency,
    AgentGameRecord,
    AgentPickAnalysisData,
    MapAgentPicks,
    PlayerAgent,
    PlayerAgentPreference,
    TeamAgentAnalysis,
)
from grid_scout.services.frequency import percentage
from grid_scout.services.reference_tables import ReferenceTables

TOP_AGENTS = 15


class AgentPick(NamedTuple):
    agent_id: str
    agent_name: str
    is_win: bool


def agent_frequencies(
    picks: list[AgentPick],
    total_games: int,
    limit: Optional[int] = TOP_AGENTS,
) -> list[AgentFrequency]:
    """Pick counts and win rates per agent, most picked first."""
    tallies: dict[str, list] = {}
    for pick in picks:
        tally = tallies.setdefault(pick.agent_id, [pick.agent_name, 0, 0])
        tally[1] += 1
        if pick.is_win:
            tally[2] += 1

    rows = [
        AgentFrequency(
            agent_id=agent_id,
            agent_name=name,
            count=count,
            total_games=total_games,
            percentage=percentage(count, total_games),
            wins=wins,
            win_percentage=percentage(wins, count),
        )
        for agent_id, (name, count, wins) in tallies.items()
    ]
    rows.sort(key=lambda row: row.count, reverse=True)
    return rows if limit is None else rows[:limit]


def _game_record(game: ValorantGame, team_id: str) -> AgentGameRecord:
    return AgentGameRecord(
        game_number=game.game_number,
        map_id=game.map_id,
        winner_team_id=game.winner_team_id,
        is_win=game.winner_team_id == team_id,
        our_agents=[
            PlayerAgent(
                player_id=p.id,
                player_name=p.name,
                agent_id=p.agent_id,
                agent_name=p.agent_name,
            )
            for p in game.players_of(team_id)
        ],
    )


def team_agent_analysis(games: list[ValorantGame], team_id: str, team_name: str) -> TeamAgentAnalysis:
    records = [_game_record(game, team_id) for game in games]

    all_picks: list[AgentPick] = []
    by_map: dict[str, list[AgentPick]] = {}
    games_by_map: dict[str, int] = {}
    by_player: dict[str, list[AgentPick]] = {}
    player_names: dict[str, str] = {}

    for record in records:
        games_by_map[record.map_id] = games_by_map.get(record.map_id, 0) + 1
        map_picks = by_map.setdefault(record.map_id, [])
        for agent in record.our_agents:
            pick = AgentPick(agent.agent_id, agent.agent_name, record.is_win)
            all_picks.append(pick)
            map_picks.append(pick)
            by_player.setdefault(agent.player_id, []).append(pick)
            player_names.setdefault(agent.player_id, agent.player_name)

    picks_by_map = [
        MapAgentPicks(
            map_id=map_id,
            map_name=format_name(map_id),
            games_played=games_by_map[map_id],
            agent_picks=agent_frequencies(picks, games_by_map[map_id], limit=None),
        )
        for map_id, picks in by_map.items()
    ]
    picks_by_map.sort(key=lambda m: m.games_played, reverse=True)

    preferences = [
        PlayerAgentPreference(
            player_id=player_id,
            player_name=player_names[player_id],
            games_played=len(picks),
            wins=sum(1 for p in picks if p.is_win),
            agent_picks=agent_frequencies(picks, len(picks), limit=None),
        )
        for player_id, picks in by_player.items()
    ]
    preferences.sort(key=lambda p: p.player_name.lower())

    return TeamAgentAnalysis(
        team_id=team_id,
        team_name=team_name,
        total_maps_played=len(records),
        overall_agent_picks=agent_frequencies(all_picks, len(records), limit=None),
        agent_picks_by_map=picks_by_map,
        player_agent_preferences=preferences,
        game_details=records,
    )


def agent_pick_analysis(series: ValorantSeries, tables: ReferenceTables) -> Optional[AgentPickAnalysisData]:
    if not series.games:
        return None
    return AgentPickAnalysisData(
        total_games=len(series.games),
        teams=[team_agent_analysis(series.games, team.id, team.name) for team in series.teams],
    )
