"""Valorant scouting report models."""

from typing import Literal, Optional

from pydantic import Field

from grid_scout.models.analytics import CamelModel
from grid_scout.models.valorant_analytics import AgentFrequency, PlayerAgent


class MapFrequency(CamelModel):
    """Times chosen out of the stated number of opportunities."""

    map_id: str
    map_name: str
    count: int
    available: int
    percentage: float


class BanPhase1Stats(CamelModel):
    ban1: list[MapFrequency]
    ban2: list[MapFrequency]
    all_bans: list[MapFrequency]


class MapPickStats(CamelModel):
    pick1: list[MapFrequency]
    pick2: list[MapFrequency]
    all_picks: list[MapFrequency]


class BanPhase2Stats(CamelModel):
    all_bans: list[MapFrequency]


class MapVetoStats(CamelModel):
    ban_phase1: BanPhase1Stats
    map_picks: MapPickStats
    ban_phase2: Optional[BanPhase2Stats] = None
    decider_maps: list[MapFrequency]


class MapAgentStats(CamelModel):
    map_id: str
    map_name: str
    games_played: int
    agent_picks: list[AgentFrequency]


class PlayerPreference(CamelModel):
    player_id: str
    player_name: str
    total_maps_played: int
    wins: int
    win_percentage: float
    agent_picks: list[AgentFrequency]


class AgentStats(CamelModel):
    overall_picks: list[AgentFrequency]
    picks_by_map: list[MapAgentStats]
    player_preferences: list[PlayerPreference]


class VetoBreakdownStep(CamelModel):
    sequence_number: int
    action: Literal["ban", "pick", "decider"]
    map_id: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    is_our_team: bool


class ValorantBreakdownGame(CamelModel):
    game_number: int
    map_id: str
    winner_team_id: Optional[str] = None
    is_win: bool
    our_agents: list[PlayerAgent]


class ValorantSeriesBreakdown(CamelModel):
    series_id: str
    opponent: str
    date: str
    maps_played: int
    map_veto: list[VetoBreakdownStep]
    games: list[ValorantBreakdownGame]


class ValorantScoutingReport(CamelModel):
    team_id: str
    team_name: str
    series_analyzed: int
    maps_played: int
    generated_at: str
    map_veto_stats: Optional[MapVetoStats] = None
    agent_stats: Optional[AgentStats] = None
    series_breakdown: list[ValorantSeriesBreakdown] = Field(default_factory=list)
