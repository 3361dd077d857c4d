"""Per-series analytic records for Valorant."""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from grid_scout.models.analytics import AnalyticResultBase, AnalyticsBundle, CamelModel

# ---------------------------------------------------------------------------
# mapVetoAnalysis
# ---------------------------------------------------------------------------


class MapVetoStep(CamelModel):
    sequence_number: int
    action: Literal["ban", "pick", "decider"]
    map_id: str
    team_id: Optional[str] = None
    team_name: Optional[str] = None


class TeamVetoSequence(CamelModel):
    """One team's side of a series' map veto."""

    team_id: str
    team_name: str
    # Bans submitted before the first pick of the veto
    ban_phase1_actions: list[MapVetoStep]
    pick_actions: list[MapVetoStep]
    # Bans submitted after the first pick of the veto
    ban_phase2_actions: list[MapVetoStep]
    decider_map: Optional[str] = None
    all_bans_before_our_pick: list[str]
    opponent_bans_before_our_first_ban: list[str]


class MapVetoAnalysisData(CamelModel):
    total_maps: int
    teams: list[TeamVetoSequence]


# ---------------------------------------------------------------------------
# agentPickAnalysis
# ---------------------------------------------------------------------------


class AgentFrequency(CamelModel):
    agent_id: str
    agent_name: str
    count: int
    total_games: int
    percentage: float
    wins: int
    win_percentage: float


class MapAgentPicks(CamelModel):
    map_id: str
    map_name: str
    games_played: int
    agent_picks: list[AgentFrequency]


class PlayerAgentPreference(CamelModel):
    player_id: str
    player_name: str
    games_played: int
    wins: int
    agent_picks: list[AgentFrequency]


class PlayerAgent(CamelModel):
    player_id: str
    player_name: str
    agent_id: str
    agent_name: str


class AgentGameRecord(CamelModel):
    game_number: int
    map_id: str
    winner_team_id: Optional[str] = None
    is_win: bool
    our_agents: list[PlayerAgent]


class TeamAgentAnalysis(CamelModel):
    team_id: str
    team_name: str
    total_maps_played: int
    overall_agent_picks: list[AgentFrequency]
    agent_picks_by_map: list[MapAgentPicks]
    player_agent_preferences: list[PlayerAgentPreference]
    game_details: list[AgentGameRecord]


class AgentPickAnalysisData(CamelModel):
    total_games: int
    teams: list[TeamAgentAnalysis]


# ---------------------------------------------------------------------------
# Tagged results and bundle
# ---------------------------------------------------------------------------


class MapVetoAnalysisResult(AnalyticResultBase):
    name: Literal["mapVetoAnalysis"] = "mapVetoAnalysis"
    description: str = "Analysis of map veto patterns including bans and picks"
    data: MapVetoAnalysisData


class AgentPickAnalysisResult(AnalyticResultBase):
    name: Literal["agentPickAnalysis"] = "agentPickAnalysis"
    description: str = "Analysis of agent pick patterns per team, overall and by map"
    data: AgentPickAnalysisData


ValorantAnalyticResult = Annotated[
    Union[MapVetoAnalysisResult, AgentPickAnalysisResult],
    Field(discriminator="name"),
]


class ValorantAnalyticsBundle(AnalyticsBundle):
    """Every analytic computed for one Valorant series."""

    results: list[ValorantAnalyticResult] = Field(default_factory=list)
