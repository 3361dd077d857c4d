"""Valorant extractors and scouting report."""

from grid_scout.models.valorant_analytics import AgentPickAnalysisResult, MapVetoAnalysisResult
from grid_scout.services.valorant.agent_pick_analysis import agent_pick_analysis
from grid_scout.services.valorant.map_veto_analysis import map_veto_analysis

VALORANT_EXTRACTORS = [
    (MapVetoAnalysisResult, map_veto_analysis),
    (AgentPickAnalysisResult, agent_pick_analysis),
]

__all__ = ["VALORANT_EXTRACTORS", "agent_pick_analysis", "map_veto_analysis"]
