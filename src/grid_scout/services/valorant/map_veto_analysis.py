"""Map veto sequence of each team in a Valorant series."""

from typing import Optional

from grid_scout.models.valorant import MapVetoAction, ValorantSeries
from grid_scout.models.valorant_analytics import MapVetoAnalysisData, MapVetoStep, TeamVetoSequence
from grid_scout.services.reference_tables import ReferenceTables


def _step(action: MapVetoAction) -> MapVetoStep:
    return MapVetoStep(
        sequence_number=action.sequence_number,
        action=action.action,
        map_id=action.map_id,
        team_id=action.team_id,
        team_name=action.team_name,
    )


def _first_index(veto: list[MapVetoAction], action: str, team_id: Optional[str] = None) -> Optional[int]:
    for index, step in enumerate(veto):
        if step.action == action and (team_id is None or step.team_id == team_id):
            return index
    return None


def team_veto_sequence(veto: list[MapVetoAction], team_id: str, team_name: str) -> TeamVetoSequence:
    """Split one team's veto actions into ban phase 1, picks and ban phase 2.

    Phase 1 bans come before the first pick of the veto (any team), phase 2
    bans after it. With no pick at all every ban is phase 1.
    """
    first_pick = _first_index(veto, "pick")
    phase1, phase2, picks = [], [], []
    for index, step in enumerate(veto):
        if step.team_id != team_id:
            continue
        if step.action == "pick":
            picks.append(_step(step))
        elif step.action == "ban":
            if first_pick is None or index < first_pick:
                phase1.append(_step(step))
            else:
                phase2.append(_step(step))

    our_first_pick = _first_index(veto, "pick", team_id)
    before_pick = veto if our_first_pick is None else veto[:our_first_pick]
    all_bans_before_our_pick = [step.map_id for step in before_pick if step.action == "ban"]

    our_first_ban = _first_index(veto, "ban", team_id)
    opponent_bans = []
    if our_first_ban is not None:
        opponent_bans = [
            step.map_id
            for step in veto[:our_first_ban]
            if step.action == "ban" and step.team_id != team_id
        ]

    decider = _first_index(veto, "decider")
    return TeamVetoSequence(
        team_id=team_id,
        team_name=team_name,
        ban_phase1_actions=phase1,
        pick_actions=picks,
        ban_phase2_actions=phase2,
        decider_map=veto[decider].map_id if decider is not None else None,
        all_bans_before_our_pick=all_bans_before_our_pick,
        opponent_bans_before_our_first_ban=opponent_bans,
    )


def map_veto_analysis(series: ValorantSeries, tables: ReferenceTables) -> Optional[MapVetoAnalysisData]:
    if not series.map_veto:
        return None
    return MapVetoAnalysisData(
        total_maps=len(series.games),
        teams=[team_veto_sequence(series.map_veto, team.id, team.name) for team in series.teams],
    )
