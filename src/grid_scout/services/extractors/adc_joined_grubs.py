"""Bot laner presence in the grub pit when the first void grub dies."""

import logging
from typing import Optional

from grid_scout.models.analytics import AdcGrubDetail, AdcJoinedGrubsData
from grid_scout.models.series import Game, Series
from grid_scout.services.extractors.base import GRUB_PREFIX, side_team_ids
from grid_scout.services.frequency import percentage
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import first_event, is_first_tier_monster, snapshot_at_or_before

logger = logging.getLogger(__name__)

# Grub pit bounds in map coordinates (inclusive)
GRUB_AREA_MIN_X = 3500
GRUB_AREA_MAX_X = 5500
GRUB_AREA_MIN_Y = 8800
GRUB_AREA_MAX_Y = 10800


def is_in_grub_area(x: float, y: float) -> bool:
    return GRUB_AREA_MIN_X <= x <= GRUB_AREA_MAX_X and GRUB_AREA_MIN_Y <= y <= GRUB_AREA_MAX_Y


def _analyze_game(game: Game, series: Series, tables: ReferenceTables) -> Optional[AdcGrubDetail]:
    if not game.events or not game.snapshots:
        logger.debug(f"Game {game.id}: no events or snapshots, skipping grub presence")
        return None

    first_grub = first_event(game.events, is_first_tier_monster(prefix=GRUB_PREFIX))
    if first_grub is None:
        return None

    killer = game.player(first_grub.player_id)
    if killer is None:
        return None

    adc = tables.player_with_role(game.players_of(killer.team_id), "bot")
    if adc is None:
        logger.debug(f"Game {game.id}: no bot laner resolved for team {killer.team_id}")
        return None

    adc_x = adc_y = None
    joined = False
    snapshot = snapshot_at_or_before(game.snapshots, first_grub.time)
    state = snapshot.state_of(adc.id) if snapshot else None
    if state is not None:
        adc_x, adc_y = state.x, state.y
        joined = is_in_grub_area(state.x, state.y)

    blue_team_id, red_team_id = side_team_ids(series, game)
    return AdcGrubDetail(
        game_id=game.id,
        grub_time=first_grub.time,
        killer_team_id=killer.team_id,
        killer_team_name=series.team_name(killer.team_id),
        blue_team_id=blue_team_id,
        blue_team_name=series.team_name(blue_team_id),
        red_team_id=red_team_id,
        red_team_name=series.team_name(red_team_id),
        adc_player_name=adc.name,
        adc_team_id=adc.team_id,
        adc_team_name=series.team_name(adc.team_id),
        adc_x=adc_x,
        adc_y=adc_y,
        adc_joined_for_grubs=joined,
    )


def adc_joined_grubs(series: Series, tables: ReferenceTables) -> Optional[AdcJoinedGrubsData]:
    """Whether the first-grub team's bot laner was in the pit at the kill."""
    details = []
    for game in series.games:
        detail = _analyze_game(game, series, tables)
        if detail is not None:
            details.append(detail)
    if not details:
        return None

    present = sum(1 for d in details if d.adc_joined_for_grubs)
    return AdcJoinedGrubsData(
        total_first_grubs=len(details),
        grubs_with_adc_present=present,
        grubs_without_adc_present=len(details) - present,
        adc_present_rate=percentage(present, len(details)),
        grub_details=details,
    )
