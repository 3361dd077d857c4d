"""Support recall timing before the first void grub."""

import logging
from typing import Optional

from grid_scout.models.analytics import SupportGrubDetail, SupportGrubRecallData
from grid_scout.models.series import Game, GameEvent, PurchaseItemEvent, Series
from grid_scout.services.extractors.base import GRUB_PREFIX, side_team_ids
from grid_scout.services.extractors.recalls import RECALL_CHANNEL_TIME
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import events_of_type, first_event, is_first_tier_monster

logger = logging.getLogger(__name__)


def last_purchase_before(events: list[GameEvent], player_id: str, before: float) -> Optional[float]:
    """Time of the player's latest purchase strictly before a time."""
    last = None
    for purchase in events_of_type(events, PurchaseItemEvent, player_id):
        if purchase.time >= before:
            break
        last = purchase.time
    return last


def _recall_time(game: Game, player_id: Optional[str], grub_time: float) -> Optional[float]:
    if player_id is None:
        return None
    purchase_time = last_purchase_before(game.events, player_id, grub_time)
    if purchase_time is None:
        return None
    return purchase_time - RECALL_CHANNEL_TIME


def _analyze_game(game: Game, series: Series, tables: ReferenceTables) -> Optional[SupportGrubDetail]:
    if not game.events:
        return None

    first_grub = first_event(game.events, is_first_tier_monster(prefix=GRUB_PREFIX))
    if first_grub is None:
        return None

    blue_team_id, red_team_id = side_team_ids(series, game)
    blue_support = tables.player_with_role(game.players_of(blue_team_id), "support")
    red_support = tables.player_with_role(game.players_of(red_team_id), "support")

    killer = game.player(first_grub.player_id)
    killer_team_id = killer.team_id if killer else ""

    return SupportGrubDetail(
        game_id=game.id,
        grub_time=first_grub.time,
        killer_team_id=killer_team_id,
        killer_team_name=series.team_name(killer_team_id),
        blue_team_id=blue_team_id,
        blue_team_name=series.team_name(blue_team_id),
        red_team_id=red_team_id,
        red_team_name=series.team_name(red_team_id),
        blue_support_recall_time=_recall_time(
            game, blue_support.id if blue_support else None, first_grub.time
        ),
        red_support_recall_time=_recall_time(
            game, red_support.id if red_support else None, first_grub.time
        ),
    )


def support_grub_recall(series: Series, tables: ReferenceTables) -> Optional[SupportGrubRecallData]:
    """Recall start time of each support before the first grub.

    Recall time = last purchase before the grub kill minus the recall channel.
    """
    details = []
    for game in series.games:
        detail = _analyze_game(game, series, tables)
        if detail is not None:
            details.append(detail)
    if not details:
        return None
    return SupportGrubRecallData(total_grubs=len(details), grub_details=details)
