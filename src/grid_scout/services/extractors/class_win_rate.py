"""Win/loss by champion class for top, jungle and support."""

import logging
from typing import Optional

from grid_scout.models.analytics import ClassWinRateData, ClassWinRecord
from grid_scout.models.series import Series
from grid_scout.services.reference_tables import ReferenceTables

logger = logging.getLogger(__name__)

CLASS_ROLES = ("top", "jungle", "support")


def class_win_rate(series: Series, tables: ReferenceTables) -> Optional[ClassWinRateData]:
    records = []
    for game in series.games:
        if not game.winner_team_id:
            continue
        for player in game.players:
            role = tables.role_of(player)
            if role not in CLASS_ROLES:
                continue
            champion_class = tables.champion_classes.get(player.champion)
            if champion_class is None:
                logger.debug(f"No class entry for {player.champion}")
                continue
            records.append(
                ClassWinRecord(
                    game_id=game.id,
                    role=role,
                    team_id=player.team_id,
                    team_name=series.team_name(player.team_id),
                    player_name=player.name,
                    champion_name=player.champion,
                    classes=list(champion_class.classes),
                    has_hard_cc=champion_class.has_hard_cc,
                    won=game.winner_team_id == player.team_id,
                )
            )

    if not records:
        return None
    return ClassWinRateData(games=records)
