"""Gold earned by every player at 15 minutes."""

import logging
from typing import Optional

from grid_scout.models.analytics import GameWorth, PlayerWorth, PlayerWorthAt15Data
from grid_scout.models.series import Game, Series
from grid_scout.services.extractors.base import FIFTEEN_MINUTES_IN_SECONDS, side_team_ids
from grid_scout.services.extractors.recalls import recall_times
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import worth_at

logger = logging.getLogger(__name__)


def _analyze_game(game: Game, series: Series, tables: ReferenceTables) -> Optional[GameWorth]:
    if not game.snapshots:
        return None
    if game.game_length < FIFTEEN_MINUTES_IN_SECONDS:
        logger.debug(f"Game {game.id}: shorter than 15 minutes, skipping worth at 15")
        return None

    blue_team_id, red_team_id = side_team_ids(series, game)
    players = [
        PlayerWorth(
            player_id=player.id,
            player_name=player.name,
            team_id=player.team_id,
            team_name=series.team_name(player.team_id),
            role=tables.role_of(player),
            champ_name=player.champion,
            worth_at_15=worth_at(game.snapshots, player.id, FIFTEEN_MINUTES_IN_SECONDS),
            early_recall_timers=recall_times(game.events, player.id),
        )
        for player in game.players
    ]
    return GameWorth(
        game_id=game.id,
        blue_team_id=blue_team_id,
        blue_team_name=series.team_name(blue_team_id),
        red_team_id=red_team_id,
        red_team_name=series.team_name(red_team_id),
        players=players,
    )


def player_worth_at_15(series: Series, tables: ReferenceTables) -> Optional[PlayerWorthAt15Data]:
    """Per-player worth at 15:00 plus inferred recall timers, for games of 15+ minutes."""
    games = []
    for game in series.games:
        worth = _analyze_game(game, series, tables)
        if worth is not None:
            games.append(worth)
    if not games:
        return None
    return PlayerWorthAt15Data(total_games=len(games), games=games)
