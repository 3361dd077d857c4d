"""Whether the team ahead in gold at 15 minutes held its lead."""

import logging
from typing import Optional

from grid_scout.models.analytics import ComebackGame, ComebackOutcome, ComebackStatsData
from grid_scout.models.series import Game, Series
from grid_scout.services.extractors.base import FIFTEEN_MINUTES_IN_SECONDS, side_team_ids
from grid_scout.services.frequency import average, percentage
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import team_worth_at

logger = logging.getLogger(__name__)

# Team gold gaps below this are treated as an even game
EVEN_THRESHOLD = 500


def classify_outcome(gold_difference: float, ahead_team_won: bool) -> ComebackOutcome:
    """Classify a game from the 15-minute gold gap and who won."""
    if abs(gold_difference) < EVEN_THRESHOLD:
        return "even_at_15"
    return "lead_held" if ahead_team_won else "comeback"


def _analyze_game(game: Game, series: Series) -> Optional[ComebackGame]:
    if not game.snapshots:
        return None
    if game.game_length < FIFTEEN_MINUTES_IN_SECONDS:
        logger.debug(f"Game {game.id}: shorter than 15 minutes, skipping comeback stats")
        return None
    if not game.winner_team_id:
        return None

    blue_team_id, red_team_id = side_team_ids(series, game)
    blue_worth = team_worth_at(game, blue_team_id, FIFTEEN_MINUTES_IN_SECONDS)
    red_worth = team_worth_at(game, red_team_id, FIFTEEN_MINUTES_IN_SECONDS)
    difference = blue_worth - red_worth

    ahead_id = blue_team_id if difference > 0 else red_team_id
    outcome = classify_outcome(difference, game.winner_team_id == ahead_id)

    if outcome == "even_at_15":
        ahead_id = behind_id = None
        lead_amount = 0.0
    else:
        behind_id = red_team_id if ahead_id == blue_team_id else blue_team_id
        lead_amount = abs(difference)

    return ComebackGame(
        game_id=game.id,
        blue_team_id=blue_team_id,
        blue_team_name=series.team_name(blue_team_id),
        red_team_id=red_team_id,
        red_team_name=series.team_name(red_team_id),
        winner_team_id=game.winner_team_id,
        winner_team_name=series.team_name(game.winner_team_id),
        blue_team_worth_at_15=blue_worth,
        red_team_worth_at_15=red_worth,
        gold_difference_at_15=difference,
        team_ahead_at_15_id=ahead_id,
        team_ahead_at_15=series.team_name(ahead_id) if ahead_id else None,
        team_behind_at_15_id=behind_id,
        team_behind_at_15=series.team_name(behind_id) if behind_id else None,
        lead_amount=lead_amount,
        comeback_occurred=outcome == "comeback",
        lead_held=outcome == "lead_held",
        outcome=outcome,
    )


def comeback_stats(series: Series, tables: ReferenceTables) -> Optional[ComebackStatsData]:
    """Lead-held / comeback classification of every 15+ minute game with a winner."""
    games = []
    for game in series.games:
        record = _analyze_game(game, series)
        if record is not None:
            games.append(record)
    if not games:
        return None

    comebacks = [g for g in games if g.outcome == "comeback"]
    leads_held = [g for g in games if g.outcome == "lead_held"]
    clear_lead_games = len(comebacks) + len(leads_held)

    return ComebackStatsData(
        total_games=len(games),
        total_comebacks=len(comebacks),
        total_leads_held=len(leads_held),
        total_even_at_15=len(games) - clear_lead_games,
        comeback_rate=percentage(len(comebacks), clear_lead_games),
        lead_hold_rate=percentage(len(leads_held), clear_lead_games),
        avg_comeback_deficit=average([g.lead_amount for g in comebacks]),
        avg_lead_when_held=average([g.lead_amount for g in leads_held]),
        games=games,
    )
