"""Top and mid gold difference at 15 minutes by draft order."""

from typing import Optional

from grid_scout.models.analytics import (
    CounterPickGoldDiffData,
    CounterPickRecord,
    LaneCounterPickData,
)
from grid_scout.models.series import Game, Series
from grid_scout.services.extractors.base import FIFTEEN_MINUTES_IN_SECONDS, pick_order
from grid_scout.services.frequency import average
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import worth_at

LANES = ("top", "mid")


def _analyze_game(game: Game, series: Series, tables: ReferenceTables) -> list[CounterPickRecord]:
    if not game.snapshots or not game.draft_actions:
        return []
    if game.game_length < FIFTEEN_MINUTES_IN_SECONDS:
        return []

    records = []
    for player in game.players:
        role = tables.role_of(player)
        if role not in LANES:
            continue

        opponent = None
        for candidate in game.players:
            if candidate.team_id != player.team_id and tables.role_of(candidate) == role:
                opponent = candidate
                break
        if opponent is None:
            continue

        own_order = pick_order(player.champion, game.draft_actions)
        opponent_order = pick_order(opponent.champion, game.draft_actions)
        if own_order is None or opponent_order is None:
            continue

        worth = worth_at(game.snapshots, player.id, FIFTEEN_MINUTES_IN_SECONDS)
        enemy_worth = worth_at(game.snapshots, opponent.id, FIFTEEN_MINUTES_IN_SECONDS)
        records.append(
            CounterPickRecord(
                game_id=game.id,
                player_name=player.name,
                team_id=player.team_id,
                team_name=series.team_name(player.team_id),
                champ_name=player.champion,
                role=role,
                was_counter_pick=own_order > opponent_order,
                worth_at_15=worth,
                enemy_worth_at_15=enemy_worth,
                worth_diff=worth - enemy_worth,
            )
        )
    return records


def _lane_summary(records: list[CounterPickRecord]) -> LaneCounterPickData:
    counter_picking = [r for r in records if r.was_counter_pick]
    counter_picked = [r for r in records if not r.was_counter_pick]
    return LaneCounterPickData(
        counter_pick_games=counter_picking,
        counter_picked_games=counter_picked,
        avg_worth_diff_when_counter_picking=average([r.worth_diff for r in counter_picking]),
        avg_worth_diff_when_counter_picked=average([r.worth_diff for r in counter_picked]),
    )


def counter_pick_gold_diff(series: Series, tables: ReferenceTables) -> Optional[CounterPickGoldDiffData]:
    """A pick is a counter pick when it came after the lane opponent's pick."""
    records = []
    for game in series.games:
        records.extend(_analyze_game(game, series, tables))
    if not records:
        return None

    return CounterPickGoldDiffData(
        top_lane=_lane_summary([r for r in records if r.role == "top"]),
        mid_lane=_lane_summary([r for r in records if r.role == "mid"]),
    )
