"""Unspent gold held by mid and bot laners when each drake dies."""

from typing import Optional

from grid_scout.models.analytics import DrakeGoldDetail, DrakeGoldHoldingData, DrakeGoldPlayer
from grid_scout.models.series import Game, Series
from grid_scout.services.extractors.base import DRAKE_MARKER, side_team_ids
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import is_first_tier_monster, snapshot_at_or_before

TRACKED_ROLES = ("mid", "bot")


def _analyze_game(game: Game, series: Series, tables: ReferenceTables) -> list[DrakeGoldDetail]:
    if not game.events or not game.snapshots:
        return []

    blue_team_id, red_team_id = side_team_ids(series, game)
    tracked = []
    for team_id in (blue_team_id, red_team_id):
        for role in TRACKED_ROLES:
            player = tables.player_with_role(game.players_of(team_id), role)
            if player is not None:
                tracked.append((player, role))

    is_drake = is_first_tier_monster(contains=DRAKE_MARKER)
    drakes = [e for e in game.events if is_drake(e)]

    details = []
    for drake_number, drake in enumerate(drakes, 1):
        killer = game.player(drake.player_id)
        killer_team_id = killer.team_id if killer else ""
        snapshot = snapshot_at_or_before(game.snapshots, drake.time)

        players = []
        if snapshot is not None:
            for player, role in tracked:
                state = snapshot.state_of(player.id)
                players.append(
                    DrakeGoldPlayer(
                        player_name=player.name,
                        team_id=player.team_id,
                        team_name=series.team_name(player.team_id),
                        role=role,
                        champ_name=player.champion,
                        holding_gold_when_drake_dies=state.gold if state else 0,
                    )
                )

        details.append(
            DrakeGoldDetail(
                game_id=game.id,
                drake_number=drake_number,
                drake_type=drake.monster_name,
                drake_time=drake.time,
                killer_team_id=killer_team_id,
                killer_team_name=series.team_name(killer_team_id),
                blue_team_id=blue_team_id,
                blue_team_name=series.team_name(blue_team_id),
                red_team_id=red_team_id,
                red_team_name=series.team_name(red_team_id),
                players=players,
            )
        )
    return details


def drake_gold_holding(series: Series, tables: ReferenceTables) -> Optional[DrakeGoldHoldingData]:
    details = []
    for game in series.games:
        details.extend(_analyze_game(game, series, tables))
    if not details:
        return None
    return DrakeGoldHoldingData(total_drakes=len(details), drake_details=details)
