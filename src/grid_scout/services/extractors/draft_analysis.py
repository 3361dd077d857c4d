"""Full draft order of every game in a series."""

from typing import Optional

from grid_scout.models.analytics import DraftActionRecord, DraftAnalysisData, GameDraft
from grid_scout.models.series import Game, Series
from grid_scout.services.extractors.base import side_team_ids
from grid_scout.services.reference_tables import ReferenceTables


def _side_actions(game: Game, team_id: str, action: str) -> list[str]:
    return [a.champion for a in game.draft_actions if a.team_id == team_id and a.action == action]


def draft_analysis(series: Series, tables: ReferenceTables) -> Optional[DraftAnalysisData]:
    games = []
    for game_number, game in enumerate(series.games, 1):
        if not game.draft_actions:
            continue

        blue_team_id, red_team_id = side_team_ids(series, game)
        first_pick_team_id = game.first_pick_team_id
        games.append(
            GameDraft(
                game_id=game.id,
                game_number=game_number,
                blue_team_id=blue_team_id,
                blue_team_name=series.team_name(blue_team_id),
                red_team_id=red_team_id,
                red_team_name=series.team_name(red_team_id),
                first_pick_team_id=first_pick_team_id,
                first_pick_team_name=series.team_name(first_pick_team_id),
                drafting_actions=[
                    DraftActionRecord(
                        team_id=a.team_id,
                        team_name=series.team_name(a.team_id),
                        champ_name=a.champion,
                        action=a.action,
                    )
                    for a in game.draft_actions
                ],
                blue_bans=_side_actions(game, blue_team_id, "ban"),
                blue_picks=_side_actions(game, blue_team_id, "pick"),
                red_bans=_side_actions(game, red_team_id, "ban"),
                red_picks=_side_actions(game, red_team_id, "pick"),
            )
        )

    if not games:
        return None
    return DraftAnalysisData(total_games=len(games), games=games)
