"""Helpers shared by the per-match extractors."""

from typing import Optional

from grid_scout.models.series import DraftAction, Game, Series

FIFTEEN_MINUTES_IN_SECONDS = 15 * 60

GRUB_PREFIX = "voidGrub"
DRAKE_MARKER = "Drake"


def side_team_ids(series: Series, game: Game) -> tuple[str, str]:
    """(blue team id, red team id) for a game.

    Raises:
        TwoTeamInvariantError: If the blue side team is not one of the series' teams.
    """
    blue_team_id = game.blue_side_team_id
    return blue_team_id, series.opponent_of(blue_team_id).id


def pick_order(champion: str, draft_actions: list[DraftAction]) -> Optional[int]:
    """Index of a champion among the pick actions, or None if it was never picked."""
    picks = [a for a in draft_actions if a.action == "pick"]
    for index, pick in enumerate(picks):
        if pick.champion == champion:
            return index
    return None
