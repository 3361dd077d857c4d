"""Bot lane priority (from levels) at the first drake."""

import logging
from typing import Optional

from grid_scout.models.analytics import BotLaneDrakePrioData, DrakePrioDetail, PrioSide
from grid_scout.models.series import DraftAction, Game, GamePlayer, LevelUpEvent, Series
from grid_scout.services.extractors.base import DRAKE_MARKER, pick_order, side_team_ids
from grid_scout.services.frequency import percentage
from grid_scout.services.reference_tables import ReferenceTables
from grid_scout.utils.timeline import events_of_type, first_event, is_first_tier_monster, level_at

logger = logging.getLogger(__name__)


def determine_prio(
    blue_level: int,
    blue_level_up_time: float,
    red_level: int,
    red_level_up_time: float,
) -> PrioSide:
    """Which side has lane priority.

    Higher level wins; on equal level, whoever reached it first wins.
    Identical level and time is "even".
    """
    if blue_level > red_level:
        return "blue"
    if red_level > blue_level:
        return "red"
    if blue_level_up_time < red_level_up_time:
        return "blue"
    if red_level_up_time < blue_level_up_time:
        return "red"
    return "even"


def counter_pick_team(
    blue_player: Optional[GamePlayer],
    red_player: Optional[GamePlayer],
    draft_actions: list[DraftAction],
    blue_team_name: str,
    red_team_name: str,
) -> Optional[str]:
    """Name of the team that picked the role later, or None if undeterminable."""
    if blue_player is None or red_player is None or not draft_actions:
        return None

    blue_order = pick_order(blue_player.champion, draft_actions)
    red_order = pick_order(red_player.champion, draft_actions)
    if blue_order is None or red_order is None or blue_order == red_order:
        return None
    return blue_team_name if blue_order > red_order else red_team_name


def _analyze_game(game: Game, series: Series, tables: ReferenceTables) -> Optional[DrakePrioDetail]:
    if not game.events:
        return None

    first_drake = first_event(game.events, is_first_tier_monster(contains=DRAKE_MARKER))
    if first_drake is None:
        return None

    blue_team_id, red_team_id = side_team_ids(series, game)
    blue_players = game.players_of(blue_team_id)
    red_players = game.players_of(red_team_id)

    blue_bot = tables.player_with_role(blue_players, "bot")
    red_bot = tables.player_with_role(red_players, "bot")
    if blue_bot is None or red_bot is None:
        logger.debug(f"Game {game.id}: bot laners not resolved, skipping drake prio")
        return None

    killer = game.player(first_drake.player_id)
    if killer is None:
        return None

    blue_level, blue_level_up_time = level_at(
        events_of_type(game.events, LevelUpEvent, blue_bot.id), first_drake.time
    )
    red_level, red_level_up_time = level_at(
        events_of_type(game.events, LevelUpEvent, red_bot.id), first_drake.time
    )
    team_with_prio = determine_prio(blue_level, blue_level_up_time, red_level, red_level_up_time)

    killer_is_blue = killer.team_id == blue_team_id
    prio_team_got_drake = (team_with_prio == "blue" and killer_is_blue) or (
        team_with_prio == "red" and not killer_is_blue
    )

    blue_team_name = series.team_name(blue_team_id)
    red_team_name = series.team_name(red_team_id)

    return DrakePrioDetail(
        game_id=game.id,
        drake_type=first_drake.monster_name,
        drake_time=first_drake.time,
        killer_team_id=killer.team_id,
        killer_team_name=series.team_name(killer.team_id),
        blue_team_id=blue_team_id,
        blue_team_name=blue_team_name,
        red_team_id=red_team_id,
        red_team_name=red_team_name,
        blue_bot_player=blue_bot.name,
        red_bot_player=red_bot.name,
        blue_bot_level_at_drake=blue_level,
        red_bot_level_at_drake=red_level,
        blue_bot_last_level_up_time=blue_level_up_time,
        red_bot_last_level_up_time=red_level_up_time,
        team_with_prio=team_with_prio,
        prio_team_got_drake=prio_team_got_drake,
        had_bot_counter_pick=counter_pick_team(
            blue_bot, red_bot, game.draft_actions, blue_team_name, red_team_name
        ),
        had_support_counter_pick=counter_pick_team(
            tables.player_with_role(blue_players, "support"),
            tables.player_with_role(red_players, "support"),
            game.draft_actions,
            blue_team_name,
            red_team_name,
        ),
    )


def bot_lane_drake_prio(series: Series, tables: ReferenceTables) -> Optional[BotLaneDrakePrioData]:
    """Correlate bot lane level priority with first drake control."""
    details = []
    for game in series.games:
        detail = _analyze_game(game, series, tables)
        if detail is not None:
            details.append(detail)
    if not details:
        return None

    had_prio = sum(1 for d in details if d.team_with_prio != "even" and d.prio_team_got_drake)
    no_prio = sum(1 for d in details if d.team_with_prio != "even" and not d.prio_team_got_drake)
    even = sum(1 for d in details if d.team_with_prio == "even")

    return BotLaneDrakePrioData(
        total_drakes=len(details),
        drakes_when_had_prio=had_prio,
        drakes_when_no_prio=no_prio,
        drakes_when_even=even,
        prio_win_rate=percentage(had_prio, had_prio + no_prio),
        drake_details=details,
    )
