"""First ban phase patterns, per team.

Standard first ban phase order is FP1, SP1, FP2, SP2, FP3, SP3, so the first
six bans hold three per side. After the bans the first-pick side takes one
champion, then the second-pick side answers with two.
"""

import logging
from typing import Optional

from grid_scout.models.analytics import (
    AdaptiveBanStats,
    BanPhaseAnalysisData,
    BanPositionStats,
    BanSequence,
    ChampionFrequency,
    ConditionalBan,
    TeamBanPhase,
)
from grid_scout.models.series import Game, Series
from grid_scout.services.frequency import conditional_table, frequency_table
from grid_scout.services.reference_tables import ReferenceTables

logger = logging.getLogger(__name__)

FIRST_PHASE_BANS = 6
BANS_PER_SIDE = 3


def split_first_ban_phase(game: Game, team_id: str) -> tuple[list[str], list[str]]:
    """(our bans, enemy bans) among the first six bans, in submission order."""
    ours, theirs = [], []
    for ban in game.bans[:FIRST_PHASE_BANS]:
        if ban.team_id == team_id:
            ours.append(ban.champion)
        else:
            theirs.append(ban.champion)
    return ours, theirs


def first_picks(game: Game, team_id: str, is_first_pick: bool) -> tuple[list[str], Optional[str]]:
    """Our opening pick(s) and, when on second pick, the enemy's first pick."""
    picks = game.picks
    ours: list[str] = []
    enemy_first_pick = None

    if is_first_pick:
        if picks and picks[0].team_id == team_id:
            ours.append(picks[0].champion)
    else:
        if picks and picks[0].team_id != team_id:
            enemy_first_pick = picks[0].champion
        for pick in picks[1:3]:
            if pick.team_id == team_id:
                ours.append(pick.champion)
    return ours, enemy_first_pick


def second_ban_phase(game: Game, team_id: str) -> tuple[list[str], list[str]]:
    """Our first three picks and our 4th/5th bans."""
    our_picks = [p.champion for p in game.picks if p.team_id == team_id][:3]
    our_bans = [b.champion for b in game.bans if b.team_id == team_id][3:5]
    return our_picks, our_bans


def analyze_game_bans(
    game: Game,
    team_id: str,
    game_number: int,
    previous_picks: list[str],
) -> Optional[BanSequence]:
    """One team's ban sequence for one game, or None if the first phase is incomplete."""
    if not game.draft_actions:
        return None

    is_first_pick = game.first_pick_team_id == team_id
    our_bans, enemy_bans = split_first_ban_phase(game, team_id)
    if len(our_bans) < BANS_PER_SIDE or len(enemy_bans) < BANS_PER_SIDE:
        logger.debug(f"Game {game.id}: incomplete first ban phase for team {team_id}")
        return None

    our_first_picks, enemy_first_pick = first_picks(game, team_id, is_first_pick)
    picks_before_second_ban, second_phase_bans = second_ban_phase(game, team_id)

    return BanSequence(
        game_number=game_number,
        is_first_pick=is_first_pick,
        our_bans=our_bans,
        enemy_bans=enemy_bans,
        all_bans=our_bans + enemy_bans,
        our_first_picks=our_first_picks,
        enemy_first_pick=enemy_first_pick,
        unavailable_champs=list(previous_picks),
        our_picks_before_second_ban=picks_before_second_ban,
        our_second_phase_bans=second_phase_bans,
    )


def _position_frequencies(sequences: list[BanSequence], position: int) -> list[ChampionFrequency]:
    bans = [s.our_bans[position] for s in sequences if len(s.our_bans) > position]
    return frequency_table(bans, len(sequences), limit=None)


def conditional_bans(
    sequences: list[BanSequence],
    enemy_position: int,
    our_position: int,
    limit: Optional[int] = None,
) -> list[ConditionalBan]:
    """What we ban at our_position after the enemy banned X at enemy_position."""
    reactions: dict[str, list[str]] = {}
    for seq in sequences:
        if len(seq.enemy_bans) > enemy_position and len(seq.our_bans) > our_position:
            reactions.setdefault(seq.enemy_bans[enemy_position], []).append(seq.our_bans[our_position])

    return [
        ConditionalBan(if_enemy_bans=row.trigger, then_we_ban=row.responses, sample_size=row.sample_size)
        for row in conditional_table(reactions, limit=limit)
    ]


def _analyze_team(series: Series, team_id: str) -> Optional[TeamBanPhase]:
    sequences = []
    previous_picks: list[str] = []
    for game_number, game in enumerate(series.games, 1):
        sequence = analyze_game_bans(game, team_id, game_number, previous_picks)
        if sequence is not None:
            sequences.append(sequence)
        # Fearless: everything picked so far is unavailable in later games
        previous_picks.extend(p.champion for p in game.picks)

    if not sequences:
        return None

    first_pick = [s for s in sequences if s.is_first_pick]
    second_pick = [s for s in sequences if not s.is_first_pick]

    # First pick side bans before the enemy, so it answers enemy ban N with its ban N+1.
    # Second pick side answers enemy ban N with its own ban N.
    adaptive = AdaptiveBanStats(
        reactions_to_enemy_first_ban=conditional_bans(first_pick, 0, 1) + conditional_bans(second_pick, 0, 0),
        reactions_to_enemy_second_ban=conditional_bans(first_pick, 1, 2) + conditional_bans(second_pick, 1, 1),
    )

    return TeamBanPhase(
        team_id=team_id,
        team_name=series.team_name(team_id),
        total_games=len(sequences),
        ban_sequences=sequences,
        ban_position_stats=BanPositionStats(
            first_pick_ban1=_position_frequencies(first_pick, 0),
            first_pick_ban2=_position_frequencies(first_pick, 1),
            first_pick_ban3=_position_frequencies(first_pick, 2),
            second_pick_ban1=_position_frequencies(second_pick, 0),
            second_pick_ban2=_position_frequencies(second_pick, 1),
            second_pick_ban3=_position_frequencies(second_pick, 2),
        ),
        adaptive_ban_stats=adaptive,
        most_common_first_bans=frequency_table(
            [s.our_bans[0] for s in sequences], len(sequences), limit=None
        ),
        priority_bans=frequency_table(
            [ban for s in sequences for ban in s.our_bans], len(sequences), limit=None
        ),
    )


def ban_phase_analysis(series: Series, tables: ReferenceTables) -> Optional[BanPhaseAnalysisData]:
    teams = []
    for team in series.teams:
        analysis = _analyze_team(series, team.id)
        if analysis is not None:
            teams.append(analysis)
    if not teams:
        return None
    return BanPhaseAnalysisData(teams=teams)
