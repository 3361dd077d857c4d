"""Cross-series ban and pick tendencies for one team.

Works on the per-team ban sequences stored by the banPhaseAnalysis
analytic. Under fearless rules champions used in earlier games of a series
are unavailable, so rates after game 1 are taken over the games in which a
champion could actually have been chosen.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from grid_scout.models.analytics import BanSequence, ChampionFrequency
from grid_scout.models.report import (
    AdaptivePick,
    AdaptivePickResponse,
    AvailabilityFrequency,
    BanPhaseStats,
    BansByGame,
    PickPairFrequency,
    PickSlotStats,
    SecondBanPhasePattern,
    SecondPickSlotStats,
)
from grid_scout.services.extractors.ban_phase_analysis import conditional_bans
from grid_scout.services.frequency import (
    MIN_CONDITIONAL_SAMPLES,
    TOP_ENTRIES,
    TOP_RESPONSES,
    Availability,
    availability_rows,
    counted,
    frequency_table,
    percentage,
)

logger = logging.getLogger(__name__)

MAX_SECOND_PHASE_TRIGGERS = 15


@dataclass
class TeamSequence:
    """A ban sequence together with the series it came from."""

    series_id: str
    sequence: BanSequence

    @property
    def game_key(self) -> tuple[str, int]:
        return self.series_id, self.sequence.game_number


@dataclass
class BanPhaseInput:
    """Everything collected for one team across the analysed series."""

    total_games: int = 0
    sequences: list[TeamSequence] = field(default_factory=list)

    def add(self, series_id: str, total_games: int, sequences: list[BanSequence]) -> None:
        self.total_games += total_games
        self.sequences.extend(TeamSequence(series_id, seq) for seq in sequences)


def _availability_frequencies(
    availability: dict[str, Availability],
    limit: Optional[int] = TOP_ENTRIES,
) -> list[AvailabilityFrequency]:
    return [
        AvailabilityFrequency(
            champion=champion,
            count=stats.chosen,
            available=stats.available,
            percentage=stats.rate,
        )
        for champion, stats in availability_rows(availability, limit=limit)
    ]


def game_n_bans(entries: list[TeamSequence]) -> list[AvailabilityFrequency]:
    """Ban rate when available for games after the first.

    Each (series, game number) is one game instance; a champion counts as
    available in it unless it was already picked earlier in that series.
    """
    games: dict[tuple[str, int], BanSequence] = {}
    for entry in entries:
        games.setdefault(entry.game_key, entry.sequence)

    candidates: dict[str, Availability] = {}
    for seq in games.values():
        for ban in seq.our_bans:
            candidates.setdefault(ban, Availability())

    for seq in games.values():
        unavailable = set(seq.unavailable_champs)
        for champion, stats in candidates.items():
            stats.observe(champion not in unavailable, champion in seq.our_bans)

    return _availability_frequencies(candidates)


def bans_by_game(entries: list[TeamSequence]) -> BansByGame:
    game1 = [e for e in entries if e.sequence.game_number == 1]
    return BansByGame(
        game1=frequency_table(
            [ban for e in game1 for ban in e.sequence.our_bans], len(game1)
        ),
        game2=game_n_bans([e for e in entries if e.sequence.game_number == 2]),
        game3_plus=game_n_bans([e for e in entries if e.sequence.game_number >= 3]),
    )


def second_ban_phase_patterns(sequences: list[BanSequence]) -> list[SecondBanPhasePattern]:
    """When we pick X before the second ban phase, which champions do we ban."""
    reactions: dict[str, list[list[str]]] = {}
    for seq in sequences:
        if not seq.our_second_phase_bans:
            continue
        for pick in seq.our_picks_before_second_ban:
            reactions.setdefault(pick, []).append(seq.our_second_phase_bans)

    patterns = []
    for pick, games in reactions.items():
        if len(games) < MIN_CONDITIONAL_SAMPLES:
            continue
        bans = [ban for game_bans in games for ban in game_bans]
        patterns.append(
            SecondBanPhasePattern(
                if_we_pick=pick,
                we_ban=frequency_table(bans, len(games), limit=TOP_RESPONSES),
                sample_size=len(games),
            )
        )
    patterns.sort(key=lambda p: p.sample_size, reverse=True)
    return patterns[:MAX_SECOND_PHASE_TRIGGERS]


def _position_bans(sequences: list[BanSequence], position: int) -> list[ChampionFrequency]:
    bans = [s.our_bans[position] for s in sequences if len(s.our_bans) > position]
    return frequency_table(bans, len(bans))


def first_pick_availability(sequences: list[BanSequence]) -> dict[str, Availability]:
    """Opening pick rate when available, for first-pick games."""
    availability: dict[str, Availability] = {}
    for seq in sequences:
        if seq.our_first_picks:
            availability.setdefault(seq.our_first_picks[0], Availability())

    for seq in sequences:
        unavailable = set(seq.all_bans) | set(seq.unavailable_champs)
        chosen = seq.our_first_picks[0] if seq.our_first_picks else None
        for champion, stats in availability.items():
            stats.observe(champion not in unavailable, champion == chosen)
    return availability


def second_pick_availability(sequences: list[BanSequence]) -> dict[str, Availability]:
    """Opening picks rate when available, for second-pick games.

    The enemy's first pick is already locked in when we choose, so it is
    unavailable too.
    """
    availability: dict[str, Availability] = {}
    for seq in sequences:
        for champion in seq.our_first_picks:
            availability.setdefault(champion, Availability())

    for seq in sequences:
        unavailable = set(seq.all_bans) | set(seq.unavailable_champs)
        if seq.enemy_first_pick:
            unavailable.add(seq.enemy_first_pick)
        for champion, stats in availability.items():
            stats.observe(champion not in unavailable, champion in seq.our_first_picks)
    return availability


def pick_pairs(sequences: list[BanSequence]) -> list[PickPairFrequency]:
    pairs = [
        tuple(sorted(seq.our_first_picks[:2]))
        for seq in sequences
        if len(seq.our_first_picks) >= 2
    ]
    return [
        PickPairFrequency(pair=list(pair), count=count, percentage=percentage(count, len(sequences)))
        for pair, count in counted(pairs)[:TOP_ENTRIES]
    ]


def adaptive_picks(sequences: list[BanSequence]) -> list[AdaptivePick]:
    """When the enemy first picks X, what we answer with.

    Ban rate is how often the answer was banned or already used in the
    series across the same games.
    """
    reactions: dict[str, list[BanSequence]] = {}
    for seq in sequences:
        if seq.enemy_first_pick and seq.our_first_picks:
            reactions.setdefault(seq.enemy_first_pick, []).append(seq)

    results = []
    for enemy_pick, games in reactions.items():
        if len(games) < MIN_CONDITIONAL_SAMPLES:
            continue
        removed = Counter()
        for seq in games:
            removed.update(set(seq.all_bans) | set(seq.unavailable_champs))
        responses = [
            AdaptivePickResponse(
                champion=champion,
                count=count,
                percentage=percentage(count, len(games)),
                ban_rate=percentage(removed[champion], len(games)),
            )
            for champion, count in counted(
                champion for seq in games for champion in seq.our_first_picks[:2]
            )
        ]
        results.append(
            AdaptivePick(
                if_enemy_picks=enemy_pick,
                then_we_pick=responses[:TOP_RESPONSES],
                sample_size=len(games),
            )
        )
    results.sort(key=lambda r: r.sample_size, reverse=True)
    return results[:TOP_ENTRIES]


def _slot_stats(sequences: list[BanSequence], our_response_position: int) -> dict:
    return {
        "priority_bans": frequency_table(
            [ban for s in sequences for ban in s.our_bans], len(sequences)
        ),
        "ban1": _position_bans(sequences, 0),
        "ban2": _position_bans(sequences, 1),
        "ban3": _position_bans(sequences, 2),
        "adaptive_bans": conditional_bans(sequences, 0, our_response_position, limit=TOP_ENTRIES),
    }


def build_ban_phase_stats(collected: BanPhaseInput) -> BanPhaseStats:
    sequences = [entry.sequence for entry in collected.sequences]
    first_pick = [s for s in sequences if s.is_first_pick]
    second_pick = [s for s in sequences if not s.is_first_pick]
    logger.debug(
        f"Ban phase stats over {len(first_pick)} first pick and {len(second_pick)} second pick games"
    )

    return BanPhaseStats(
        total_games=collected.total_games,
        first_pick_games=len(first_pick),
        second_pick_games=len(second_pick),
        bans_by_game=bans_by_game(collected.sequences),
        second_ban_phase_patterns=second_ban_phase_patterns(sequences),
        # First pick side answers the enemy's first ban with its second ban
        first_pick=PickSlotStats(
            **_slot_stats(first_pick, 1),
            first_picks=_availability_frequencies(first_pick_availability(first_pick)),
        ),
        second_pick=SecondPickSlotStats(
            **_slot_stats(second_pick, 0),
            first_picks=_availability_frequencies(second_pick_availability(second_pick)),
            pick_pairs=pick_pairs(second_pick),
            adaptive_picks=adaptive_picks(second_pick),
        ),
    )
