"""Frequency and conditional-frequency tables.

Every tendency statistic in a scouting report is one of two shapes: a
frequency table (value -> count, percentage of a stated denominator) or a
conditional table (trigger -> frequency table + sample size). Ties keep
first-seen order so output is deterministic for a given input order.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, NamedTuple, Optional

from grid_scout.models.analytics import ChampionFrequency

MIN_CONDITIONAL_SAMPLES = 2
TOP_RESPONSES = 5
TOP_ENTRIES = 10


def percentage(count: float, denominator: float) -> float:
    """count / denominator as a percentage, 0 for an empty denominator."""
    if denominator <= 0:
        return 0.0
    return count / denominator * 100


def average(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def counted(values: Iterable[Hashable]) -> list[tuple[Hashable, int]]:
    """(value, count) pairs ordered by count descending, ties in first-seen order."""
    return Counter(values).most_common()


def frequency_table(
    values: Iterable[str],
    denominator: float,
    limit: Optional[int] = TOP_ENTRIES,
) -> list[ChampionFrequency]:
    """Build a frequency table over a filtered set of values.

    Args:
        values: Categorical values to count
        denominator: Percentage base; statistic-specific (games, samples, ...)
        limit: Keep only the top N rows (None keeps all)
    """
    rows = [
        ChampionFrequency(champion=value, count=count, percentage=percentage(count, denominator))
        for value, count in counted(values)
    ]
    return rows if limit is None else rows[:limit]


class ConditionalRow(NamedTuple):
    trigger: str
    responses: list[ChampionFrequency]
    sample_size: int


def conditional_table(
    reactions: dict[str, list[str]],
    min_samples: int = MIN_CONDITIONAL_SAMPLES,
    top_responses: int = TOP_RESPONSES,
    limit: Optional[int] = None,
) -> list[ConditionalRow]:
    """Group responses by trigger, dropping triggers with too few samples.

    The sample size of a trigger is the number of responses recorded for it,
    and response percentages are taken over that sample size.
    """
    rows = [
        ConditionalRow(
            trigger=trigger,
            responses=frequency_table(responses, len(responses), limit=top_responses),
            sample_size=len(responses),
        )
        for trigger, responses in reactions.items()
        if len(responses) >= min_samples
    ]
    rows.sort(key=lambda row: row.sample_size, reverse=True)
    return rows if limit is None else rows[:limit]


@dataclass
class Availability:
    """How often a value could have been chosen, and how often it was."""

    available: int = 0
    chosen: int = 0

    def observe(self, is_available: bool, was_chosen: bool) -> None:
        if not is_available:
            return
        self.available += 1
        if was_chosen:
            self.chosen += 1

    @property
    def rate(self) -> float:
        return percentage(self.chosen, self.available)


def availability_rows(
    availability: dict[str, Availability],
    limit: Optional[int] = TOP_ENTRIES,
) -> list[tuple[str, Availability]]:
    """Values that were available at least once, ordered by rate descending."""
    rows = [(value, stats) for value, stats in availability.items() if stats.available > 0]
    rows.sort(key=lambda row: row[1].rate, reverse=True)
    return rows if limit is None else rows[:limit]
