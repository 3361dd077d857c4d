"""Recall inference from purchase events.

No explicit recall event exists, so a purchase is taken as the end of a
voluntary recall when it is past the laning warm-up, far enough from the
previous recall, and not right after the player died.
"""

from grid_scout.models.series import GameEvent, KillEvent, PurchaseItemEvent
from grid_scout.utils.timeline import events_of_type

MIN_TIME_FOR_RECALL = 180  # purchases before 3:00 are starting items
MIN_TIME_BETWEEN_RECALLS = 180
DEATH_WINDOW = 30
RECALL_CHANNEL_TIME = 8


def died_before(events: list[GameEvent], player_id: str, before: float, window: float = DEATH_WINDOW) -> bool:
    """True if the player was killed in [before - window, before)."""
    window_start = before - window
    for kill in events_of_type(events, KillEvent):
        if kill.target_id == player_id and window_start <= kill.time < before:
            return True
    return False


def recall_purchase_times(events: list[GameEvent], player_id: str) -> list[float]:
    """Purchase times accepted as recalls, in time order."""
    accepted: list[float] = []
    last_recall = 0.0
    purchases = sorted(events_of_type(events, PurchaseItemEvent, player_id), key=lambda e: e.time)

    for purchase in purchases:
        if purchase.time < MIN_TIME_FOR_RECALL:
            continue
        if purchase.time < last_recall + MIN_TIME_BETWEEN_RECALLS:
            continue
        if died_before(events, player_id, purchase.time):
            continue
        accepted.append(purchase.time)
        last_recall = purchase.time

    return accepted


def recall_times(events: list[GameEvent], player_id: str) -> list[float]:
    """Inferred recall start times (purchase time minus the recall channel)."""
    return [t - RECALL_CHANNEL_TIME for t in recall_purchase_times(events, player_id)]
