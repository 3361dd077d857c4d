"""Per-match feature extractors.

Each extractor takes a series and the reference tables and returns its
typed data record, or None when no game meets its preconditions.
Extractors never mutate the series.
"""

from grid_scout.models.analytics import (
    AdcJoinedGrubsResult,
    BanPhaseAnalysisResult,
    BotLaneDrakePrioResult,
    ClassWinRateResult,
    ComebackStatsResult,
    CounterPickGoldDiffResult,
    DraftAnalysisResult,
    DrakeGoldHoldingResult,
    PlayerWorthAt15Result,
    SupportGrubRecallResult,
)
from grid_scout.services.extractors.adc_joined_grubs import adc_joined_grubs
from grid_scout.services.extractors.ban_phase_analysis import ban_phase_analysis
from grid_scout.services.extractors.bot_lane_drake_prio import bot_lane_drake_prio
from grid_scout.services.extractors.class_win_rate import class_win_rate
from grid_scout.services.extractors.comeback_stats import comeback_stats
from grid_scout.services.extractors.counter_pick_gold_diff import counter_pick_gold_diff
from grid_scout.services.extractors.draft_analysis import draft_analysis
from grid_scout.services.extractors.drake_gold_holding import drake_gold_holding
from grid_scout.services.extractors.player_worth_at_15 import player_worth_at_15
from grid_scout.services.extractors.support_grub_recall import support_grub_recall

# (result type, extractor) in the order results are stored
LOL_EXTRACTORS = [
    (AdcJoinedGrubsResult, adc_joined_grubs),
    (SupportGrubRecallResult, support_grub_recall),
    (BotLaneDrakePrioResult, bot_lane_drake_prio),
    (PlayerWorthAt15Result, player_worth_at_15),
    (DrakeGoldHoldingResult, drake_gold_holding),
    (ComebackStatsResult, comeback_stats),
    (CounterPickGoldDiffResult, counter_pick_gold_diff),
    (DraftAnalysisResult, draft_analysis),
    (BanPhaseAnalysisResult, ban_phase_analysis),
    (ClassWinRateResult, class_win_rate),
]

__all__ = [
    "LOL_EXTRACTORS",
    "adc_joined_grubs",
    "ban_phase_analysis",
    "bot_lane_drake_prio",
    "class_win_rate",
    "comeback_stats",
    "counter_pick_gold_diff",
    "draft_analysis",
    "drake_gold_holding",
    "player_worth_at_15",
    "support_grub_recall",
]
