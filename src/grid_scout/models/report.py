"""League of Legends scouting report models."""

from typing import Literal, Optional

from pydantic import Field

from grid_scout.models.analytics import CamelModel, ChampionFrequency, ConditionalBan


class LaneCounterPickStats(CamelModel):
    games_as_counter_pick: int
    games_counter_picked: int
    avg_worth_diff_when_counter_picking: float
    avg_worth_diff_when_counter_picked: float
    counter_pick_values: list[float]
    counter_picked_values: list[float]


class CounterPickStats(CamelModel):
    top_lane: LaneCounterPickStats
    mid_lane: LaneCounterPickStats


class DrakePrioStats(CamelModel):
    total_drakes: int
    times_had_prio: int
    drakes_secured_with_prio: int
    prio_win_rate: float


class SupportGrubStats(CamelModel):
    total_grubs: int
    avg_recall_time_before_grub: Optional[float] = None
    recall_times: list[float]


class AdcGrubStats(CamelModel):
    total_first_grubs: int
    grubs_with_adc_present: int
    adc_present_rate: float


class RoleGoldLead(CamelModel):
    avg: float
    values: list[float]


class GoldLeadByRole(CamelModel):
    top: RoleGoldLead
    jungle: RoleGoldLead
    mid: RoleGoldLead
    bot: RoleGoldLead
    support: RoleGoldLead


class DrakeGoldHoldingStats(CamelModel):
    total_drakes: int
    avg_mid_gold_held: float
    avg_adc_gold_held: float


class ComebackSummary(CamelModel):
    total_games: int
    comeback_rate: float
    lead_hold_rate: float
    avg_comeback_deficit: float
    avg_lead_when_held: float


class ClassWinRate(CamelModel):
    class_name: str
    wins: int
    games: int
    win_rate: float


class ClassWinRateStats(CamelModel):
    top: list[ClassWinRate]
    jungle: list[ClassWinRate]
    support: list[ClassWinRate]


class AvailabilityFrequency(CamelModel):
    """Times chosen out of times the champion was available."""

    champion: str
    count: int
    available: int
    percentage: float


class PickPairFrequency(CamelModel):
    pair: list[str]
    count: int
    percentage: float


class AdaptivePickResponse(CamelModel):
    champion: str
    count: int
    percentage: float
    ban_rate: float


class AdaptivePick(CamelModel):
    if_enemy_picks: str
    then_we_pick: list[AdaptivePickResponse]
    sample_size: int


class SecondBanPhasePattern(CamelModel):
    if_we_pick: str
    we_ban: list[ChampionFrequency]
    sample_size: int


class BansByGame(CamelModel):
    game1: list[ChampionFrequency]
    game2: list[AvailabilityFrequency]
    game3_plus: list[AvailabilityFrequency]


class PickSlotStats(CamelModel):
    """Ban and first-pick tendencies for one draft side."""

    priority_bans: list[ChampionFrequency]
    ban1: list[ChampionFrequency]
    ban2: list[ChampionFrequency]
    ban3: list[ChampionFrequency]
    adaptive_bans: list[ConditionalBan]
    first_picks: list[AvailabilityFrequency]


class SecondPickSlotStats(PickSlotStats):
    pick_pairs: list[PickPairFrequency]
    adaptive_picks: list[AdaptivePick]


class BanPhaseStats(CamelModel):
    total_games: int
    first_pick_games: int
    second_pick_games: int
    bans_by_game: BansByGame
    second_ban_phase_patterns: list[SecondBanPhasePattern]
    first_pick: PickSlotStats
    second_pick: SecondPickSlotStats


class BreakdownDraftAction(CamelModel):
    team_id: str
    champ_name: str
    action: Literal["ban", "pick"]
    is_our_team: bool


class BreakdownGame(CamelModel):
    game_number: int
    is_first_pick: bool
    our_team_id: str
    enemy_team_id: str
    draft_actions: list[BreakdownDraftAction]


class SeriesBreakdown(CamelModel):
    series_id: str
    opponent: str
    date: str
    games: list[BreakdownGame]


class ScoutingReport(CamelModel):
    """Consolidated tendencies of one team across many series."""

    team_id: str
    team_name: str
    series_analyzed: int
    generated_at: str

    counter_pick_stats: Optional[CounterPickStats] = None
    drake_prio_stats: Optional[DrakePrioStats] = None
    support_grub_stats: Optional[SupportGrubStats] = None
    adc_grub_stats: Optional[AdcGrubStats] = None
    gold_lead_at_15_by_role: Optional[GoldLeadByRole] = None
    drake_gold_holding_stats: Optional[DrakeGoldHoldingStats] = None
    comeback_stats: Optional[ComebackSummary] = None
    class_win_rate_stats: Optional[ClassWinRateStats] = None
    ban_phase_stats: Optional[BanPhaseStats] = None
    series_breakdown: list[SeriesBreakdown] = Field(default_factory=list)
