"""Per-series analytic records for League of Legends.

Every analytic produces one typed result (``name`` is the tag) stored in an
AnalyticsBundle. Serialized field names are camelCase so stored bundles stay
readable by the web client.
"""

from typing import Annotated, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ChampionFrequency(CamelModel):
    """One row of a frequency table."""

    champion: str
    count: int
    percentage: float


# ---------------------------------------------------------------------------
# adcJoinedGrubs
# ---------------------------------------------------------------------------


class AdcGrubDetail(CamelModel):
    game_id: str
    grub_time: float
    killer_team_id: str
    killer_team_name: str
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    adc_player_name: str
    adc_team_id: str
    adc_team_name: str
    adc_x: Optional[float] = None
    adc_y: Optional[float] = None
    adc_joined_for_grubs: bool


class AdcJoinedGrubsData(CamelModel):
    total_first_grubs: int
    grubs_with_adc_present: int
    grubs_without_adc_present: int
    adc_present_rate: float
    grub_details: list[AdcGrubDetail]


# ---------------------------------------------------------------------------
# supportGrubRecall
# ---------------------------------------------------------------------------


class SupportGrubDetail(CamelModel):
    game_id: str
    grub_time: float
    killer_team_id: str
    killer_team_name: str
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    blue_support_recall_time: Optional[float] = None
    red_support_recall_time: Optional[float] = None


class SupportGrubRecallData(CamelModel):
    total_grubs: int
    grub_details: list[SupportGrubDetail]


# ---------------------------------------------------------------------------
# botLaneDrakePrio
# ---------------------------------------------------------------------------

PrioSide = Literal["blue", "red", "even"]


class DrakePrioDetail(CamelModel):
    game_id: str
    drake_type: str
    drake_time: float
    killer_team_id: str
    killer_team_name: str
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    blue_bot_player: str
    red_bot_player: str
    blue_bot_level_at_drake: int
    red_bot_level_at_drake: int
    blue_bot_last_level_up_time: float
    red_bot_last_level_up_time: float
    team_with_prio: PrioSide
    prio_team_got_drake: bool
    had_bot_counter_pick: Optional[str] = None
    had_support_counter_pick: Optional[str] = None


class BotLaneDrakePrioData(CamelModel):
    total_drakes: int
    drakes_when_had_prio: int
    drakes_when_no_prio: int
    drakes_when_even: int
    prio_win_rate: float
    drake_details: list[DrakePrioDetail]


# ---------------------------------------------------------------------------
# playerWorthAt15
# ---------------------------------------------------------------------------


class PlayerWorth(CamelModel):
    player_id: str
    player_name: str
    team_id: str
    team_name: str
    role: str
    champ_name: str
    worth_at_15: float
    early_recall_timers: list[float]


class GameWorth(CamelModel):
    game_id: str
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    players: list[PlayerWorth]


class PlayerWorthAt15Data(CamelModel):
    total_games: int
    games: list[GameWorth]


# ---------------------------------------------------------------------------
# drakeGoldHolding
# ---------------------------------------------------------------------------


class DrakeGoldPlayer(CamelModel):
    player_name: str
    team_id: str
    team_name: str
    role: Literal["mid", "bot"]
    champ_name: str
    holding_gold_when_drake_dies: float


class DrakeGoldDetail(CamelModel):
    game_id: str
    drake_number: int
    drake_type: str
    drake_time: float
    killer_team_id: str
    killer_team_name: str
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    players: list[DrakeGoldPlayer]


class DrakeGoldHoldingData(CamelModel):
    total_drakes: int
    drake_details: list[DrakeGoldDetail]


# ---------------------------------------------------------------------------
# comebackStats
# ---------------------------------------------------------------------------

ComebackOutcome = Literal["comeback", "lead_held", "even_at_15"]


class ComebackGame(CamelModel):
    game_id: str
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    winner_team_id: str
    winner_team_name: str
    blue_team_worth_at_15: float
    red_team_worth_at_15: float
    gold_difference_at_15: float  # positive = blue ahead
    team_ahead_at_15_id: Optional[str] = None
    team_ahead_at_15: Optional[str] = None
    team_behind_at_15_id: Optional[str] = None
    team_behind_at_15: Optional[str] = None
    lead_amount: float
    comeback_occurred: bool
    lead_held: bool
    outcome: ComebackOutcome


class ComebackStatsData(CamelModel):
    total_games: int
    total_comebacks: int
    total_leads_held: int
    total_even_at_15: int
    comeback_rate: float
    lead_hold_rate: float
    avg_comeback_deficit: float
    avg_lead_when_held: float
    games: list[ComebackGame]


# ---------------------------------------------------------------------------
# counterPickGoldDiff
# ---------------------------------------------------------------------------


class CounterPickRecord(CamelModel):
    game_id: str
    player_name: str
    team_id: str
    team_name: str
    champ_name: str
    role: Literal["top", "mid"]
    was_counter_pick: bool
    worth_at_15: float
    enemy_worth_at_15: float
    worth_diff: float  # positive = ahead of lane opponent


class LaneCounterPickData(CamelModel):
    counter_pick_games: list[CounterPickRecord]
    counter_picked_games: list[CounterPickRecord]
    avg_worth_diff_when_counter_picking: float
    avg_worth_diff_when_counter_picked: float


class CounterPickGoldDiffData(CamelModel):
    top_lane: LaneCounterPickData
    mid_lane: LaneCounterPickData


# ---------------------------------------------------------------------------
# draftAnalysis
# ---------------------------------------------------------------------------


class DraftActionRecord(CamelModel):
    team_id: str
    team_name: str
    champ_name: str
    action: Literal["ban", "pick"]


class GameDraft(CamelModel):
    game_id: str
    game_number: int
    blue_team_id: str
    blue_team_name: str
    red_team_id: str
    red_team_name: str
    first_pick_team_id: str
    first_pick_team_name: str
    drafting_actions: list[DraftActionRecord]
    blue_bans: list[str]
    blue_picks: list[str]
    red_bans: list[str]
    red_picks: list[str]


class DraftAnalysisData(CamelModel):
    total_games: int
    games: list[GameDraft]


# ---------------------------------------------------------------------------
# banPhaseAnalysis
# ---------------------------------------------------------------------------


class BanSequence(CamelModel):
    """One team's view of one game's draft."""

    game_number: int
    is_first_pick: bool
    our_bans: list[str]
    enemy_bans: list[str]
    all_bans: list[str]
    our_first_picks: list[str]
    enemy_first_pick: Optional[str] = None
    unavailable_champs: list[str]
    our_picks_before_second_ban: list[str]
    our_second_phase_bans: list[str]


class ConditionalBan(CamelModel):
    if_enemy_bans: str
    then_we_ban: list[ChampionFrequency]
    sample_size: int


class BanPositionStats(CamelModel):
    first_pick_ban1: list[ChampionFrequency]
    first_pick_ban2: list[ChampionFrequency]
    first_pick_ban3: list[ChampionFrequency]
    second_pick_ban1: list[ChampionFrequency]
    second_pick_ban2: list[ChampionFrequency]
    second_pick_ban3: list[ChampionFrequency]


class AdaptiveBanStats(CamelModel):
    reactions_to_enemy_first_ban: list[ConditionalBan]
    reactions_to_enemy_second_ban: list[ConditionalBan]


class TeamBanPhase(CamelModel):
    team_id: str
    team_name: str
    total_games: int
    ban_sequences: list[BanSequence]
    ban_position_stats: BanPositionStats
    adaptive_ban_stats: AdaptiveBanStats
    most_common_first_bans: list[ChampionFrequency]
    priority_bans: list[ChampionFrequency]


class BanPhaseAnalysisData(CamelModel):
    teams: list[TeamBanPhase]


# ---------------------------------------------------------------------------
# classWinRate
# ---------------------------------------------------------------------------


class ClassWinRecord(CamelModel):
    game_id: str
    role: Literal["top", "jungle", "support"]
    team_id: str
    team_name: str
    player_name: str
    champion_name: str
    classes: list[str]
    has_hard_cc: bool = Field(alias="hasHardCC")
    won: bool


class ClassWinRateData(CamelModel):
    games: list[ClassWinRecord]


# ---------------------------------------------------------------------------
# Tagged results and bundle
# ---------------------------------------------------------------------------


class AnalyticResultBase(CamelModel):
    description: str
    generated_at: str = ""


class AdcJoinedGrubsResult(AnalyticResultBase):
    name: Literal["adcJoinedGrubs"] = "adcJoinedGrubs"
    description: str = "Whether the bot laner was in the grub pit when their team took the first void grub"
    data: AdcJoinedGrubsData


class SupportGrubRecallResult(AnalyticResultBase):
    name: Literal["supportGrubRecall"] = "supportGrubRecall"
    description: str = "When each support started their last recall before the first void grub"
    data: SupportGrubRecallData


class BotLaneDrakePrioResult(AnalyticResultBase):
    name: Literal["botLaneDrakePrio"] = "botLaneDrakePrio"
    description: str = "Correlation between bot lane priority (based on level advantage) and first drake control"
    data: BotLaneDrakePrioData


class PlayerWorthAt15Result(AnalyticResultBase):
    name: Literal["playerWorthAt15"] = "playerWorthAt15"
    description: str = "Gold earned by every player at 15 minutes, with inferred early recall timers"
    data: PlayerWorthAt15Data


class DrakeGoldHoldingResult(AnalyticResultBase):
    name: Literal["drakeGoldHolding"] = "drakeGoldHolding"
    description: str = "Unspent gold held by mid and bot laners when each drake dies"
    data: DrakeGoldHoldingData


class ComebackStatsResult(AnalyticResultBase):
    name: Literal["comebackStats"] = "comebackStats"
    description: str = "Whether the team ahead in gold at 15 minutes went on to win"
    data: ComebackStatsData


class CounterPickGoldDiffResult(AnalyticResultBase):
    name: Literal["counterPickGoldDiff"] = "counterPickGoldDiff"
    description: str = "Top and mid gold difference at 15 minutes when counter picking or counter picked"
    data: CounterPickGoldDiffData


class DraftAnalysisResult(AnalyticResultBase):
    name: Literal["draftAnalysis"] = "draftAnalysis"
    description: str = "Full draft order for every game in the series"
    data: DraftAnalysisData


class BanPhaseAnalysisResult(AnalyticResultBase):
    name: Literal["banPhaseAnalysis"] = "banPhaseAnalysis"
    description: str = "Analyzes ban phase patterns, sequences, and adaptive banning strategies"
    data: BanPhaseAnalysisData


class ClassWinRateResult(AnalyticResultBase):
    name: Literal["classWinRate"] = "classWinRate"
    description: str = "Win/loss by champion class for top, jungle and support"
    data: ClassWinRateData


AnalyticResult = Annotated[
    Union[
        AdcJoinedGrubsResult,
        SupportGrubRecallResult,
        BotLaneDrakePrioResult,
        PlayerWorthAt15Result,
        DrakeGoldHoldingResult,
        ComebackStatsResult,
        CounterPickGoldDiffResult,
        DraftAnalysisResult,
        BanPhaseAnalysisResult,
        ClassWinRateResult,
    ],
    Field(discriminator="name"),
]

R = TypeVar("R", bound=AnalyticResultBase)


class AnalyticsBundle(CamelModel):
    """Every analytic computed for one series."""

    series_id: str
    generated_at: str
    results: list[AnalyticResult] = Field(default_factory=list)
    # Every analytic attempted, including those that produced no result
    analytics_run: list[str] = Field(default_factory=list)

    def find(self, result_type: type[R]) -> Optional[R]:
        """Return the first result of the given kind, or None."""
        for result in self.results:
            if isinstance(result, result_type):
                return result
        return None

    @property
    def names(self) -> list[str]:
        return [result.name for result in self.results]
