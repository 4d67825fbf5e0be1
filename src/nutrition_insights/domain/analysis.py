"""Analysis result models, one per active weekly question."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ConsistencyTier = Literal[
    "very_consistent", "fairly_consistent", "variable", "quite_variable"
]
DayClassification = Literal[
    "on_target",
    "slightly_over",
    "significantly_over",
    "slightly_under",
    "significantly_under",
    "no_data",
]
ChangeDirection = Literal["up", "down", "same"]


class _Analysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    interestingness_score: float = Field(ge=0.0, le=1.0)


class ConsistencyAnalysis(_Analysis):
    """Day-to-day variation of each macro."""

    question_id: Literal["Q-CON-01"] = "Q-CON-01"
    calorie_cv: float
    protein_cv: float
    carb_cv: float
    fat_cv: float
    most_consistent_macro: str
    least_consistent_macro: str
    overall_consistency: ConsistencyTier
    logged_days: int


class OutlierDay(BaseModel):
    """A day whose calories sit far from the weekly mean."""

    model_config = ConfigDict(frozen=True)

    date: str
    day_name: str
    calories: int
    deviation_pct: int
    direction: Literal["high", "low"]


class OutlierAnalysis(_Analysis):
    """Days that shifted the weekly calorie average."""

    question_id: Literal["Q-CON-02"] = "Q-CON-02"
    week_mean: int
    week_std_dev: int
    outlier_days: list[OutlierDay]
    adjusted_mean: int


class TargetHitAnalysis(_Analysis):
    """Calorie and protein target adherence."""

    question_id: Literal["Q-CON-03"] = "Q-CON-03"
    logged_days: int
    calorie_hit_days: int
    protein_hit_days: int
    calorie_hit_pct: int
    protein_hit_pct: int


class ProteinAnalysis(_Analysis):
    """Protein intake against the daily target."""

    question_id: Literal["Q-MAC-01"] = "Q-MAC-01"
    avg_protein: int
    protein_target: int
    avg_protein_pct: int
    days_met_target: int
    logged_days: int
    protein_cal_pct: int
    trend: str | None


class MacroBalanceAnalysis(_Analysis):
    """Calorie share of each macro."""

    question_id: Literal["Q-MAC-02"] = "Q-MAC-02"
    avg_protein: int
    avg_carbs: int
    avg_fat: int
    protein_pct: int
    carbs_pct: int
    fat_pct: int
    most_variable_macro: str
    skewed_macro: str | None
    skew_direction: str | None


class SurplusDeficitAnalysis(_Analysis):
    """Weekly energy balance against the calorie target."""

    question_id: Literal["Q-CAL-01"] = "Q-CAL-01"
    total_intake: int
    total_target: int
    daily_avg_intake: int
    daily_avg_target: int
    weekly_delta: int
    daily_delta: int
    delta_pct: int
    is_deficit: bool
    is_surplus: bool
    is_neutral: bool
    aligns_with_goal: bool
    logged_days: int


class CalorieTrendAnalysis(_Analysis):
    """Regression of weekly calorie averages."""

    question_id: Literal["Q-CAL-02"] = "Q-CAL-02"
    current_week_avg: int
    prior_week_avg: int
    two_weeks_ago_avg: int | None
    trend_direction: str
    trend_magnitude: int
    trend_strength: str


class DayClassificationEntry(BaseModel):
    """Classification of one day's calories against target."""

    model_config = ConfigDict(frozen=True)

    day_name: str
    calories: int
    classification: DayClassification
    percent: int


class DayByDayAnalysis(_Analysis):
    """Shape of the week's calories day by day."""

    question_id: Literal["Q-CAL-03"] = "Q-CAL-03"
    days: list[DayClassificationEntry]
    calorie_target: int
    pattern: str | None


class HydrationAnalysis(_Analysis):
    """Water intake against the daily goal."""

    question_id: Literal["Q-HYD-01"] = "Q-HYD-01"
    avg_water: int
    water_target: int
    avg_water_pct: int
    days_met_target: int
    logged_days: int
    best_day: str
    best_day_amount: int
    worst_day: str
    worst_day_amount: int
    consistency: float


class MealCountAnalysis(_Analysis):
    """Meals per day and their relation to calories."""

    question_id: Literal["Q-TIM-01"] = "Q-TIM-01"
    avg_meals: float
    min_meals: int
    max_meals: int
    total_meals: int
    meal_cal_correlation: str | None


class WeekdayWeekendAnalysis(_Analysis):
    """Weekday versus weekend intake."""

    question_id: Literal["Q-TIM-02"] = "Q-TIM-02"
    weekday_avg_cal: int
    weekend_avg_cal: int
    weekend_effect: int
    weekday_avg_protein: int
    weekend_avg_protein: int
    weekday_avg_meals: float
    weekend_avg_meals: float


class MetricComparison(BaseModel):
    """Change of one metric between this week and last week."""

    model_config = ConfigDict(frozen=True)

    metric: str
    this_week: int
    last_week: int
    change_pct: int
    direction: ChangeDirection


class WeekComparisonAnalysis(_Analysis):
    """Week-over-week changes."""

    question_id: Literal["Q-CMP-01"] = "Q-CMP-01"
    comparisons: list[MetricComparison]
    biggest_improvement: str
    biggest_change: str


class WeeklyProteinAverage(BaseModel):
    """Average protein for one labelled week."""

    model_config = ConfigDict(frozen=True)

    week_label: str
    avg_protein: int


class ProteinTrendAnalysis(_Analysis):
    """Protein direction across up to three weeks."""

    question_id: Literal["Q-CMP-02"] = "Q-CMP-02"
    weekly_averages: list[WeeklyProteinAverage]
    trend_direction: str
    trend_magnitude: int
    protein_target: int


class HighlightsAnalysis(_Analysis):
    """Wins worth celebrating."""

    question_id: Literal["Q-HI-01"] = "Q-HI-01"
    highlights: list[str]
    highlight_count: int


class FocusSuggestionAnalysis(_Analysis):
    """The single most useful area to work on next week."""

    question_id: Literal["Q-HI-02"] = "Q-HI-02"
    focus_area: str
    current_level: str
    suggestion: str
    rationale: str


AnalysisResult = Annotated[
    ConsistencyAnalysis
    | OutlierAnalysis
    | TargetHitAnalysis
    | ProteinAnalysis
    | MacroBalanceAnalysis
    | SurplusDeficitAnalysis
    | CalorieTrendAnalysis
    | DayByDayAnalysis
    | HydrationAnalysis
    | MealCountAnalysis
    | WeekdayWeekendAnalysis
    | WeekComparisonAnalysis
    | ProteinTrendAnalysis
    | HighlightsAnalysis
    | FocusSuggestionAnalysis,
    Field(discriminator="question_id"),
]
