"""Question catalog domain types."""

from dataclasses import dataclass
from enum import StrEnum


class QuestionCategory(StrEnum):
    """Grouping used for diversity limits and filtering."""

    CONSISTENCY = "consistency"
    MACRO_BALANCE = "macro_balance"
    CALORIE_TREND = "calorie_trend"
    HYDRATION = "hydration"
    TIMING = "timing"
    NUTRIENTS = "nutrients"
    COMPARISON = "comparison"
    HIGHLIGHTS = "highlights"


class QuestionId(StrEnum):
    """Identifiers of every catalog question."""

    HIGHLIGHTS = "Q-HI-01"
    FOCUS_SUGGESTION = "Q-HI-02"
    MACRO_CONSISTENCY = "Q-CON-01"
    OUTLIERS = "Q-CON-02"
    TARGET_HITS = "Q-CON-03"
    PROTEIN = "Q-MAC-01"
    MACRO_BALANCE = "Q-MAC-02"
    FIBER = "Q-MAC-03"
    SURPLUS_DEFICIT = "Q-CAL-01"
    CALORIE_TREND = "Q-CAL-02"
    DAY_BY_DAY = "Q-CAL-03"
    HYDRATION = "Q-HYD-01"
    MEAL_COUNT = "Q-TIM-01"
    WEEKDAY_WEEKEND = "Q-TIM-02"
    NUTRIENT_ALERTS = "Q-NUT-01"
    WEEK_COMPARISON = "Q-CMP-01"
    PROTEIN_TREND = "Q-CMP-02"


@dataclass(frozen=True)
class QuestionDefinition:
    """Static metadata and eligibility gates for a weekly question."""

    id: QuestionId
    display_text: str
    short_description: str
    category: QuestionCategory
    icon: str
    is_pinned: bool
    minimum_logged_days: int
    minimum_weeks_needed: int = 1
    follow_up_ids: tuple[QuestionId, ...] = ()
    requires_prior_week: bool = False
    requires_water_data: bool = False
    requires_deficiency_data: bool = False
    requires_fiber_data: bool = False

    @property
    def is_permanently_gated(self) -> bool:
        """Return True for questions whose upstream data is never populated."""
        return self.requires_fiber_data or self.requires_deficiency_data
