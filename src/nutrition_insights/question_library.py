"""Weekly question catalog."""

from nutrition_insights.domain.questions import (
    QuestionCategory,
    QuestionDefinition,
    QuestionId,
)

QUESTION_LIBRARY: tuple[QuestionDefinition, ...] = (
    QuestionDefinition(
        id=QuestionId.HIGHLIGHTS,
        display_text="What went well this week?",
        short_description="Your wins and positive patterns",
        category=QuestionCategory.HIGHLIGHTS,
        icon="star-outline",
        is_pinned=True,
        minimum_logged_days=2,
        follow_up_ids=(QuestionId.FOCUS_SUGGESTION, QuestionId.TARGET_HITS),
    ),
    QuestionDefinition(
        id=QuestionId.FOCUS_SUGGESTION,
        display_text="What's one thing I could focus on next week?",
        short_description="Actionable area for improvement",
        category=QuestionCategory.HIGHLIGHTS,
        icon="locate-outline",
        is_pinned=True,
        minimum_logged_days=2,
        follow_up_ids=(QuestionId.HIGHLIGHTS, QuestionId.PROTEIN),
    ),
    QuestionDefinition(
        id=QuestionId.MACRO_CONSISTENCY,
        display_text="How consistent were my macros this week?",
        short_description="Day-to-day macro variation",
        category=QuestionCategory.CONSISTENCY,
        icon="bar-chart-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.OUTLIERS, QuestionId.MACRO_BALANCE),
    ),
    QuestionDefinition(
        id=QuestionId.OUTLIERS,
        display_text="Which days threw off my averages?",
        short_description="Outlier days that shifted your numbers",
        category=QuestionCategory.CONSISTENCY,
        icon="trending-up-outline",
        is_pinned=False,
        minimum_logged_days=4,
        follow_up_ids=(QuestionId.MACRO_CONSISTENCY, QuestionId.DAY_BY_DAY),
    ),
    QuestionDefinition(
        id=QuestionId.TARGET_HITS,
        display_text="How many days did I hit my targets this week?",
        short_description="Target adherence across the week",
        category=QuestionCategory.CONSISTENCY,
        icon="checkmark-circle-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.SURPLUS_DEFICIT, QuestionId.PROTEIN),
    ),
    QuestionDefinition(
        id=QuestionId.PROTEIN,
        display_text="Is my protein intake where it needs to be?",
        short_description="Protein vs your daily target",
        category=QuestionCategory.MACRO_BALANCE,
        icon="barbell-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.MACRO_BALANCE, QuestionId.PROTEIN_TREND),
    ),
    QuestionDefinition(
        id=QuestionId.MACRO_BALANCE,
        display_text="How balanced are my macros across the week?",
        short_description="Protein, carb, and fat split",
        category=QuestionCategory.MACRO_BALANCE,
        icon="scale-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.PROTEIN, QuestionId.MACRO_CONSISTENCY),
    ),
    QuestionDefinition(
        id=QuestionId.FIBER,
        display_text="Am I eating enough fiber?",
        short_description="Fiber intake vs recommendations",
        category=QuestionCategory.MACRO_BALANCE,
        icon="leaf-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.MACRO_BALANCE,),
        # Fiber is not populated by the logging pipeline yet.
        requires_fiber_data=True,
    ),
    QuestionDefinition(
        id=QuestionId.SURPLUS_DEFICIT,
        display_text="Am I in a caloric surplus or deficit this week?",
        short_description="Weekly energy balance overview",
        category=QuestionCategory.CALORIE_TREND,
        icon="flame-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.CALORIE_TREND, QuestionId.DAY_BY_DAY),
    ),
    QuestionDefinition(
        id=QuestionId.CALORIE_TREND,
        display_text="Is my calorie intake trending up or down?",
        short_description="Multi-week calorie direction",
        category=QuestionCategory.CALORIE_TREND,
        icon="trending-down-outline",
        is_pinned=False,
        minimum_logged_days=3,
        minimum_weeks_needed=2,
        follow_up_ids=(QuestionId.SURPLUS_DEFICIT, QuestionId.WEEK_COMPARISON),
        requires_prior_week=True,
    ),
    QuestionDefinition(
        id=QuestionId.DAY_BY_DAY,
        display_text="What does my calorie pattern look like day by day?",
        short_description="Daily calorie breakdown",
        category=QuestionCategory.CALORIE_TREND,
        icon="calendar-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.OUTLIERS, QuestionId.WEEKDAY_WEEKEND),
    ),
    QuestionDefinition(
        id=QuestionId.HYDRATION,
        display_text="How was my water intake this week?",
        short_description="Hydration vs your daily goal",
        category=QuestionCategory.HYDRATION,
        icon="water-outline",
        is_pinned=False,
        minimum_logged_days=2,
        follow_up_ids=(QuestionId.TARGET_HITS,),
        requires_water_data=True,
    ),
    QuestionDefinition(
        id=QuestionId.MEAL_COUNT,
        display_text="How many meals am I eating per day?",
        short_description="Average meals and variation",
        category=QuestionCategory.TIMING,
        icon="restaurant-outline",
        is_pinned=False,
        minimum_logged_days=3,
        follow_up_ids=(QuestionId.WEEKDAY_WEEKEND, QuestionId.DAY_BY_DAY),
    ),
    QuestionDefinition(
        id=QuestionId.WEEKDAY_WEEKEND,
        display_text="Are weekdays and weekends different for me?",
        short_description="Weekday vs weekend eating patterns",
        category=QuestionCategory.TIMING,
        icon="calendar-outline",
        is_pinned=False,
        minimum_logged_days=4,
        follow_up_ids=(QuestionId.MEAL_COUNT, QuestionId.OUTLIERS),
    ),
    QuestionDefinition(
        id=QuestionId.NUTRIENT_ALERTS,
        display_text="Are there nutrients I've been consistently low on?",
        short_description="Micronutrient gaps in your diet",
        category=QuestionCategory.NUTRIENTS,
        icon="medkit-outline",
        is_pinned=False,
        minimum_logged_days=5,
        follow_up_ids=(QuestionId.MACRO_BALANCE,),
        # Deficiency data is not populated by the logging pipeline yet.
        requires_deficiency_data=True,
    ),
    QuestionDefinition(
        id=QuestionId.WEEK_COMPARISON,
        display_text="How does this week compare to last week?",
        short_description="Week-over-week changes",
        category=QuestionCategory.COMPARISON,
        icon="repeat-outline",
        is_pinned=False,
        minimum_logged_days=4,
        minimum_weeks_needed=2,
        follow_up_ids=(QuestionId.PROTEIN_TREND, QuestionId.CALORIE_TREND),
        requires_prior_week=True,
    ),
    QuestionDefinition(
        id=QuestionId.PROTEIN_TREND,
        display_text="Is my protein intake trending up or down over recent weeks?",
        short_description="Multi-week protein direction",
        category=QuestionCategory.COMPARISON,
        icon="trending-up-outline",
        is_pinned=False,
        minimum_logged_days=4,
        minimum_weeks_needed=3,
        follow_up_ids=(QuestionId.PROTEIN, QuestionId.WEEK_COMPARISON),
        requires_prior_week=True,
    ),
)

_BY_ID = {definition.id: definition for definition in QUESTION_LIBRARY}


def get_question_by_id(question_id: str) -> QuestionDefinition | None:
    """Return a question definition by id."""
    try:
        return _BY_ID.get(QuestionId(question_id))
    except ValueError:
        return None


def get_questions_by_category(
    category: QuestionCategory,
) -> list[QuestionDefinition]:
    """Return all questions in a category, in catalog order."""
    return [q for q in QUESTION_LIBRARY if q.category == category]


def get_active_question_ids() -> list[QuestionId]:
    """Return ids of questions that are not permanently gated."""
    return [q.id for q in QUESTION_LIBRARY if not q.is_permanently_gated]


def catalog_position(question_id: str) -> int:
    """Return a question's index in the catalog, or the catalog size if unknown."""
    for index, definition in enumerate(QUESTION_LIBRARY):
        if definition.id == question_id:
            return index
    return len(QUESTION_LIBRARY)
