"""Consistency analyzers: macro variation, outlier days and target hits."""

from nutrition_insights.domain.analysis import (
    ConsistencyAnalysis,
    ConsistencyTier,
    OutlierAnalysis,
    OutlierDay,
    TargetHitAnalysis,
)
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.analyzers.thresholds import (
    is_calorie_on_target,
    is_protein_on_target,
)
from nutrition_insights.services.statistics import (
    clamp,
    coefficient_of_variation,
    mean,
    standard_deviation,
)

OUTLIER_SD_MULTIPLIER = 1.5


def analyze_macro_consistency(data: WeeklyCollectedData) -> ConsistencyAnalysis:
    """Q-CON-01: how consistent were my macros this week?"""
    logged = data.logged_days
    if len(logged) < 3:
        return ConsistencyAnalysis(
            calorie_cv=0,
            protein_cv=0,
            carb_cv=0,
            fat_cv=0,
            most_consistent_macro="",
            least_consistent_macro="",
            overall_consistency="variable",
            logged_days=len(logged),
            interestingness_score=0,
        )

    cvs = {
        "calories": coefficient_of_variation([d.calories for d in logged]),
        "protein": coefficient_of_variation([d.protein for d in logged]),
        "carbs": coefficient_of_variation([d.carbs for d in logged]),
        "fat": coefficient_of_variation([d.fat for d in logged]),
    }
    most_consistent = min(cvs, key=cvs.__getitem__)
    least_consistent = max(cvs, key=cvs.__getitem__)
    overall = _consistency_tier(mean(list(cvs.values())))

    spread = cvs[least_consistent] - cvs[most_consistent]
    score = 0.4
    if spread > 10:
        score = 0.6
    if spread > 20:
        score = 0.8
    if len(logged) >= 5:
        score += 0.1
    score = clamp(score, 0.3, 1.0)

    return ConsistencyAnalysis(
        calorie_cv=round(cvs["calories"], 1),
        protein_cv=round(cvs["protein"], 1),
        carb_cv=round(cvs["carbs"], 1),
        fat_cv=round(cvs["fat"], 1),
        most_consistent_macro=most_consistent,
        least_consistent_macro=least_consistent,
        overall_consistency=overall,
        logged_days=len(logged),
        interestingness_score=score,
    )


def analyze_outliers(data: WeeklyCollectedData) -> OutlierAnalysis:
    """Q-CON-02: which days threw off my averages?"""
    logged = data.logged_days
    calories = [d.calories for d in logged]
    week_mean = mean(calories)
    if len(logged) < 4:
        return OutlierAnalysis(
            week_mean=round(week_mean),
            week_std_dev=0,
            outlier_days=[],
            adjusted_mean=round(week_mean),
            interestingness_score=0,
        )

    std_dev = standard_deviation(calories)
    threshold = OUTLIER_SD_MULTIPLIER * std_dev
    outliers: list[OutlierDay] = []
    kept: list[float] = []
    for day in logged:
        delta = day.calories - week_mean
        if abs(delta) > threshold:
            outliers.append(
                OutlierDay(
                    date=day.date,
                    day_name=day.day_name,
                    calories=round(day.calories),
                    deviation_pct=round(delta / week_mean * 100) if week_mean else 0,
                    direction="high" if delta > 0 else "low",
                )
            )
        else:
            kept.append(day.calories)

    adjusted_mean = mean(kept) if kept else week_mean

    # 1-2 outliers make a story; none is flat, many is just noise.
    if not outliers:
        score = 0.1
    elif len(outliers) <= 2:
        score = 0.8
    else:
        score = 0.5

    return OutlierAnalysis(
        week_mean=round(week_mean),
        week_std_dev=round(std_dev),
        outlier_days=outliers,
        adjusted_mean=round(adjusted_mean),
        interestingness_score=score,
    )


def analyze_target_hits(data: WeeklyCollectedData) -> TargetHitAnalysis:
    """Q-CON-03: how many days did I hit my targets this week?"""
    logged = data.logged_days
    calorie_hits = sum(
        1 for d in logged if is_calorie_on_target(d.calories, data.calorie_target)
    )
    protein_hits = sum(
        1 for d in logged if is_protein_on_target(d.protein, data.protein_target)
    )
    count = max(len(logged), 1)
    calorie_hit_pct = round(calorie_hits / count * 100)
    protein_hit_pct = round(protein_hits / count * 100)

    score = 0.6
    if calorie_hit_pct >= 85 or calorie_hit_pct < 40:
        score = 0.7
    if len(logged) < 4:
        score = 0.2

    return TargetHitAnalysis(
        logged_days=len(logged),
        calorie_hit_days=calorie_hits,
        protein_hit_days=protein_hits,
        calorie_hit_pct=calorie_hit_pct,
        protein_hit_pct=protein_hit_pct,
        interestingness_score=score,
    )


def _consistency_tier(mean_cv: float) -> ConsistencyTier:
    if mean_cv < 10:
        return "very_consistent"
    if mean_cv < 20:
        return "fairly_consistent"
    if mean_cv < 35:
        return "variable"
    return "quite_variable"
