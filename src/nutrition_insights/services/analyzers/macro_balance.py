"""Macro analyzers: protein sufficiency and calorie split."""

from nutrition_insights.domain.analysis import MacroBalanceAnalysis, ProteinAnalysis
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.analyzers.thresholds import is_protein_on_target
from nutrition_insights.services.statistics import (
    clamp,
    coefficient_of_variation,
    mean,
)

PROTEIN_KCAL_PER_G = 4
CARB_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

PROTEIN_TREND_MIN_DELTA_G = 5


def analyze_protein(data: WeeklyCollectedData) -> ProteinAnalysis:
    """Q-MAC-01: is my protein intake where it needs to be?"""
    logged = data.logged_days
    target = round(data.protein_target)
    if len(logged) < 3:
        return ProteinAnalysis(
            avg_protein=0,
            protein_target=target,
            avg_protein_pct=0,
            days_met_target=0,
            logged_days=len(logged),
            protein_cal_pct=0,
            trend=None,
            interestingness_score=0,
        )

    avg_protein = mean([d.protein for d in logged])
    avg_calories = mean([d.calories for d in logged])
    avg_protein_pct = (
        round(avg_protein / data.protein_target * 100) if data.protein_target > 0 else 0
    )
    days_met = sum(
        1 for d in logged if is_protein_on_target(d.protein, data.protein_target)
    )
    protein_cal_pct = (
        round(avg_protein * PROTEIN_KCAL_PER_G / avg_calories * 100)
        if avg_calories > 0
        else 0
    )

    trend = None
    if data.prior_week is not None and data.prior_week.logged_day_count > 0:
        delta = data.avg_protein - data.prior_week.avg_protein
        if abs(delta) > PROTEIN_TREND_MIN_DELTA_G:
            direction = "up" if delta > 0 else "down"
            trend = f"{direction} {abs(round(delta))}g from last week"

    # Shortfall is the interesting signal, so the score rises as adequacy falls.
    score = 0.4
    if avg_protein_pct < 85:
        score = 0.7
    if avg_protein_pct < 70:
        score = 0.9
    if trend is not None:
        score = max(score, 0.5)
    score = clamp(score, 0.3, 0.9)

    return ProteinAnalysis(
        avg_protein=round(avg_protein),
        protein_target=target,
        avg_protein_pct=avg_protein_pct,
        days_met_target=days_met,
        logged_days=len(logged),
        protein_cal_pct=protein_cal_pct,
        trend=trend,
        interestingness_score=score,
    )


def analyze_macro_balance(data: WeeklyCollectedData) -> MacroBalanceAnalysis:
    """Q-MAC-02: how balanced are my macros across the week?"""
    logged = data.logged_days
    if len(logged) < 3:
        return MacroBalanceAnalysis(
            avg_protein=0,
            avg_carbs=0,
            avg_fat=0,
            protein_pct=0,
            carbs_pct=0,
            fat_pct=0,
            most_variable_macro="",
            skewed_macro=None,
            skew_direction=None,
            interestingness_score=0,
        )

    avg_protein = mean([d.protein for d in logged])
    avg_carbs = mean([d.carbs for d in logged])
    avg_fat = mean([d.fat for d in logged])
    protein_kcal = avg_protein * PROTEIN_KCAL_PER_G
    carb_kcal = avg_carbs * CARB_KCAL_PER_G
    fat_kcal = avg_fat * FAT_KCAL_PER_G
    total_kcal = protein_kcal + carb_kcal + fat_kcal

    def share(kcal: float) -> int:
        return round(kcal / total_kcal * 100) if total_kcal > 0 else 0

    protein_pct = share(protein_kcal)
    carbs_pct = share(carb_kcal)
    fat_pct = share(fat_kcal)

    skewed_macro: str | None = None
    skew_direction: str | None = None
    if protein_pct > 50:
        skewed_macro, skew_direction = "protein", "high"
    elif carbs_pct > 60:
        skewed_macro, skew_direction = "carbs", "high"
    elif fat_pct > 45:
        skewed_macro, skew_direction = "fat", "high"

    cvs = {
        "protein": coefficient_of_variation([d.protein for d in logged]),
        "carbs": coefficient_of_variation([d.carbs for d in logged]),
        "fat": coefficient_of_variation([d.fat for d in logged]),
    }
    most_variable = max(cvs, key=cvs.__getitem__)

    score = 0.4
    if skewed_macro:
        score = 0.7
    if cvs[most_variable] > 25:
        score += 0.1
    score = clamp(score, 0.3, 0.8)

    return MacroBalanceAnalysis(
        avg_protein=round(avg_protein),
        avg_carbs=round(avg_carbs),
        avg_fat=round(avg_fat),
        protein_pct=protein_pct,
        carbs_pct=carbs_pct,
        fat_pct=fat_pct,
        most_variable_macro=most_variable,
        skewed_macro=skewed_macro,
        skew_direction=skew_direction,
        interestingness_score=score,
    )
