"""Thresholds shared by several analyzers."""

# Day-level calorie band, as a percentage of target. One band is used by the
# outlier, day-by-day, target-hit and highlight logic.
ON_TARGET_LOW_PCT = 85
ON_TARGET_HIGH_PCT = 115
SIGNIFICANTLY_UNDER_PCT = 70
SIGNIFICANTLY_OVER_PCT = 130

PROTEIN_HIT_TOLERANCE_G = 10


def is_calorie_on_target(calories: float, target: float) -> bool:
    """Return True when calories fall inside the on-target band."""
    if target <= 0:
        return False
    return (
        target * ON_TARGET_LOW_PCT / 100
        <= calories
        <= target * ON_TARGET_HIGH_PCT / 100
    )


def is_protein_on_target(protein: float, target: float) -> bool:
    """Return True when protein reaches the target minus the tolerance."""
    return protein >= target - PROTEIN_HIT_TOLERANCE_G
