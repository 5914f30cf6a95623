"""Assorted utility helpers."""

from closewise.models import CREDIT_SCORE_TIERS


def credit_tier_for_score(score):
    """Map a numeric credit score to the highest PMI tier at or below it."""
    try:
        s = float(score)
    except (TypeError, ValueError):
        return "760"
    for tier in CREDIT_SCORE_TIERS:
        if s >= int(tier):
            return tier
    return CREDIT_SCORE_TIERS[-1]
