"""Combo-driven scaling of the tuning profile."""

from .config import COMBO_TIERS
from .models import TuningProfile
from .utils import round_half_up


def get_tier_multipliers(combo_streak: int) -> dict | None:
    """Return the multipliers of the highest tier reached, or None below every tier."""
    for min_streak, multipliers in COMBO_TIERS:
        if combo_streak >= min_streak:
            return multipliers
    return None


def recompute_tuning(base: TuningProfile, combo_streak: int) -> TuningProfile:
    """Derive the live tuning from the base profile and the current combo streak.

    Always starts from base, so calling it repeatedly never compounds multipliers.
    """
    multipliers = get_tier_multipliers(combo_streak)
    if multipliers is None:
        return base.copy()
    scaled = base.copy()
    for name, factor in multipliers.items():
        setattr(scaled, name, max(1, round_half_up(getattr(base, name) * factor)))
    return scaled
