"""
insulin/constants.py

Insulin model constants used by the oref curves.
All pharmacokinetic numeric values must be referenced from this module.
"""

# ── Duration of insulin action (hours) ───────────────────────
MIN_DIA: float = 5.0

# ── Peak activity times (minutes) ────────────────────────────
RAPID_ACTING_PEAK_MIN: int = 75
ULTRA_RAPID_ACTING_PEAK_MIN: int = 55
FREE_PEAK_MIN: int = 35
FREE_PEAK_MAX: int = 120

# ── Short-DIA notification rate limit ────────────────────────
SHORT_DIA_WARN_INTERVAL_MS: int = 60 * 1000
