"""
automation/constants.py

Trigger thresholds and input ranges used by the automation layer.
All numeric limits must be referenced from this module.
"""

# ── Trigger cooldown ─────────────────────────────────────────
TRIGGER_COOLDOWN_MIN: int = 5
TRIGGER_COOLDOWN_MS: int = TRIGGER_COOLDOWN_MIN * 60 * 1000

# ── Location input ranges (degrees) ──────────────────────────
LATITUDE_MIN: float = -90.0
LATITUDE_MAX: float = 90.0
LONGITUDE_MIN: float = -180.0
LONGITUDE_MAX: float = 180.0

# ── Distance threshold (meters) ──────────────────────────────
DISTANCE_DEFAULT_M: float = 200.0
DISTANCE_MIN_M: float = 0.0
DISTANCE_MAX_M: float = 100_000.0

# ── Geodesy ──────────────────────────────────────────────────
EARTH_RADIUS_M: int = 6_371_000

# Type name written by the Android app for location triggers
LEGACY_LOCATION_TRIGGER_TYPE: str = (
    "info.nightscout.androidaps.plugins.general.automation.triggers.TriggerLocation"
)
