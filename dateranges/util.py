"""Utility constants and defaults for dateranges.

Step units and period names are the strings accepted throughout the API;
durations are expressed in seconds.
"""

DAY = 86400

# Accepted textual date formats, tried in order
DATE_FORMATS = ("%m-%d-%Y", "%Y-%m-%d")

# Units accepted by next/prev/step, mapped to relativedelta keywords and a multiplier
STEP_UNITS = {
    "day": ("days", 1),
    "week": ("weeks", 1),
    "month": ("months", 1),
    "quarter": ("months", 3),
    "year": ("years", 1),
}

DEFAULT_STEP = "day"

PERIODS = ("day", "week", "american_week", "month", "quarter", "year")
