"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NT_DAILY_CEILING_HOURS = 7.5
HOURS_PER_DAY = 24.0
DURATION_DECIMALS = 2
VARIANCE_TOLERANCE = 0.01

# Default rate table (camelCase keys match the JSON rate config shape).
DEFAULT_RATES = {
    "siteNormal": 160.0,
    "siteOvertime": 190.0,
    "weekend": 210.0,
    "publicHoliday": 235.0,
    "officeReporting": 160.0,
    "travel": 120.0,
    "travelOvertime": 120.0,
    "travelCharge": 1.30,
    "travelChargeExBrisbane": 0.0,
    "vehicle": 120.0,
    "perDiem": 90.0,
    "standardDayRate": 2040.0,
    "weekendDayRate": 2520.0,
}
