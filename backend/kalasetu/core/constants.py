# backend/kalasetu/core/constants.py
"""
Platform-wide constants for the Kalasetu availability backend.
"""

BRAND_NAME = "Kalasetu"

# Base length of every bookable slot. Services have one fixed duration.
SLOT_DURATION_MINUTES = 60

# Booking horizon used when a provider has not configured one.
DEFAULT_ADVANCE_BOOKING_DAYS = 30

# India Standard Time, UTC+05:30.
DEFAULT_REGIONAL_UTC_OFFSET_MINUTES = 330

MINUTES_PER_DAY = 24 * 60

# Bounds enforced by the provider-facing authoring layer. Values read back
# from storage are clamped to these ranges.
MAX_BUFFER_MINUTES = 480
MAX_NOTICE_HOURS = 168
MIN_ADVANCE_BOOKING_DAYS = 1
MAX_ADVANCE_BOOKING_DAYS = 365

DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
