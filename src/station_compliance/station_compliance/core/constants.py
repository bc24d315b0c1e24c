"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000
GRACE_PERIOD_MINUTES = 20
EARLY_DEPARTURE_TOLERANCE_MINUTES = 15
DEFAULT_USER_VIOLATIONS_LIMIT = 20
DEFAULT_RECENT_VIOLATIONS_LIMIT = 50
MAX_LISTING_LIMIT = 200

# Floating point slack for "exactly on the circle edge".
BOUNDARY_TOLERANCE_M = 1e-6
