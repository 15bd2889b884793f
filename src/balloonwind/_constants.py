"""Internal constants shared across the library."""

SNAPSHOT_BASE_URL = "https://a.windbornesystems.com/treasure/"
WIND_BASE_URL = "https://api.open-meteo.com/v1/forecast"
USER_AGENT = "balloonwind/1 (+aiohttp)"

HOURS_HISTORY = 24
ACTIVE_MAX_OFFSET = 3
MIN_ELAPSED_HOURS = 0.1

EARTH_RADIUS_KM = 6371.0
MAX_ABS_LATITUDE = 90.0

# ------------------------------------------------------------------
# Altitude → pressure level policy
# ------------------------------------------------------------------

# Values with a smaller magnitude are kilometres, not metres.
KILOMETRE_ALTITUDE_LIMIT = 100.0
JET_STREAM_ALTITUDE_M = 11_000.0
MID_TROPOSPHERE_ALTITUDE_M = 5_000.0

# ------------------------------------------------------------------
# Match scoring
# ------------------------------------------------------------------

SCORE_MIN = 0
SCORE_MAX = 100
SCORE_PENALTY_PER_KMH = 2.0

GOOD_MATCH_MAX_DIFF_KMH = 15.0
FAIR_MATCH_MAX_DIFF_KMH = 30.0


def snapshot_url(base_url: str, hour_offset: int) -> str:
    """Return the snapshot URL for *hour_offset* (``00.json`` .. ``23.json``)."""
    return f"{base_url}{hour_offset:02d}.json"
