"""Application constants."""

USER_AGENT = "volunteer-shifts/0.3 (+schedule research; contact: configured-email)"
COMMANDS = ("api", "fallback")
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20

STATE_CODES = ("NSW", "VIC", "QLD", "SA", "WA", "TAS", "NT", "ACT")
UNKNOWN_STATE = "Unknown"

# Inclusive postcode ranges, checked in order.
POSTCODE_STATE_RANGES = (
    (1000, 2999, "NSW"),
    (3000, 3999, "VIC"),
    (4000, 4999, "QLD"),
    (5000, 5999, "SA"),
    (6000, 6999, "WA"),
    (7000, 7999, "TAS"),
    (800, 999, "NT"),
    (200, 299, "ACT"),
)

# First match wins.
CITY_STATE_PRIORITY = (
    ("Hobart", "TAS"),
    ("Brisbane", "QLD"),
    ("Sydney", "NSW"),
    ("Newcastle", "NSW"),
    ("Melbourne", "VIC"),
    ("Geelong", "VIC"),
    ("Perth", "WA"),
    ("Adelaide", "SA"),
    ("Darwin", "NT"),
    ("Canberra", "ACT"),
)

SHIFT_FIELDS = (
    "service_name",
    "suburb",
    "state",
    "address",
    "lat",
    "lng",
    "day",
    "start_time",
    "end_time",
    "shift_status",
    "van_asset",
)
OPTIONAL_SHIFT_FIELDS = ("shift_status", "van_asset")

RAW_CAPTURE_FILENAME = "locations_raw.txt"

JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "location",
    "source_id",
    "attempt",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
