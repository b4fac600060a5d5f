"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

SHEET_NAME = "Attendance"
SHEET_HEADERS = ("ID", "Name", "Date", "Time", "IP Address", "Status")

DEFAULT_TABULAR_FILE = "attendance.xlsx"
DEFAULT_DOCUMENT_FILE = "db.json"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

LOOPBACK_V4 = "127.0.0.1"
LOOPBACK_V6 = "::1"
V4_MAPPED_PREFIX = "::ffff:"
UNKNOWN_ADDRESS = "(unknown)"
