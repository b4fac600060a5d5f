import os

DATA_DIR = os.getenv("DATA_DIR", os.getcwd())
TABULAR_FILE = os.getenv("ATTENDANCE_XLSX", "attendance.xlsx")
DOCUMENT_FILE = os.getenv("ATTENDANCE_DB", "db.json")

# Expected address used when a student has no entry of their own
DEFAULT_EXPECTED_ADDRESS = os.getenv("ALLOWED_WIFI_IP", "")
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
