import os
import tempfile

DATA_DIR = os.getenv("DATA_DIR", tempfile.gettempdir())
TABULAR_FILE = "attendance.xlsx"
DOCUMENT_FILE = "db.json"

DEFAULT_EXPECTED_ADDRESS = ""
ADMIN_TOKEN = "test-admin-token"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
