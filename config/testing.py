import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timecard_test"),
}

API_BASE_URL = "http://testserver"
REQUEST_TIMEOUT_SECONDS = 1.0
RETRY_MAX_ATTEMPTS = 3
RETRY_BASE_DELAY_MS = 0

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
