import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker_test"),
}

TOKEN_EXPIRE_MINUTES = 30

API_BASE_URL = "http://testserver"
HTTP_TIMEOUT = 2.0

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
