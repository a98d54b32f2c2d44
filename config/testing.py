import os

from werkzeug.security import generate_password_hash

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "json"
DATA_DIR = os.getenv("DATA_DIR", "data-test")
SEED_DEFAULTS = True

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_timesheet_test"),
}

AUTO_INIT_DB = False

ACCOUNTS = [
    {"username": "admin", "display_name": "Admin", "password_hash": generate_password_hash("admin-pass"), "role": "admin"},
    {"username": "majster", "display_name": "Majster", "password_hash": generate_password_hash("majster-pass"), "role": "user"},
]
