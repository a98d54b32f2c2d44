import os

from werkzeug.security import generate_password_hash

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "json" keeps everything in DATA_DIR; "mysql" uses DB_CONFIG.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
DATA_DIR = os.getenv("DATA_DIR", "data")
SEED_DEFAULTS = bool(int(os.getenv("SEED_DEFAULTS", "1")))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_timesheet"),
}

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

ACCOUNTS = [
    {
        "username": "Štefan Kukučka",
        "display_name": "Štefan Kukučka",
        "password_hash": generate_password_hash(os.getenv("ADMIN_PASSWORD", "admin123")),
        "role": "admin",
    },
    {
        "username": "majster",
        "display_name": "Majster",
        "password_hash": generate_password_hash(os.getenv("FOREMAN_PASSWORD", "majster123")),
        "role": "user",
    },
]
