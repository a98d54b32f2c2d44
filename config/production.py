import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
DATA_DIR = os.getenv("DATA_DIR", "/var/lib/site-timesheet")
SEED_DEFAULTS = bool(int(os.getenv("SEED_DEFAULTS", "0")))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_timesheet"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# JSON list of {"username", "display_name", "password_hash", "role"}; hashes from
# werkzeug.security.generate_password_hash.
ACCOUNTS = json.loads(os.getenv("ACCOUNTS_JSON", "[]"))
