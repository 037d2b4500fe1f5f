import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "potw_test"),
}

ALLOWED_EMAIL_DOMAIN = "usehorizon.ai"

DB_RETRY_ATTEMPTS = 2
DB_RETRY_MAX_WAIT = 0.0
DB_COOLDOWN_SECONDS = 1.0

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
