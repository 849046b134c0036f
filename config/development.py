import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "local" keeps signatures in a JSON file under DATA_DIR, "mysql" uses DB_CONFIG
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")
DATA_DIR = os.getenv("DATA_DIR", "instance")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "signature_register"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

EMAIL_DOMAIN = os.getenv("EMAIL_DOMAIN", "@cine-tv.edu.it")
# Optional allow-list of eligible emails; empty disables the roster check
ROSTER_PATH = os.getenv("ROSTER_PATH") or None

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
