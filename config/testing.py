import os

SECRET_KEY = "test-secret"

STORAGE_BACKEND = "local"
DATA_DIR = os.getenv("DATA_DIR", "instance-test")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "signature_register_test"),
}

EMAIL_DOMAIN = "@cine-tv.edu.it"
ROSTER_PATH = None

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
