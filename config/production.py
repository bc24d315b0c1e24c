import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "station_compliance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

GRACE_PERIOD_MINUTES = int(os.getenv("GRACE_PERIOD_MINUTES", "20"))
EARLY_DEPARTURE_TOLERANCE_MINUTES = int(os.getenv("EARLY_DEPARTURE_TOLERANCE_MINUTES", "15"))
PUNCH_SEQUENCE_POLICY = os.getenv("PUNCH_SEQUENCE_POLICY", "warn")
STATION_ID = os.getenv("STATION_ID") or None
