import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "station_compliance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

GRACE_PERIOD_MINUTES = int(os.getenv("GRACE_PERIOD_MINUTES", "20"))
EARLY_DEPARTURE_TOLERANCE_MINUTES = int(os.getenv("EARLY_DEPARTURE_TOLERANCE_MINUTES", "15"))
# "warn" logs and accepts a double in / double out, "reject" refuses it
PUNCH_SEQUENCE_POLICY = os.getenv("PUNCH_SEQUENCE_POLICY", "warn")
# Restrict punches to one station's geofences (empty = all active geofences)
STATION_ID = os.getenv("STATION_ID") or None
