import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Logging (format and level come from LOG_FORMAT / LOG_LEVEL)
    LOG_DIR = os.environ.get("LOG_DIR", "")

    # Games-played counter; empty URL keeps the count in memory only.
    COUNTER_URL = os.environ.get("COUNTER_URL", "")
    COUNTER_TIMEOUT_SEC = float(os.environ.get("COUNTER_TIMEOUT_SEC", "3"))

    # Game
    MAX_PLAYERS = int(os.environ.get("MAX_PLAYERS", "8"))
    MIN_PLAYERS = int(os.environ.get("MIN_PLAYERS", "3"))
    JESTER_MIN_PLAYERS = int(os.environ.get("JESTER_MIN_PLAYERS", "4"))
