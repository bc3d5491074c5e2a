from pathlib import Path
import os

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]

load_dotenv(ROOT / ".env")

RUN_MODE = os.getenv("RUN_MODE", "dev").lower()
LOG_LEVEL = os.getenv("FITNESS_LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("FITNESS_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("FITNESS_API_PORT", "8000"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "FITNESS_CORS_ORIGINS",
        "http://127.0.0.1:8788,http://localhost:8788",
    ).split(",")
    if origin.strip()
]

# API result cache / request limits
RESULT_CACHE_SECONDS = int(os.getenv("FITNESS_RESULT_CACHE_SECONDS", "45"))
RESULT_CACHE_MAX_ENTRIES = int(os.getenv("FITNESS_RESULT_CACHE_MAX_ENTRIES", "256"))
MAX_ACTIVITIES = int(os.getenv("FITNESS_MAX_ACTIVITIES", "20000"))

# Error reporting
SENTRY_DSN = os.getenv("FITNESS_SENTRY_DSN")
ENVIRONMENT = os.getenv("FITNESS_ENV", os.getenv("RUN_MODE", "prod"))
RELEASE = os.getenv("FITNESS_RELEASE")
