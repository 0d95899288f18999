# config.py
import os
from pathlib import Path


def _csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 8080))

ROOT_DIR = Path(__file__).resolve().parent.parent

PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", ROOT_DIR / "public"))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", PUBLIC_DIR / "lighthouse-reports"))

# ---------- lighthouse ----------
LIGHTHOUSE_BIN = os.getenv("LIGHTHOUSE_BIN", "lighthouse")
AUDIT_CATEGORIES = _csv(os.getenv("AUDIT_CATEGORIES", "accessibility"))
CHROME_FLAGS = _csv(os.getenv("CHROME_FLAGS", "--headless,--no-sandbox"))
MAX_WAIT_FOR_LOAD = int(os.getenv("MAX_WAIT_FOR_LOAD", 60000))

# unset keeps every URL on the AI path, whatever its score
SKIP_PASSING_SCORE = _optional_int(os.getenv("SKIP_PASSING_SCORE"))

# ---------- gemini ----------
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", 120))

# ---------- redis (optional remediation cache) ----------
REDIS_URL = os.getenv("REDIS_URL")
CACHE_TTL = int(os.getenv("CACHE_TTL", 3600))  # seconds

# used when POST /runaudit arrives without a body
FALLBACK_URLS = [
    "https://workspace.google.com/intl/en_au/lp/gmail-au/index.html",
    "https://workspace.google.com/intl/en_in/lp/gmail-in/index.html",
    "https://workspace.google.com/intl/es_ALL/",
]
