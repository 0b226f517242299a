"""
Application configuration from environment variables.

All settings have sensible defaults for local development.
A .env file in the project root is loaded automatically (if present).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading any env vars
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# ── Environment ───────────────────────────────────────────────────────────

ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info").upper()

# ── Server ────────────────────────────────────────────────────────────────

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))
API_RELOAD: bool = os.getenv("API_RELOAD", "false").lower() == "true"

# ── Paths ─────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Read-only course reference data
COURSES_PATH: str = os.getenv("COURSES_PATH", str(DATA_DIR / "courses.json"))
FEE_GROUPS_PATH: str = os.getenv("FEE_GROUPS_PATH", str(DATA_DIR / "fee_groups.json"))

# ── Slot cache ────────────────────────────────────────────────────────────

# "memory" keeps entries in-process, "sqlite" persists them across restarts.
CACHE_BACKEND: str = os.getenv("CACHE_BACKEND", "memory").lower()
CACHE_DB_PATH: str = os.getenv("CACHE_DB_PATH", str(DATA_DIR / "slot_cache.db"))

# Freshness window: cached results older than this are treated as a miss.
CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL_SECONDS", "600"))

# How often expired entries are physically removed from the store.
CACHE_PRUNE_INTERVAL: float = float(os.getenv("CACHE_PRUNE_INTERVAL", "300"))

# ── Upstream requests ─────────────────────────────────────────────────────

# Per-request network timeout for provider HTTP calls.
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "8"))

# Hard ceiling on one course's whole resolution (may span several requests).
COURSE_TIMEOUT_SECONDS: float = float(os.getenv("COURSE_TIMEOUT_SECONDS", "9"))

# ── Rate limiting ─────────────────────────────────────────────────────────

SEARCH_RATE_LIMIT: str = os.getenv("SEARCH_RATE_LIMIT", "30/minute")
