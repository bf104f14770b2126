"""
Chairside Assistant: Configuration
===================================
Settings come from the environment, with a project-level .env file loaded
first when present.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

API_TITLE = "Chairside Assistant API"
API_VERSION: str = os.getenv("API_VERSION", "1.0.0")

# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("LOG_FILE", "")            # empty = console only

# ── HTTP ────────────────────────────────────────────────────────────────
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ── Chart source ────────────────────────────────────────────────────────
SEED_DEMO_PATIENTS: bool = os.getenv("SEED_DEMO_PATIENTS", "true").lower() in ("1", "true", "yes")
