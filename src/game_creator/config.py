import os
from pathlib import Path

PROJECT_DIR = Path(__file__).resolve().parent.parent.parent
STATIC_DIR = PROJECT_DIR / "static"

PORT = int(os.environ.get("PORT", "19876"))
MODEL = os.environ.get("MODEL", "claude-sonnet-4-20250514")
MAX_OUTPUT_TOKENS = int(os.environ.get("MAX_OUTPUT_TOKENS", "4000"))
GENERATION_TIMEOUT_SECS = float(os.environ.get("GENERATION_TIMEOUT_SECS", "600"))
ROOT_PATH = os.environ.get("ROOT_PATH", "")
SESSION_TTL_MINUTES = 30
DOWNLOAD_PREFIX = "ai-game-"
