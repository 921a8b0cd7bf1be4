"""Configuration: env, catalog and frontend paths, broadcast timing."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of moodpoll package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so MOODPOLL_* overrides are set
load_dotenv(BASE_DIR / ".env")
DATA_DIR = BASE_DIR / "data"
SONGS_PATH = Path(os.getenv("MOODPOLL_SONGS_PATH", str(DATA_DIR / "songs.json")))
FRONTEND_DIR = Path(os.getenv("MOODPOLL_FRONTEND_DIR", str(BASE_DIR / "frontend")))

# API
API_HOST = os.getenv("MOODPOLL_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("MOODPOLL_API_PORT", os.getenv("PORT", "3000")))
API_RELOAD = os.getenv("MOODPOLL_RELOAD", "0").lower() in ("1", "true", "yes")

# Live updates
BROADCAST_INTERVAL_SEC = float(os.getenv("MOODPOLL_BROADCAST_INTERVAL_SEC", "1.0"))
KEEPALIVE_INTERVAL_SEC = float(os.getenv("MOODPOLL_KEEPALIVE_INTERVAL_SEC", "15.0"))
# Pending messages per listener before it is treated as stalled and dropped
CHANNEL_QUEUE_SIZE = int(os.getenv("MOODPOLL_CHANNEL_QUEUE_SIZE", "100"))
