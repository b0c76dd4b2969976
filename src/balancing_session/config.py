from datetime import timedelta
from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Persisted balancing sessions
SESSIONS_DIR = PROJECT_ROOT / "data" / "sessions"

# How long a balancing session stays open before it is considered stale.
# Informational only; reaping expired sessions is done elsewhere.
BALANCING_EXPIRY = timedelta(hours=3)
