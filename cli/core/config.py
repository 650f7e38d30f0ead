# cli/core/config.py
from pathlib import Path
import os

# URL of the carpool backend
BASE_URL = os.environ.get("CARPOOL_URL", "http://localhost:8000")

# Request timeout in seconds
TIMEOUT = float(os.environ.get("CARPOOL_TIMEOUT", "10"))

# Local folder for CLI data (tokens)
APP_DIR = Path(os.environ.get("CARPOOL_HOME", Path.home() / ".carpool"))

# Access and refresh token of the current session
SESSION_FILE = APP_DIR / "session.json"
