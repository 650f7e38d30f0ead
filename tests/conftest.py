import os
import tempfile

# Settings and the engine are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "carpool-test-secret-0123456789")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper")
os.environ.setdefault("LOG_LEVEL", "warning")
os.environ.setdefault("CARPOOL_HOME", tempfile.mkdtemp(prefix="carpool-cli-"))
