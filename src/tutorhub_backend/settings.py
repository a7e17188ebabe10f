import os
import threading

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")

        # Force disable debug info in API responses (overrides DEBUG_MODE)
        self.DISABLE_API_DEBUG_INFO = os.environ.get("DISABLE_API_DEBUG_INFO", "false").lower() in ["true", "1", "yes", "on"]

        # Used as prefix for the alert headers sent with entity changes
        self.APPLICATION_NAME = os.environ.get("APPLICATION_NAME", "tutorhubApp")

        # Full SQLAlchemy URL; when unset the POSTGRES_* variables are used
        self.DATABASE_URL = os.environ.get("DATABASE_URL", None)

        self.TEAM_SEARCH_RATE_LIMIT = os.environ.get("TEAM_SEARCH_RATE_LIMIT", "60/minute")

        # Initial administrator, created on startup when missing
        self.ADMIN_LOGIN = os.environ.get("ADMIN_LOGIN", None)
        self.ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", None)

        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000").split(",")
            if origin.strip()
        ]

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

    @property
    def include_debug_info(self) -> bool:
        return (
            self.DEBUG_MODE.lower() in ['dev', 'development', 'local']
            and not self.DISABLE_API_DEBUG_INFO
        )

settings = BackendSettings()
