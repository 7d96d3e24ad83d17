from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # ─── Application ───────────────────────────────────────────────────────────
    APP_NAME:   str  = "Room Reservation System"
    APP_ENV:    str  = "development"
    APP_DEBUG:  bool = True
    APP_HOST:   str  = "0.0.0.0"
    APP_PORT:   int  = 3000
    API_PREFIX: str  = "/api/v1"

    # ─── Database ──────────────────────────────────────────────────────────────
    DATABASE_URL:             str  = "sqlite:///./data/reservations.db"
    DATABASE_POOL_SIZE:       int  = 10
    DATABASE_MAX_OVERFLOW:    int  = 20
    DATABASE_POOL_TIMEOUT:    int  = 30
    DATABASE_ECHO:            bool = False
    # How long a request waits on another transaction's lock before failing
    DATABASE_BUSY_TIMEOUT_MS: int  = 5000
    SEED_SAMPLE_DATA:         bool = True

    # ─── Admin ─────────────────────────────────────────────────────────────────
    # Empty token leaves catalog management open
    ADMIN_TOKEN: str = ""

    # ─── Logging ───────────────────────────────────────────────────────────────
    LOG_LEVEL:       str = "INFO"
    LOG_BUFFER_SIZE: int = 100

    # ─── CORS ──────────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


settings = Settings()
