# File: app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List
import os

load_dotenv()


class Settings(BaseSettings):
    # ---------------------------
    # Meta / Pydantic settings
    # ---------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # Ignore unexpected env vars instead of erroring
    )

    # ---------------------------
    # Database
    # ---------------------------
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./registrations.db")

    # ---------------------------
    # API / Project
    # ---------------------------
    API_V1_STR: str = os.getenv("API_V1_STR", "/api/v1")
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Event Registration Service")
    VERSION: str = "1.0.0"

    # ---------------------------
    # Environment / Logging
    # ---------------------------
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")  # development | staging | production
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # ---------------------------
    # Gateway identity propagation
    # ---------------------------
    # The gateway validates the token and forwards these headers verbatim.
    USER_ID_HEADER: str = os.getenv("USER_ID_HEADER", "X-User-Id")
    USER_ROLES_HEADER: str = os.getenv("USER_ROLES_HEADER", "X-User-Roles")
    ADMIN_ROLE: str = os.getenv("ADMIN_ROLE", "ADMIN")

    # ---------------------------
    # CORS
    # ---------------------------
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # ---------------------------
    # Derived / Convenience
    # ---------------------------
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cors_origins(self) -> List[str]:
        """Comma separated CORS_ORIGINS as a list, '*' when unset."""
        origins = [url.strip() for url in self.CORS_ORIGINS.split(",") if url.strip()]
        return origins or ["*"]


settings = Settings()
