import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings, read from the environment.

    Each value can be overridden with a keyword argument, which is how the
    test suite builds isolated applications:

        Settings(DATABASE_URL="sqlite://", SECRET_KEY="test")
    """

    def __init__(self, **overrides):
        # -------------------------------------------------------
        # Project
        # -------------------------------------------------------
        self.PROJECT_NAME: str = "Family Directory API"
        self.ENV: str = os.getenv("ENV", "dev")

        # -------------------------------------------------------
        # Database
        # -------------------------------------------------------
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            "sqlite:///./family_directory.db"
        )

        # -------------------------------------------------------
        # Sessions (signed cookie -> server-side session row)
        # -------------------------------------------------------
        self.SECRET_KEY: str = os.getenv(
            "SECRET_KEY",
            "supersecretlocalkey123"   # Only used for local dev
        )
        self.ALGORITHM: str = "HS256"

        # 7 days by default
        self.SESSION_EXPIRE_MINUTES: int = int(
            os.getenv("SESSION_EXPIRE_MINUTES", 60 * 24 * 7)
        )
        self.SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "session")
        self.BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", 12))
        self.SESSION_COOKIE_SECURE: bool = _env_bool(
            "SESSION_COOKIE_SECURE",
            self.ENV == "prod",
        )

        # -------------------------------------------------------
        # HTTP
        # -------------------------------------------------------
        self.CORS_ORIGINS: list[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # -------------------------------------------------------
        # Logging
        # -------------------------------------------------------
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_JSON: bool = _env_bool("LOG_JSON", self.ENV == "prod")

        # -------------------------------------------------------
        # Bootstrap admin (optional)
        # -------------------------------------------------------
        self.ADMIN_USERNAME: Optional[str] = os.getenv("ADMIN_USERNAME")
        self.ADMIN_PASSWORD: Optional[str] = os.getenv("ADMIN_PASSWORD")
        self.ADMIN_INVITE_EMAIL: Optional[str] = os.getenv("ADMIN_INVITE_EMAIL")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)

        # Hosted Postgres URLs use postgres:// but SQLAlchemy needs postgresql://
        if self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace(
                "postgres://", "postgresql://", 1
            )
