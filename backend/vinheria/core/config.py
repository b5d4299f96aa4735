from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Database connection string - can be overridden via .env file
    # SQLite file next to the process by default; any SQLAlchemy URL works
    DATABASE_URL: str = "sqlite:///./data.db"

    # Security settings
    # SESSION_SECRET signs the session cookie - change it in production
    # If compromised, attackers can forge cookies wrapping guessed handles
    SESSION_SECRET: str = "troque-este-segredo"
    ALGORITHM: str = "HS256"  # Cookie signing algorithm - must match in security.py
    SESSION_TTL_MINUTES: int = 60  # Fixed session lifetime, never extended
    SESSION_COOKIE_NAME: str = "vinheria_session"
    SESSION_COOKIE_SECURE: bool = False  # Set True behind HTTPS

    # Shared second factor required on every login
    # Leaving it unset makes every login attempt fail
    ACCESS_TOKEN: Optional[str] = None

    # bcrypt cost factor for new password hashes
    BCRYPT_ROUNDS: int = 10

    # How often the scheduler drops expired sessions from memory
    SESSION_CLEANUP_MINUTES: int = 15

    # Where unauthenticated requests are sent
    LOGIN_URL: str = "/login"

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    def get_access_token(self) -> Optional[str]:
        """Return the configured access token, treating blank values as unset"""
        if self.ACCESS_TOKEN is None or not self.ACCESS_TOKEN.strip():
            return None
        return self.ACCESS_TOKEN

    class Config:
        # Load settings from .env file if it exists
        # Environment variables override defaults
        env_file = ".env"
        case_sensitive = True  # Environment variable names are case-sensitive


settings = Settings()
