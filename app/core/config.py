"""
Application settings.
Twitter credentials can be loaded from AWS Secrets Manager at startup.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # AWS (only used to pull secrets when AWS_SECRETS_NAME is set)
    AWS_REGION: str = "us-east-1"
    AWS_SECRETS_NAME: Optional[str] = None

    # Database: DATABASE_URL wins; otherwise built from DB_* (PostgreSQL)
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_NAME: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None

    # Twitter OAuth 1.0a
    TWITTER_CONSUMER_KEY: Optional[str] = None
    TWITTER_CONSUMER_SECRET: Optional[str] = None
    TWITTER_CALLBACK_URL: Optional[str] = None

    # Public front-end origin
    FRONTEND_URL: str = "http://localhost:5173"

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    SESSION_TTL: int = 86400  # 24 hours in seconds

    # Optional
    DEBUG: bool = False
    PROJECT_NAME: str = "ReTodoku NFC Postcards"
    VERSION: str = "2.0.0"
    SYSTEM_NAME: str = "NFC Postcard Collection"
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return (
                f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )
        return "sqlite:///./retodoku.db"

    @property
    def twitter_callback_url(self) -> str:
        return self.TWITTER_CALLBACK_URL or f"{self.FRONTEND_URL.rstrip('/')}/auth/twitter/callback"

    @property
    def use_twitter(self) -> bool:
        return bool(self.TWITTER_CONSUMER_KEY and self.TWITTER_CONSUMER_SECRET)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()

# Pull Twitter credentials from AWS Secrets Manager only when a secret name is
# configured and they aren't already provided via environment variables.
if settings.AWS_SECRETS_NAME and not settings.use_twitter:
    from app.aws.secrets import get_secret

    _twitter_secret = get_secret(settings.AWS_SECRETS_NAME, region_name=settings.AWS_REGION)
    settings.TWITTER_CONSUMER_KEY = _twitter_secret["consumer_key"]
    settings.TWITTER_CONSUMER_SECRET = _twitter_secret["consumer_secret"]
    settings.TWITTER_CALLBACK_URL = _twitter_secret.get("callback_url") or settings.TWITTER_CALLBACK_URL
