"""Server configuration"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str | None = None

    # Authentication settings
    clerk_jwt_issuer: str | None = None  # e.g., "https://your-domain.clerk.accounts.dev"
    clerk_jwks_url: str | None = None  # e.g., "https://your-domain.clerk.accounts.dev/.well-known/jwks.json"
    clerk_secret_key: str | None = None  # Clerk secret key, only needed by the seed job
    clerk_api_url: str = "https://api.clerk.com/v1"

    # Seed job settings
    seed_block_size: int = 3  # Consecutive templates assigned to each demo user
    seed_password: str = "testPassword123!"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    """Get the Settings instance (dependency injection for FastAPI)"""
    return settings
