from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Development
    DEV_MODE: bool = Field(default=True, description="Enable debug mode")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./parking.db", description="Database connection URL")
    ASYNC_DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./parking.db", description="Async database URL")

    # FastAPI
    FASTAPI_HOST: str = Field(default="localhost", description="FastAPI host")
    FASTAPI_PORT: int = Field(default=8080, description="FastAPI port")

    # Payments
    STRIPE_SECRET_KEY: Optional[str] = Field(default=None, description="Stripe secret API key")
    STRIPE_CURRENCY: str = Field(default="usd", description="Currency used for charges and refunds")
    REFUND_PERCENTAGE: int = Field(default=80, ge=0, le=100, description="Share of the paid amount refunded on cancellation")

    # Slot defaults
    DEFAULT_HOURLY_RATE: float = Field(default=5.0, gt=0, description="Hourly rate for new slots")
    DEFAULT_DAILY_RATE: float = Field(default=30.0, gt=0, description="Daily rate for new slots")

    # Seed data
    SEED_SLOT_COUNT: int = Field(default=20, ge=0, description="Slots created on an empty database")
    SEED_ADMIN_NAME: str = Field(default="Administrator", description="Name of the seeded admin user")
    SEED_ADMIN_EMAIL: Optional[str] = Field(default="admin@parking.local", description="Email of the seeded admin user")


# Create settings instance
settings = Settings()
