"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")
    frontend_url: str = Field(default="http://localhost:3000")
    cors_origins: list[str] = Field(default=["*"])

    # Pricing
    currency: str = Field(default="usd")
    tax_rate: float = Field(default=0.08)
    free_shipping_threshold: float = Field(default=100.00)
    reduced_shipping_threshold: float = Field(default=50.00)
    reduced_shipping_cost: float = Field(default=5.99)
    standard_shipping_cost: float = Field(default=9.99)

    # Product images
    image_storage_type: Literal["local", "s3"] = Field(default="local")
    upload_dir: str = Field(default="./uploads/products")
    upload_url_prefix: str = Field(default="/uploads/products")
    max_image_size: int = Field(default=5 * 1024 * 1024)
    max_images_per_upload: int = Field(default=10)
    image_quality: int = Field(default=90)
    thumbnail_width: int = Field(default=150)
    thumbnail_height: int = Field(default=150)
    medium_width: int = Field(default=500)
    medium_height: int = Field(default=500)
    large_width: int = Field(default=1000)
    large_height: int = Field(default=1000)

    # S3
    aws_s3_bucket: str | None = Field(default=None)
    aws_s3_region: str = Field(default="us-east-1")
    aws_access_key_id: str | None = Field(default=None)
    aws_secret_access_key: str | None = Field(default=None)
    aws_s3_cdn_url: str | None = Field(default=None)

    # Payments
    payment_gateway: Literal["fake", "stripe"] = Field(default="fake")
    stripe_secret_key: str | None = Field(default=None)
    stripe_webhook_secret: str | None = Field(default=None)

    # Auth
    jwt_secret: str = Field(default="storefront-insecure-development-secret")
    jwt_expiry_minutes: int = Field(default=7 * 24 * 60)
    jwt_refresh_expiry_days: int = Field(default=30)
    password_reset_expiry_hours: int = Field(default=24)

    # Rate limiting (per client address)
    rate_limit_window_seconds: int = Field(default=15 * 60)
    api_rate_limit: int = Field(default=100)
    login_rate_limit: int = Field(default=10)

    # Email
    email_backend: Literal["fake", "smtp"] = Field(default="fake")
    smtp_host: str | None = Field(default=None)
    smtp_port: int = Field(default=587)
    smtp_user: str | None = Field(default=None)
    smtp_password: str | None = Field(default=None)
    smtp_secure: bool = Field(default=False)
    from_email: str = Field(default="noreply@storefront.local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
