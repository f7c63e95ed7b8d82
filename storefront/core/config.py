"""Storefront service configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront Catalog"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Load the demonstration catalog into a fresh store at startup
    seed_demo_data: bool = True

    cors_origins: list[str] = ["*"]

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

