import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Arthaus Catalog API"
    app_version: str = "1.0.0"
    app_description: str = "Catalog of art collections: galleries, pieces and sorted views"

    node_env: str = os.getenv("NODE_ENV", "development")

    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./arthaus.db")
    database_echo: bool = False

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Catalog rules
    reject_tracking_dates: bool = False  # clear instead of reject by default
    max_image_bytes: int = 20 * 1024 * 1024

    class Config:
        env_file = ".env"


settings = Settings()
