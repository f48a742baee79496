# cctv_locator/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1]

class Settings(BaseSettings):
    app_name: str = Field(default="CCTV Locator API", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Upstream alert service (fetch / delete)
    alerts_api_base: str = Field(default="http://localhost:5000/api/alerts", alias="ALERTS_API_BASE")
    alerts_api_timeout: float = Field(default=15.0, alias="ALERTS_API_TIMEOUT")

    # Media
    ipfs_gateway_base: str = Field(default="https://gateway.pinata.cloud/ipfs/", alias="IPFS_GATEWAY_BASE")

    # Catalog + proximity
    localities_path: str = Field(default=str(PACKAGE_DIR / "data" / "localities.json"), alias="LOCALITIES_PATH")
    nearest_k: int = Field(default=6, ge=1, alias="NEAREST_K")
    map_zoom: int = Field(default=15, ge=1, le=21, alias="MAP_ZOOM")
    camera_feed_urls: list[str] = Field(
        default=[
            "https://www.youtube.com/embed/5_XSYlAfJZM",
            "https://www.youtube.com/embed/1fiF7B6VkCk",
            "https://www.youtube.com/embed/B0YjuKbVZ5w",
            "https://www.youtube.com/embed/3LXQWU67Ufk",
            "https://www.youtube.com/embed/p0Qhe4vhYLQ",
            "https://www.youtube.com/embed/HpZAez2oYsA",
        ],
        alias="CAMERA_FEED_URLS",
    )

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=str(PACKAGE_DIR / ".env"),  # cctv_locator/.env
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

settings = Settings()
