"""Application configuration pulled from environment variables via pydantic."""
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the ambient display service."""
    model_config = SettingsConfigDict(env_prefix="AMBIENT_", env_file=".env", extra="ignore")

    data_source: str = "live"  # options: live
    photo_ttl_seconds: int = 1800
    weather_ttl_seconds: int = 1800
    unsplash_access_key: str = Field(
        default="YOUR_UNSPLASH_ACCESS_KEY",
        validation_alias=AliasChoices("AMBIENT_UNSPLASH_ACCESS_KEY", "UNSPLASH_ACCESS_KEY"),
    )
    location_url: str = "http://ip-api.com/json/"
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    unsplash_base_url: str = "https://api.unsplash.com"
    request_timeout_seconds: float = 10.0
    request_cache_path: str = ".cache"
    request_cache_expire_seconds: int = 900
    cpu_thermal_path: str = "/sys/class/thermal/thermal_zone0/temp"
    default_photo_width: int = 1920
    default_photo_height: int = 1080

    @field_validator("unsplash_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'unsplash_access_key'})}")
