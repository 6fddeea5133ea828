from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Service settings read from the environment (and an optional .env file)."""

    geoip_db_path: Path = Field(
        default=PROJECT_ROOT / "GeoLite2-Country.mmdb",
        description="Location of the MaxMind country (or city) database.",
    )
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    log_level: str = "INFO"

    # Honour X-Forwarded-For as the client address source.
    trust_proxy: bool = True
    forwarded_allow_ips: str = "*"
    cors_allow_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
