"""Application configuration pulled from environment variables via pydantic."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger, mask_secret
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the ecowatter service."""
    model_config = SettingsConfigDict(env_prefix="ECOWATTER_", extra="ignore")

    api_base_url: str = "https://digital.iservices.rte-france.com/open_api/ecowatt/v4/sandbox/"
    token_url: str = "https://digital.iservices.rte-france.com/token/oauth/"
    auth_token: str = ""  # pre-shared "Basic" string, base64(client_id:client_secret)
    token_lifetime_seconds: int = Field(default=7200, ge=0)
    rate_limit_seconds: int = Field(default=3, ge=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    api_key: str | None = None
    start_sync: bool = True
    log_level: str = "INFO"

    @field_validator("api_base_url", "token_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    dumped = settings.model_dump()
    dumped["auth_token"] = mask_secret(dumped["auth_token"])
    logger.debug(f"Loaded settings: {dumped}")
