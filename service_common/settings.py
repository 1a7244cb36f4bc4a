from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """Settings every service reads from the environment.

    Empty variables count as unset, so the defaults below still apply.
    """
    model_config = SettingsConfigDict(env_ignore_empty=True, frozen=True)

    database_url: str
    log_path: Optional[str] = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()
