"""
Settings for building a Kanka client from the environment or a ``.env`` file.

The client never reads these on its own; host programs opt in through
``Client.from_settings()``.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KANKA_URL = "https://kanka.io/api/1.0/"


class KankaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="KANKA_", env_file=".env", extra="ignore")

    token: SecretStr = SecretStr("")
    base_url: str = KANKA_URL
    timeout: float = 30.0

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"


@lru_cache()
def get_settings() -> KankaSettings:
    return KankaSettings()
