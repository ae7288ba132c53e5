from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    debug: bool = False
    log_json: bool = True
    warn_mixed_capabilities: bool = True
    policy_file: Optional[str] = None  # extra YAML policies for the registry

    model_config = SettingsConfigDict(env_prefix="VALIDATED_STRING_", env_file=".env")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
