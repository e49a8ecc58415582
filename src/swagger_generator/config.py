"""Settings for the command line tool, read from SWAGGER_GENERATOR_* variables."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SWAGGER_GENERATOR_", extra="ignore")

    # document info used when neither the action model nor the CLI sets it
    default_title: str = "API"
    default_version: str = "1.0"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    json_logs: bool = False

    indent: int = 2


def get_settings() -> Settings:
    return Settings()
