# config.py
from functools import lru_cache
from typing import Annotated, List

from fastapi import Request
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration; each field is read from the upper-cased env var of the same name."""

    mongo_uri: str = Field(default="mongodb://localhost:27017", alias="MONGO_URI")
    mongo_db: str = Field(default="myFlixDB", alias="MONGO_DB")
    secret_key: str = Field(
        default="fd1b2d22ccf1b78d895b82d435671359bd2404ada60e8548cf71fa96fb998988",
        alias="SECRET_KEY",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    allowed_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"], alias="ALLOWED_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=8080, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        # ALLOWED_ORIGINS is a comma-separated list
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Settings for the process entry points, read once."""
    return Settings()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
