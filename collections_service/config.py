import logging
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from collections_service.errors import ConfigurationError

ENV_NAMES = {
    "shopify_url": "SHOPIFY_URL",
    "shopify_token": "SHOPIFY_ADMIN_TOKEN",
    "port": "PORT",
    "request_timeout": "SHOPIFY_TIMEOUT_SECONDS",
    "max_retries": "SHOPIFY_MAX_RETRIES",
    "product_workers": "PRODUCT_FETCH_WORKERS",
    "log_level": "LOG_LEVEL",
}


def _env(field_name: str) -> AliasChoices:
    return AliasChoices(ENV_NAMES[field_name], field_name)


class Settings(BaseSettings):
    """
    Process-wide settings, read once at startup.

    Real environment variables win over a local .env file; empty values
    fall back to the defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    shopify_url: str = Field(validation_alias=_env("shopify_url"), description="Shopify GraphQL endpoint.")
    shopify_token: SecretStr = Field(validation_alias=_env("shopify_token"), description="Admin API access token.")
    port: int = Field(default=8080, ge=1, le=65535, validation_alias=_env("port"))
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        validation_alias=_env("request_timeout"),
        description="Timeout per upstream call (seconds).",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        validation_alias=_env("max_retries"),
        description="Retries for 429/5xx upstream responses.",
    )
    product_workers: int = Field(
        default=1,
        ge=1,
        le=32,
        validation_alias=_env("product_workers"),
        description="Concurrent product fetches per request.",
    )
    log_level: str = Field(default="INFO", validation_alias=_env("log_level"))

    @field_validator("shopify_url", "shopify_token", mode="before")
    @classmethod
    def _not_blank(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("must not be empty")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value):
        level = str(value).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"not a logging level: {value!r}")
        return level


def _env_name(loc: str) -> str:
    # errors are located by field name or by whichever alias matched, in any case
    for field_name, env_name in ENV_NAMES.items():
        if loc.lower() in (field_name, env_name.lower()):
            return env_name
    return loc


def _describe(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = str(err["loc"][0]) if err["loc"] else "settings"
        problems.append(f"{_env_name(loc)}: {err['msg']}")
    return "; ".join(problems)


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {_describe(e)}") from e
