from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from checkout_api.domain.exceptions import ConfigurationError


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _float(name: str, default: str) -> float:
    value = (_env(name, default) or "").strip() or default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}.") from exc


def _optional_int(name: str) -> int | None:
    value = (_env(name, "") or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a whole number of seconds, got {value!r}.") from exc


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_api_base: str
    stripe_timeout_seconds: float
    stripe_webhook_tolerance_seconds: int | None
    app_base_url: str
    cors_allow_origins: tuple[str, ...]
    log_level: str


def get_settings() -> Settings:
    return Settings(
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_api_base=_env("STRIPE_API_BASE", "https://api.stripe.com/v1"),
        stripe_timeout_seconds=_float("STRIPE_TIMEOUT_SECONDS", "10"),
        stripe_webhook_tolerance_seconds=_optional_int("STRIPE_WEBHOOK_TOLERANCE_SECONDS"),
        app_base_url=_env("APP_BASE_URL", ""),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        log_level=_env("LOG_LEVEL", "INFO"),
    )
