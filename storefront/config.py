"""
Storefront configuration.

Two layers:
- Settings: process-level options read from environment variables
  (optionally from a .env file).
- StoreConfig: the shop's config.json document (contact number, currency,
  UI timings, theme) loaded together with the catalog.
"""

import os
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_DATA_URL = "data"
DEFAULT_STORAGE_PATH = ".storefront/state.json"
DEFAULT_LANGUAGE = "ar"
DEFAULT_CURRENCY = "EGP"
DEFAULT_TOAST_DURATION_MS = 2000
DEFAULT_BANNER_INTERVAL_MS = 3000
DEFAULT_FEATURED_LIMIT = 10

STORAGE_BACKENDS = ("memory", "file", "redis")


@dataclass(frozen=True)
class Settings:
    """Process-level settings."""
    data_url: str = DEFAULT_DATA_URL
    storage_backend: str = "file"
    storage_path: str = DEFAULT_STORAGE_PATH
    namespace: str = ""
    language: str = DEFAULT_LANGUAGE
    http_timeout: float = 10.0
    redis_url: str = ""
    redis_token: str = ""


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional .env file to load first (existing variables win)

    Returns:
        Settings instance
    """
    if env_file is not None and env_file.exists():
        load_dotenv(env_file)

    backend = os.environ.get("STOREFRONT_STORAGE", "file").lower()
    if backend not in STORAGE_BACKENDS:
        backend = "file"

    return Settings(
        data_url=os.environ.get("STOREFRONT_DATA_URL", DEFAULT_DATA_URL),
        storage_backend=backend,
        storage_path=os.environ.get("STOREFRONT_STORAGE_PATH", DEFAULT_STORAGE_PATH),
        namespace=os.environ.get("STOREFRONT_NAMESPACE", ""),
        language=os.environ.get("STOREFRONT_LANG", DEFAULT_LANGUAGE),
        http_timeout=_float_env("STOREFRONT_HTTP_TIMEOUT", 10.0),
        redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
        redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
    )


@cache
def get_settings() -> Settings:
    """Get Settings singleton (reads .env from the working directory)."""
    return load_settings(Path(".env"))


class LocaleConfig(BaseModel):
    currency: str = DEFAULT_CURRENCY

    class Config:
        extra = "ignore"


class UIConfig(BaseModel):
    toast_duration_ms: int = Field(DEFAULT_TOAST_DURATION_MS, alias="toastDurationMs")
    banner_interval_ms: int = Field(DEFAULT_BANNER_INTERVAL_MS, alias="bannerIntervalMs")
    featured_limit: int = Field(DEFAULT_FEATURED_LIMIT, alias="featuredLimit")

    class Config:
        extra = "ignore"
        populate_by_name = True


class HomeConfig(BaseModel):
    banners: list[str] = []

    class Config:
        extra = "ignore"


class StoreConfig(BaseModel):
    """Shop configuration document (config.json)."""
    whatsapp_number: Optional[str] = Field(None, alias="whatsappNumber")
    locale: LocaleConfig = LocaleConfig()
    ui: UIConfig = UIConfig()
    home: HomeConfig = HomeConfig()
    theme: dict[str, str] = {}

    class Config:
        extra = "ignore"
        populate_by_name = True

    @field_validator("whatsapp_number", mode="before")
    @classmethod
    def convert_number_to_str(cls, v):
        return None if v in (None, "") else str(v)

    @property
    def currency(self) -> str:
        return self.locale.currency or DEFAULT_CURRENCY
