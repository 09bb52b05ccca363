"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


logger = logging.getLogger("uvicorn.error")

DEFAULT_BASE_PATH = "artifacts/hkplweb/public/data/leagues/hkpl"
DEFAULT_FRONTEND_URL = "http://localhost:3000"

_STORE_BACKENDS = {"firestore", "sqlite"}
_AUTH_BACKENDS = {"firebase", "static"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Invalid boolean for %s: %s; using default %s", name, raw, default)
    return default


def _env_int(env: Mapping[str, str], name: str, default: int, *, min_value: int | None = None) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_choice(env: Mapping[str, str], name: str, default: str, choices: set[str]) -> str:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in choices:
        logger.warning("Invalid value for %s: %s; using default %s", name, raw, default)
        return default
    return value


def _env_timezone(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name)
    if not raw:
        return default
    if raw.upper() == "UTC":
        return "UTC"
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone for %s: %s; using default %s", name, raw, default)
        return default
    return raw


def _parse_static_tokens(raw: str | None) -> dict[str, str]:
    """Parse ``token[:uid]`` pairs separated by commas."""
    tokens: dict[str, str] = {}
    if not raw:
        return tokens
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        token, _, uid = chunk.partition(":")
        tokens[token] = uid or "static-admin"
    return tokens


@dataclass(frozen=True)
class Settings:
    store_backend: str = "firestore"
    db_path: str = "leaguepanel.sqlite"
    base_path: str = DEFAULT_BASE_PATH
    auth_backend: str = "firebase"
    static_tokens: Mapping[str, str] = field(default_factory=dict)
    require_admin_claim: bool = False
    guard_news_ids: bool = False
    calendar_match_order: bool = False
    timezone: str = "UTC"
    frontend_url: str = DEFAULT_FRONTEND_URL
    environment: str = "development"
    service_account_file: str = "serviceAccountKey.json"
    port: int = 5000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def tzinfo(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)

    def collection_path(self, name: str) -> str:
        base = self.base_path.strip("/")
        return f"{base}/{name}" if base else name


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``env`` (defaults to ``os.environ``)."""
    env = os.environ if env is None else env
    return Settings(
        store_backend=_env_choice(env, "LEAGUEPANEL_STORE", "firestore", _STORE_BACKENDS),
        db_path=env.get("LEAGUEPANEL_DB_PATH") or "leaguepanel.sqlite",
        base_path=env.get("LEAGUEPANEL_BASE_PATH", DEFAULT_BASE_PATH),
        auth_backend=_env_choice(env, "LEAGUEPANEL_AUTH", "firebase", _AUTH_BACKENDS),
        static_tokens=_parse_static_tokens(env.get("LEAGUEPANEL_STATIC_TOKENS")),
        require_admin_claim=_env_bool(env, "LEAGUEPANEL_REQUIRE_ADMIN_CLAIM", False),
        guard_news_ids=_env_bool(env, "LEAGUEPANEL_GUARD_NEWS_IDS", False),
        calendar_match_order=_env_bool(env, "LEAGUEPANEL_CALENDAR_MATCH_ORDER", False),
        timezone=_env_timezone(env, "LEAGUEPANEL_TIMEZONE", "UTC"),
        frontend_url=env.get("FRONTEND_URL") or DEFAULT_FRONTEND_URL,
        environment=(env.get("LEAGUEPANEL_ENV") or "development").strip().lower(),
        service_account_file=env.get("LEAGUEPANEL_SERVICE_ACCOUNT_FILE") or "serviceAccountKey.json",
        port=_env_int(env, "PORT", 5000, min_value=1),
    )
