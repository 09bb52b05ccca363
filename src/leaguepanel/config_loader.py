"""Load Firebase service-account credentials."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from leaguepanel.config import Settings
from leaguepanel.errors import ConfigurationError


logger = logging.getLogger("uvicorn.error")

SERVICE_ACCOUNT_ENV = "FIREBASE_SERVICE_ACCOUNT_KEY"


@dataclass
class ServiceAccount:
    info: dict[str, Any]
    source: str

    @property
    def project_id(self) -> str | None:
        return self.info.get("project_id")

    @classmethod
    def from_json(cls, raw: str, *, source: str) -> "ServiceAccount":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid service account JSON in {source}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Service account in {source} must be a JSON object")
        return cls(info=data, source=source)

    @classmethod
    def load(cls, path: Path) -> "ServiceAccount":
        return cls.from_json(path.read_text(encoding="utf-8"), source=str(path))

    @classmethod
    def resolve(cls, settings: Settings, env: Mapping[str, str] | None = None) -> "ServiceAccount":
        """Environment variable first, then a local key file outside production."""
        env = os.environ if env is None else env
        raw = env.get(SERVICE_ACCOUNT_ENV)
        if raw:
            return cls.from_json(raw, source=SERVICE_ACCOUNT_ENV)
        if settings.is_production:
            raise ConfigurationError(
                f"{SERVICE_ACCOUNT_ENV} environment variable is not set. "
                "Cannot initialize Firebase Admin SDK securely."
            )
        path = Path(settings.service_account_file)
        logger.warning(
            "%s environment variable not found. Attempting to load from %s.",
            SERVICE_ACCOUNT_ENV,
            path,
        )
        if not path.exists():
            raise ConfigurationError(f"Service account file {path} does not exist")
        return cls.load(path)
