"""Process-wide application context: settings, store client and auth gateway."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Mapping

import firebase_admin
from firebase_admin import credentials

from leaguepanel.auth import AuthGateway, FirebaseAuthGateway, StaticTokenGateway
from leaguepanel.config import Settings
from leaguepanel.config_loader import ServiceAccount
from leaguepanel.errors import ConfigurationError
from leaguepanel.persistence import DocumentStore, SQLiteDocumentStore


logger = logging.getLogger("uvicorn.error")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def initialize_firebase(settings: Settings, env: Mapping[str, str] | None = None) -> firebase_admin.App:
    """Return the default Firebase app, creating it only on first use.

    Repeated calls (hot reload, several app factories in one process) reuse
    the existing app instead of initializing a second one.
    """
    try:
        app = firebase_admin.get_app()
    except ValueError:
        pass
    else:
        logger.info("Firebase Admin SDK already initialized.")
        return app

    account = ServiceAccount.resolve(settings, env)
    try:
        certificate = credentials.Certificate(account.info)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid service account from {account.source}: {exc}") from exc
    app = firebase_admin.initialize_app(certificate)
    logger.info("Firebase Admin SDK initialized successfully.")
    return app


@dataclass
class AppContext:
    settings: Settings
    store: DocumentStore
    auth: AuthGateway
    clock: Callable[[], datetime] = field(default=_utcnow)

    @classmethod
    def from_settings(cls, settings: Settings, env: Mapping[str, str] | None = None) -> "AppContext":
        firebase_app = None
        if settings.store_backend == "firestore" or settings.auth_backend == "firebase":
            firebase_app = initialize_firebase(settings, env)

        store: DocumentStore
        if settings.store_backend == "firestore":
            from leaguepanel.persistence.firestore import FirestoreDocumentStore

            store = FirestoreDocumentStore.from_app(firebase_app)
        else:
            store = SQLiteDocumentStore(settings.db_path)

        gateway: AuthGateway
        if settings.auth_backend == "firebase":
            gateway = FirebaseAuthGateway(firebase_app)
        else:
            if not settings.static_tokens:
                logger.warning("Static auth enabled without LEAGUEPANEL_STATIC_TOKENS; every request will be rejected")
            gateway = StaticTokenGateway(settings.static_tokens)

        logger.info(
            "Using %s store and %s auth (collections under %s)",
            settings.store_backend,
            settings.auth_backend,
            settings.base_path or "/",
        )
        return cls(settings=settings, store=store, auth=gateway)
