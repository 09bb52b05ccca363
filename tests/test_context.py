import json

import firebase_admin
import pytest

from leaguepanel import context as context_module
from leaguepanel.auth import StaticTokenGateway
from leaguepanel.config import Settings
from leaguepanel.config_loader import SERVICE_ACCOUNT_ENV
from leaguepanel.context import AppContext, initialize_firebase
from leaguepanel.persistence import SQLiteDocumentStore


class _FakeFirebase:
    def __init__(self):
        self.apps: dict[str, object] = {}
        self.initialized: list[object] = []

    def get_app(self, name: str = "[DEFAULT]"):
        if name not in self.apps:
            raise ValueError(f"The default Firebase app does not exist: {name}")
        return self.apps[name]

    def initialize_app(self, credential=None, options=None, name: str = "[DEFAULT]"):
        app = object()
        self.apps[name] = app
        self.initialized.append(credential)
        return app


@pytest.fixture
def fake_firebase(monkeypatch):
    fake = _FakeFirebase()
    monkeypatch.setattr(firebase_admin, "get_app", fake.get_app)
    monkeypatch.setattr(firebase_admin, "initialize_app", fake.initialize_app)
    monkeypatch.setattr(context_module.credentials, "Certificate", lambda info: ("certificate", info["project_id"]))
    return fake


def test_initialize_firebase_is_idempotent(fake_firebase):
    env = {SERVICE_ACCOUNT_ENV: json.dumps({"project_id": "league"})}
    first = initialize_firebase(Settings(), env)
    second = initialize_firebase(Settings(), env)

    assert first is second
    assert fake_firebase.initialized == [("certificate", "league")]


def test_initialize_firebase_reuses_existing_app_without_credentials(fake_firebase):
    existing = fake_firebase.initialize_app("preexisting")
    assert initialize_firebase(Settings(environment="production"), {}) is existing
    assert fake_firebase.initialized == ["preexisting"]


def test_local_context_skips_firebase(tmp_path, fake_firebase):
    settings = Settings(
        store_backend="sqlite",
        db_path=str(tmp_path / "league.sqlite"),
        auth_backend="static",
        static_tokens={"dev": "me"},
    )
    ctx = AppContext.from_settings(settings, {})
    assert isinstance(ctx.store, SQLiteDocumentStore)
    assert isinstance(ctx.auth, StaticTokenGateway)
    assert fake_firebase.initialized == []
