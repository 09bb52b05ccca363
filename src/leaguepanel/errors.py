"""Error taxonomy shared by handlers, stores and the HTTP layer."""

from __future__ import annotations


class LeaguePanelError(Exception):
    """Base class for errors raised by leaguepanel."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(LeaguePanelError):
    """Missing, invalid or insufficient bearer credential."""

    def __init__(self, message: str, *, status_code: int = 403):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(LeaguePanelError):
    status_code = 400


class ConflictError(LeaguePanelError):
    status_code = 409


class StoreError(LeaguePanelError):
    """Any failure reported by the document store backend."""


class DocumentExistsError(StoreError):
    """Raised by create-if-absent writes when the key is already taken."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"Document {doc_id} already exists in {collection}")
        self.collection = collection
        self.doc_id = doc_id


class ConfigurationError(LeaguePanelError):
    """Startup misconfiguration (credentials, backend selection)."""
