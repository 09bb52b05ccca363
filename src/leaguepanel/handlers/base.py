"""Shared list/create/update/delete protocol for league resources."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, List, Mapping, Sequence, Tuple, Type

from pydantic import ValidationError as PydanticValidationError

from leaguepanel.context import AppContext
from leaguepanel.errors import ValidationError
from leaguepanel.merge import build_create_fields, build_update_fields
from leaguepanel.models import ResourcePayload
from leaguepanel.persistence import Ordering, StoredDocument
from leaguepanel.validation import validate_create, validate_update


logger = logging.getLogger("uvicorn.error")


def _describe(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ())) or "body"
    return f"Invalid value for {location}: {error.get('msg', 'invalid input')}."


class ResourceHandler:
    """One collection's write protocol.

    Subclasses set the payload model and labels; News and Matches override
    :meth:`insert` to allocate daily sequential identifiers.
    """

    name: ClassVar[str] = ""
    label: ClassVar[str] = ""
    error_noun: ClassVar[str] = ""
    payload_type: ClassVar[Type[ResourcePayload]] = ResourcePayload
    order_by: ClassVar[Tuple[Ordering, ...]] = ()

    def __init__(self, context: AppContext):
        self.context = context
        self.store = context.store
        self.collection = context.settings.collection_path(self.name)

    def parse(self, payload: Any) -> ResourcePayload:
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object.")
        try:
            return self.payload_type.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(_describe(exc)) from exc

    def sort(self, documents: Sequence[StoredDocument]) -> Sequence[StoredDocument]:
        return documents

    async def list(self) -> List[dict[str, Any]]:
        documents = await self.store.query(self.collection, order_by=self.order_by)
        return [document.to_dict() for document in self.sort(documents)]

    async def create(self, payload: Any) -> str:
        fields = build_create_fields(self.parse(payload))
        validate_create(self.payload_type, fields)
        doc_id = await self.insert(fields)
        logger.info("%s %s created", self.label, doc_id)
        return doc_id

    async def insert(self, fields: dict[str, Any]) -> str:
        return await self.store.add(self.collection, fields)

    async def update(self, doc_id: str, payload: Any) -> dict[str, Any]:
        """Merge the supplied fields into ``doc_id``; returns the write set."""
        fields = build_update_fields(self.parse(payload))
        validate_update(self.payload_type, fields)
        if not fields:
            logger.info("%s %s update carried no recognized fields", self.label, doc_id)
            return fields
        await self.store.update(self.collection, doc_id, fields)
        return fields

    async def delete(self, doc_id: str) -> None:
        await self.store.delete(self.collection, doc_id)
