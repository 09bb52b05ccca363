"""Cloud Firestore backend built on the Firebase Admin SDK async client."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence

import firebase_admin
from firebase_admin import firestore_async
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from leaguepanel.errors import DocumentExistsError, StoreError
from leaguepanel.persistence import Condition, Ordering, StoredDocument


class FirestoreDocumentStore:
    """Document store over ``firebase_admin.firestore_async``.

    Partial updates use ``DocumentReference.update``, which fails with
    ``NotFound`` for a missing document; that surfaces as a ``StoreError``.
    """

    def __init__(self, client):
        self._client = client

    @classmethod
    def from_app(cls, app: firebase_admin.App) -> "FirestoreDocumentStore":
        return cls(firestore_async.client(app))

    @asynccontextmanager
    async def _translate_errors(self) -> AsyncIterator[None]:
        try:
            yield
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(str(exc)) from exc

    def _query(self, collection: str, conditions: Sequence[Condition], order_by: Sequence[Ordering] = ()):
        query = self._client.collection(collection)
        for condition in conditions:
            query = query.where(filter=FieldFilter(condition.field, condition.op, condition.value))
        for item in order_by:
            query = query.order_by(item.field, direction="DESCENDING" if item.descending else "ASCENDING")
        return query

    async def get(self, collection: str, doc_id: str) -> Optional[StoredDocument]:
        async with self._translate_errors():
            snapshot = await self._client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return StoredDocument(doc_id=snapshot.id, data=snapshot.to_dict() or {})

    async def exists(self, collection: str, doc_id: str) -> bool:
        async with self._translate_errors():
            snapshot = await self._client.collection(collection).document(doc_id).get()
        return bool(snapshot.exists)

    async def count(self, collection: str, conditions: Sequence[Condition] = ()) -> int:
        async with self._translate_errors():
            results = await self._query(collection, conditions).count().get()
        return int(results[0][0].value) if results and results[0] else 0

    async def query(
        self,
        collection: str,
        conditions: Sequence[Condition] = (),
        order_by: Sequence[Ordering] = (),
    ) -> List[StoredDocument]:
        documents: List[StoredDocument] = []
        async with self._translate_errors():
            async for snapshot in self._query(collection, conditions, order_by).stream():
                documents.append(StoredDocument(doc_id=snapshot.id, data=snapshot.to_dict() or {}))
        return documents

    async def add(self, collection: str, data: dict) -> str:
        async with self._translate_errors():
            _, reference = await self._client.collection(collection).add(data)
        return reference.id

    async def set(self, collection: str, doc_id: str, data: dict) -> None:
        async with self._translate_errors():
            await self._client.collection(collection).document(doc_id).set(data)

    async def create(self, collection: str, doc_id: str, data: dict) -> None:
        try:
            await self._client.collection(collection).document(doc_id).create(data)
        except google_exceptions.AlreadyExists as exc:
            raise DocumentExistsError(collection, doc_id) from exc
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(str(exc)) from exc

    async def update(self, collection: str, doc_id: str, data: dict) -> None:
        async with self._translate_errors():
            await self._client.collection(collection).document(doc_id).update(data)

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._translate_errors():
            await self._client.collection(collection).document(doc_id).delete()
