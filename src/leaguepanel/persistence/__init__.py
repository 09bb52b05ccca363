"""Document store interface and the SQLite-backed local implementation."""

from __future__ import annotations

import json
import re
import sqlite3
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, List, Literal, Optional, Protocol, Sequence
from uuid import uuid4

from starlette.concurrency import run_in_threadpool

from leaguepanel.errors import DocumentExistsError, StoreError


Operator = Literal["==", "<", "<=", ">", ">="]

_OPERATORS = {"==": "=", "<": "<", "<=": "<=", ">": ">", ">=": ">="}
_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"


@dataclass(frozen=True)
class Condition:
    field: str
    op: Operator
    value: Any


@dataclass(frozen=True)
class Ordering:
    field: str
    descending: bool = False


@dataclass
class StoredDocument:
    doc_id: str
    data: dict

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.doc_id, **self.data}


class DocumentStore(Protocol):
    """Async collection/document store used by the resource handlers."""

    async def get(self, collection: str, doc_id: str) -> Optional[StoredDocument]: ...

    async def exists(self, collection: str, doc_id: str) -> bool: ...

    async def count(self, collection: str, conditions: Sequence[Condition] = ()) -> int: ...

    async def query(
        self,
        collection: str,
        conditions: Sequence[Condition] = (),
        order_by: Sequence[Ordering] = (),
    ) -> List[StoredDocument]: ...

    async def add(self, collection: str, data: dict) -> str: ...

    async def set(self, collection: str, doc_id: str, data: dict) -> None: ...

    async def create(self, collection: str, doc_id: str, data: dict) -> None: ...

    async def update(self, collection: str, doc_id: str, data: dict) -> None: ...

    async def delete(self, collection: str, doc_id: str) -> None: ...


def encode_timestamp(value: datetime) -> str:
    """Fixed-width UTC text so stored timestamps compare lexicographically."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return encode_timestamp(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(data: dict) -> str:
    return json.dumps(data, default=_encode_value)


def _column(field: str) -> str:
    if not _FIELD_NAME.match(field):
        raise StoreError(f"Unsupported field name {field!r}")
    return f"json_extract(data_json, '$.{field}')"


class SQLiteDocumentStore:
    """SQLite-backed document store keeping each document as a JSON blob."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._keepalive: sqlite3.Connection | None = None
        if self._use_uri and "mode=memory" in str(self.db_path):
            # Shared in-memory databases vanish once the last connection closes.
            self._keepalive = sqlite3.connect(self.db_path, uri=True, check_same_thread=False)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "leaguepanel-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "leaguepanel.sqlite"
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise StoreError(f"Unable to open {self.db_path}: {exc}") from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                collection TEXT NOT NULL,
                id TEXT NOT NULL,
                data_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (collection, id)
            )
            """
        )
        conn.commit()

    # sync primitives, run in the threadpool by the async API below

    def _get(self, collection: str, doc_id: str) -> Optional[StoredDocument]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT id, data_json FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
        return self._row_to_document(row) if row is not None else None

    def _where(self, collection: str, conditions: Sequence[Condition]) -> tuple[str, list[Any]]:
        clauses = ["collection = ?"]
        params: list[Any] = [collection]
        for condition in conditions:
            operator = _OPERATORS.get(condition.op)
            if operator is None:
                raise StoreError(f"Unsupported operator {condition.op!r}")
            clauses.append(f"{_column(condition.field)} {operator} ?")
            value = condition.value
            params.append(encode_timestamp(value) if isinstance(value, datetime) else value)
        return " WHERE " + " AND ".join(clauses), params

    def _count(self, collection: str, conditions: Sequence[Condition]) -> int:
        where, params = self._where(collection, conditions)
        with self._connection() as conn:
            row = conn.execute("SELECT COUNT(*) FROM documents" + where, tuple(params)).fetchone()
        return int(row[0])

    def _query(
        self,
        collection: str,
        conditions: Sequence[Condition],
        order_by: Sequence[Ordering],
    ) -> List[StoredDocument]:
        where, params = self._where(collection, conditions)
        order = [f"{_column(item.field)} {'DESC' if item.descending else 'ASC'}" for item in order_by]
        order.append("created_at ASC")
        sql = "SELECT id, data_json FROM documents" + where + " ORDER BY " + ", ".join(order)
        with self._connection() as conn:
            rows = conn.execute(sql, tuple(params)).fetchall()
        return [self._row_to_document(row) for row in rows]

    def _insert(self, collection: str, doc_id: str, data: dict, *, replace: bool) -> None:
        now = datetime.now(timezone.utc).isoformat()
        sql = """
            INSERT INTO documents (collection, id, data_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
        """
        if replace:
            sql += """
            ON CONFLICT (collection, id) DO UPDATE
            SET data_json = excluded.data_json, updated_at = excluded.updated_at
            """
        with self._connection() as conn:
            try:
                conn.execute(sql, (collection, doc_id, _dumps(data), now, now))
            except sqlite3.IntegrityError as exc:
                raise DocumentExistsError(collection, doc_id) from exc

    def _update(self, collection: str, doc_id: str, data: dict) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                UPDATE documents
                SET data_json = json_patch(data_json, ?), updated_at = ?
                WHERE collection = ? AND id = ?
                """,
                (_dumps(data), now, collection, doc_id),
            )

    def _delete(self, collection: str, doc_id: str) -> None:
        with self._connection() as conn:
            conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )

    def _row_to_document(self, row: sqlite3.Row) -> StoredDocument:
        return StoredDocument(doc_id=row["id"], data=json.loads(row["data_json"]))

    # async API

    async def get(self, collection: str, doc_id: str) -> Optional[StoredDocument]:
        return await run_in_threadpool(self._get, collection, doc_id)

    async def exists(self, collection: str, doc_id: str) -> bool:
        return await self.get(collection, doc_id) is not None

    async def count(self, collection: str, conditions: Sequence[Condition] = ()) -> int:
        return await run_in_threadpool(self._count, collection, conditions)

    async def query(
        self,
        collection: str,
        conditions: Sequence[Condition] = (),
        order_by: Sequence[Ordering] = (),
    ) -> List[StoredDocument]:
        return await run_in_threadpool(self._query, collection, conditions, order_by)

    async def add(self, collection: str, data: dict) -> str:
        doc_id = uuid4().hex
        await run_in_threadpool(self._insert, collection, doc_id, data, replace=False)
        return doc_id

    async def set(self, collection: str, doc_id: str, data: dict) -> None:
        await run_in_threadpool(self._insert, collection, doc_id, data, replace=True)

    async def create(self, collection: str, doc_id: str, data: dict) -> None:
        await run_in_threadpool(self._insert, collection, doc_id, data, replace=False)

    async def update(self, collection: str, doc_id: str, data: dict) -> None:
        """Merge ``data`` into an existing document; a missing id is a no-op."""
        await run_in_threadpool(self._update, collection, doc_id, data)

    async def delete(self, collection: str, doc_id: str) -> None:
        await run_in_threadpool(self._delete, collection, doc_id)


__all__ = [
    "Condition",
    "DocumentStore",
    "Ordering",
    "SQLiteDocumentStore",
    "StoredDocument",
    "encode_timestamp",
]
