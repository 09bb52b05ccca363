"""Daily sequential identifiers for news and match documents.

An identifier is the ``DD-MM-YYYY`` date with the dashes removed, a dash,
and the 1-based position of the document within that day, zero-padded to
two digits: the second document on 05-03-2024 is ``05032024-02``.

Allocation counts the documents already stored for the day and adds one.
That count-then-assign sequence is not atomic; callers that must not
overwrite pair it with an existence check and a create-if-absent write.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo
from typing import Sequence

from leaguepanel.errors import ValidationError
from leaguepanel.persistence import Condition, DocumentStore
from leaguepanel.validation import is_valid_date


DATE_FORMAT = "%d-%m-%Y"


def format_daily_id(date_string: str, existing: int) -> str:
    return f"{date_string.replace('-', '')}-{existing + 1:02d}"


def date_string_for(moment: datetime, zone: tzinfo) -> str:
    return moment.astimezone(zone).strftime(DATE_FORMAT)


def day_bounds(date_string: str, zone: tzinfo) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` range covering the calendar day in ``zone``."""
    day = datetime.strptime(date_string, DATE_FORMAT).date()
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start, end


class SequentialIdAllocator:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def allocate(self, collection: str, date_string: str, conditions: Sequence[Condition]) -> str:
        if not is_valid_date(date_string):
            raise ValidationError(f'Date {date_string!r} must be in "DD-MM-YYYY" format.')
        existing = await self._store.count(collection, conditions)
        return format_daily_id(date_string, existing)

    async def allocate_by_date_string(self, collection: str, date_string: str, *, field: str = "date") -> str:
        """Count same-day documents by exact match on a ``DD-MM-YYYY`` field."""
        return await self.allocate(collection, date_string, [Condition(field, "==", date_string)])

    async def allocate_by_timestamp(
        self,
        collection: str,
        date_string: str,
        zone: tzinfo,
        *,
        field: str = "date",
    ) -> str:
        """Count same-day documents whose timestamp field falls on ``date_string``."""
        if not is_valid_date(date_string):
            raise ValidationError(f'Date {date_string!r} must be in "DD-MM-YYYY" format.')
        start, end = day_bounds(date_string, zone)
        return await self.allocate(
            collection,
            date_string,
            [Condition(field, ">=", start), Condition(field, "<", end)],
        )
