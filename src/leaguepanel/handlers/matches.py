"""Match fixtures keyed by daily sequential identifiers."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from leaguepanel.errors import ConflictError, DocumentExistsError
from leaguepanel.handlers.base import ResourceHandler
from leaguepanel.models import MatchPayload
from leaguepanel.persistence import Ordering, StoredDocument
from leaguepanel.sequence import SequentialIdAllocator
from leaguepanel.validation import is_valid_date


logger = logging.getLogger("uvicorn.error")

DUPLICATE_MATCH_MESSAGE = "A match with this ID already exists for this date."


def calendar_key(document: StoredDocument) -> tuple:
    """Sort key ordering ``DD-MM-YYYY`` dates by calendar, then by time.

    Documents with a malformed date sort after every well-formed one when
    the key is used in descending order.
    """
    date = document.data.get("date")
    time = str(document.data.get("time") or "")
    if not is_valid_date(date):
        return (0, "", "", "", time)
    day, month, year = date.split("-")
    return (1, year, month, day, time)


class MatchHandler(ResourceHandler):
    """Matches.

    Listing is ``date`` then ``time`` descending as plain strings, which is
    not calendar order for ``DD-MM-YYYY`` across months or years; set
    ``calendar_match_order`` to re-sort by calendar date instead.
    """

    name = "matches"
    label = "Match"
    error_noun = "match"
    payload_type = MatchPayload
    order_by = (Ordering("date", descending=True), Ordering("time", descending=True))

    def sort(self, documents: Sequence[StoredDocument]) -> Sequence[StoredDocument]:
        if not self.context.settings.calendar_match_order:
            return documents
        return sorted(documents, key=calendar_key, reverse=True)

    async def insert(self, fields: dict[str, Any]) -> str:
        allocator = SequentialIdAllocator(self.store)
        doc_id = await allocator.allocate_by_date_string(self.collection, fields["date"])
        if await self.store.exists(self.collection, doc_id):
            logger.warning("Match id %s already taken", doc_id)
            raise ConflictError(DUPLICATE_MATCH_MESSAGE)

        fields["matchId"] = doc_id
        try:
            await self.store.create(self.collection, doc_id, fields)
        except DocumentExistsError as exc:
            logger.warning("Match id %s taken by a concurrent create", doc_id)
            raise ConflictError(DUPLICATE_MATCH_MESSAGE) from exc
        return doc_id
