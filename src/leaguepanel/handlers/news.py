"""News articles: server-stamped, keyed by daily sequential identifiers."""

from __future__ import annotations

import logging
from typing import Any

from leaguepanel.errors import ConflictError, DocumentExistsError
from leaguepanel.handlers.base import ResourceHandler
from leaguepanel.models import NewsPayload
from leaguepanel.persistence import Ordering
from leaguepanel.sequence import SequentialIdAllocator, date_string_for


logger = logging.getLogger("uvicorn.error")

DUPLICATE_NEWS_MESSAGE = "A news article with this ID already exists for this date."


class NewsHandler(ResourceHandler):
    """News articles.

    ``date`` holds the server creation timestamp; clients can neither set nor
    move it. Identifiers come from the day of that timestamp in the configured
    timezone. Unless ``guard_news_ids`` is enabled, an identifier collision
    overwrites the earlier article.
    """

    name = "news"
    label = "News article"
    error_noun = "news"
    payload_type = NewsPayload
    order_by = (Ordering("date", descending=True),)

    async def insert(self, fields: dict[str, Any]) -> str:
        settings = self.context.settings
        now = self.context.clock()
        allocator = SequentialIdAllocator(self.store)
        doc_id = await allocator.allocate_by_timestamp(
            self.collection,
            date_string_for(now, settings.tzinfo),
            settings.tzinfo,
        )
        fields["date"] = now

        if not settings.guard_news_ids:
            await self.store.set(self.collection, doc_id, fields)
            return doc_id

        if await self.store.exists(self.collection, doc_id):
            logger.warning("News id %s already taken", doc_id)
            raise ConflictError(DUPLICATE_NEWS_MESSAGE)
        try:
            await self.store.create(self.collection, doc_id, fields)
        except DocumentExistsError as exc:
            logger.warning("News id %s taken by a concurrent create", doc_id)
            raise ConflictError(DUPLICATE_NEWS_MESSAGE) from exc
        return doc_id
