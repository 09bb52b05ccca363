"""Resource handlers for teams, players, news and matches."""

from leaguepanel.context import AppContext

from .base import ResourceHandler
from .matches import MatchHandler
from .news import NewsHandler
from .players import PlayerHandler
from .teams import TeamHandler

HANDLER_TYPES = (TeamHandler, PlayerHandler, NewsHandler, MatchHandler)


def build_handlers(context: AppContext) -> dict[str, ResourceHandler]:
    return {handler_type.name: handler_type(context) for handler_type in HANDLER_TYPES}


__all__ = [
    "HANDLER_TYPES",
    "MatchHandler",
    "NewsHandler",
    "PlayerHandler",
    "ResourceHandler",
    "TeamHandler",
    "build_handlers",
]
