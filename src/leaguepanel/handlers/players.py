from __future__ import annotations

from leaguepanel.handlers.base import ResourceHandler
from leaguepanel.models import PlayerPayload


class PlayerHandler(ResourceHandler):
    name = "players"
    label = "Player"
    error_noun = "player"
    payload_type = PlayerPayload
