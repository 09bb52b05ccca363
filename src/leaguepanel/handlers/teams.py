from __future__ import annotations

from leaguepanel.handlers.base import ResourceHandler
from leaguepanel.models import TeamPayload


class TeamHandler(ResourceHandler):
    name = "teams"
    label = "Team"
    error_noun = "team"
    payload_type = TeamPayload
