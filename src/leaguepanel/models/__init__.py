"""Payload models shared by handlers, validation and the merge engine."""

from .resources import (
    MATCH_STATUSES,
    PLAYER_POSITIONS,
    MatchPayload,
    NewsPayload,
    PlayerPayload,
    ResourcePayload,
    TeamPayload,
)

__all__ = [
    "MATCH_STATUSES",
    "PLAYER_POSITIONS",
    "MatchPayload",
    "NewsPayload",
    "PlayerPayload",
    "ResourcePayload",
    "TeamPayload",
]
