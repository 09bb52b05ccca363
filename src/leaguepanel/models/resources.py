"""Inbound payload models for the four league resources.

Every field is optional at the model level: the same model backs create
(defaults filled in, required fields checked by the validator) and update
(only fields in ``model_fields_set`` are written). Field aliases are the
stored document keys, which the public site reads directly.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


PLAYER_POSITIONS: Tuple[str, ...] = ("GK", "DF", "MF", "FW")
MATCH_STATUSES: Tuple[str, ...] = ("upcoming", "ongoing", "finished")


class ResourcePayload(BaseModel):
    """Base for request payloads; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    resource: ClassVar[str] = ""
    numeric_fields: ClassVar[FrozenSet[str]] = frozenset()
    list_fields: ClassVar[FrozenSet[str]] = frozenset()
    set_fields: ClassVar[FrozenSet[str]] = frozenset()
    required_fields: ClassVar[Tuple[str, ...]] = ()
    enum_fields: ClassVar[Dict[str, Tuple[str, ...]]] = {}
    date_fields: ClassVar[FrozenSet[str]] = frozenset()
    create_defaults: ClassVar[Dict[str, Any]] = {}

    @classmethod
    def stored_keys(cls) -> list[str]:
        return [info.alias or name for name, info in cls.model_fields.items()]

    def supplied(self) -> dict[str, Any]:
        """Stored-key view of the fields the caller actually sent.

        Explicit JSON ``null`` is treated the same as an absent key.
        """
        values: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                continue
            info = type(self).model_fields[name]
            values[info.alias or name] = value
        return values


class TeamPayload(ResourcePayload):
    resource: ClassVar[str] = "team"
    numeric_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"draw", "ga", "gf", "lost", "played", "won"}
    )
    required_fields: ClassVar[Tuple[str, ...]] = ("name",)

    logo_url: str | None = Field(default=None, alias="LogoUrl")
    drawn: Any = Field(default=None, alias="draw")
    goals_against: Any = Field(default=None, alias="ga")
    goals_for: Any = Field(default=None, alias="gf")
    lost: Any = None
    name: str | None = None
    name_mm: str | None = None
    played: Any = None
    won: Any = None


class PlayerPayload(ResourcePayload):
    resource: ClassVar[str] = "player"
    numeric_fields: ClassVar[FrozenSet[str]] = frozenset({"number"})
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "team_id", "position")
    enum_fields: ClassVar[Dict[str, Tuple[str, ...]]] = {"position": PLAYER_POSITIONS}

    image_url: str | None = Field(default=None, alias="imageUrl")
    name: str | None = None
    name_en: str | None = None
    number: Any = None
    position: str | None = None
    team_id: str | None = None


class NewsPayload(ResourcePayload):
    """News article; ``date`` is server-owned and not accepted here."""

    resource: ClassVar[str] = "news article"
    list_fields: ClassVar[FrozenSet[str]] = frozenset({"imgUrl", "tags"})
    set_fields: ClassVar[FrozenSet[str]] = frozenset({"tags"})
    required_fields: ClassVar[Tuple[str, ...]] = ("title", "body")

    body: str | None = None
    image_urls: Any = Field(default=None, alias="imgUrl")
    tags: Any = None
    title: str | None = None


class MatchPayload(ResourcePayload):
    """Match fixture; ``matchId`` is allocated server-side."""

    resource: ClassVar[str] = "match"
    numeric_fields: ClassVar[FrozenSet[str]] = frozenset({"awayScore", "homeScore"})
    required_fields: ClassVar[Tuple[str, ...]] = ("homeTeamId", "awayTeamId", "date", "time", "status")
    enum_fields: ClassVar[Dict[str, Tuple[str, ...]]] = {"status": MATCH_STATUSES}
    date_fields: ClassVar[FrozenSet[str]] = frozenset({"date"})
    create_defaults: ClassVar[Dict[str, Any]] = {"status": "upcoming", "time": "00:00"}

    away_score: Any = Field(default=None, alias="awayScore")
    away_team_id: str | None = Field(default=None, alias="awayTeamId")
    date: str | None = None
    home_score: Any = Field(default=None, alias="homeScore")
    home_team_id: str | None = Field(default=None, alias="homeTeamId")
    status: str | None = None
    time: str | None = None
