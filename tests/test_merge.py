import pytest

from leaguepanel.errors import ValidationError
from leaguepanel.merge import build_create_fields, build_update_fields, coerce_number
from leaguepanel.models import MatchPayload, NewsPayload, PlayerPayload, TeamPayload


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(3, 3), (2.5, 2.5), ("7", 7), (" 1.5 ", 1.5), ("", 0), (True, 1)],
)
def test_coerce_number(raw, expected):
    assert coerce_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "nan", float("inf"), [1], {"a": 1}])
def test_coerce_number_rejects(raw):
    with pytest.raises(ValueError):
        coerce_number(raw)


def test_team_create_fills_every_field():
    fields = build_create_fields(TeamPayload.model_validate({"name": "Lions", "won": "3"}))
    assert fields == {
        "LogoUrl": "",
        "draw": 0,
        "ga": 0,
        "gf": 0,
        "lost": 0,
        "name": "Lions",
        "name_mm": "",
        "played": 0,
        "won": 3,
    }


def test_create_defaults_bad_numbers_to_zero():
    fields = build_create_fields(PlayerPayload.model_validate({"name": "Aung", "number": "ten"}))
    assert fields["number"] == 0


def test_match_create_defaults_status_and_time():
    fields = build_create_fields(MatchPayload.model_validate({"homeTeamId": "a", "awayTeamId": "b", "date": "05-03-2024"}))
    assert fields["status"] == "upcoming"
    assert fields["time"] == "00:00"
    assert fields["homeScore"] == 0
    assert "matchId" not in fields


def test_news_create_lists():
    fields = build_create_fields(
        NewsPayload.model_validate({"title": "t", "body": "b", "imgUrl": "not-a-list", "tags": ["cup", "cup", "final"]})
    )
    assert fields["imgUrl"] == []
    assert fields["tags"] == ["cup", "final"]
    assert "date" not in fields


def test_update_keeps_only_supplied_fields():
    fields = build_update_fields(TeamPayload.model_validate({"won": 5}))
    assert fields == {"won": 5}


def test_update_keeps_zero_and_empty_values():
    payload = {"won": 0, "name_mm": "", "LogoUrl": ""}
    assert build_update_fields(TeamPayload.model_validate(payload)) == payload


def test_update_treats_null_and_unknown_keys_as_absent():
    fields = build_update_fields(TeamPayload.model_validate({"won": None, "rank": 1, "lost": "2"}))
    assert fields == {"lost": 2}


def test_update_ignores_server_owned_news_date():
    fields = build_update_fields(NewsPayload.model_validate({"date": "2020-01-01", "title": "New"}))
    assert fields == {"title": "New"}


def test_update_skips_non_list_values_for_list_fields():
    fields = build_update_fields(NewsPayload.model_validate({"tags": "cup", "imgUrl": []}))
    assert fields == {"imgUrl": []}


def test_update_rejects_non_numeric_input():
    with pytest.raises(ValidationError, match="homeScore must be numeric"):
        build_update_fields(MatchPayload.model_validate({"homeScore": "two"}))


def test_empty_update_is_empty_write_set():
    assert build_update_fields(PlayerPayload.model_validate({})) == {}


def test_attribute_names_are_not_stored_keys():
    fields = build_create_fields(
        TeamPayload.model_validate({"name": "Lions", "goals_for": 7, "drawn": 2, "logo_url": "x.png"})
    )
    assert fields["gf"] == 0
    assert fields["draw"] == 0
    assert fields["LogoUrl"] == ""
    assert "goals_for" not in fields

    update = build_update_fields(MatchPayload.model_validate({"away_score": 3, "homeScore": 1}))
    assert update == {"homeScore": 1}
