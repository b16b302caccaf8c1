from datetime import date

import pytest

from ludoteca.core.exceptions import ValidationError
from ludoteca.models import Category, Editor, User, VideoGame
from ludoteca.schemas.validators import (
    CATEGORY_CONSTRAINTS,
    EDITOR_CONSTRAINTS,
    USER_CONSTRAINTS,
    VIDEO_GAME_CONSTRAINTS,
    collect_violations,
    email,
    max_length,
    merge,
    not_blank,
    validate_record,
)


@pytest.mark.parametrize("value, expected", [
    ("Action", True),
    ("", False),
    ("   ", False),
    (None, False),
])
def test_not_blank(value, expected):
    assert not_blank().check(value) is expected


def test_max_length():
    rule = max_length(5)
    assert rule.check("abcde")
    assert not rule.check("abcdef")
    assert rule.check(None)


def test_email_rule():
    rule = email()
    assert rule.check("jogador@ludoteca.com")
    assert not rule.check("não-é-email")
    # em branco fica a cargo do not_blank
    assert rule.check("")


def test_category_without_name():
    violations = collect_violations(Category(), CATEGORY_CONSTRAINTS)
    assert [(v.field, v.rule) for v in violations] == [("name", "not_blank")]


def test_editor_country_is_optional():
    assert collect_violations(Editor(name="Sega"), EDITOR_CONSTRAINTS) == []


def test_editor_name_too_long():
    violations = collect_violations(Editor(name="x" * 256), EDITOR_CONSTRAINTS)
    assert [(v.field, v.rule) for v in violations] == [("name", "max_length")]


def test_video_game_reports_every_missing_field():
    violations = collect_violations(VideoGame(), VIDEO_GAME_CONSTRAINTS)
    assert [(v.field, v.rule) for v in violations] == [
        ("title", "not_blank"),
        ("releaseDate", "not_blank"),
        ("description", "not_blank"),
        ("category", "not_null"),
        ("editor", "not_null"),
    ]


def test_complete_video_game_is_valid():
    game = VideoGame(
        title="Celeste",
        release_date=date(2018, 1, 25),
        description="Plataforma",
        category=Category(id=1, name="Plataforma"),
        editor=Editor(id=1, name="Maddy Makes Games"),
    )
    assert collect_violations(game, VIDEO_GAME_CONSTRAINTS) == []


def test_user_email_rules():
    violations = collect_violations(User(email="invalido"), USER_CONSTRAINTS)
    assert [(v.field, v.rule) for v in violations] == [("email", "email")]


def test_validate_record_raises_with_violations():
    with pytest.raises(ValidationError) as exc:
        validate_record(Category(name=""), CATEGORY_CONSTRAINTS)

    assert exc.value.status_code == 400
    assert exc.value.details["violations"] == [
        {"field": "name", "rule": "not_blank", "message": "Este valor não deve estar em branco."}
    ]


def test_merge_only_touches_present_fields():
    editor = Editor(name="Nintendo", country="JP")
    merge(editor, {"name": "Nintendo EPD"})
    assert editor.name == "Nintendo EPD"
    assert editor.country == "JP"


def test_merge_can_set_null():
    editor = Editor(name="Nintendo", country="JP")
    merge(editor, {"country": None})
    assert editor.country is None
