"""Tests for the content filter rules."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.airing_catalog.filters import ContentPolicy, is_excluded, show_country  # noqa: E402
from backend.airing_catalog.schemas import Show  # noqa: E402
from backend.airing_catalog.settings import CatalogSettings  # noqa: E402
from backend.tests.helpers import make_show  # noqa: E402


def _show(**overrides) -> Show:
    return Show.model_validate(make_show(**overrides))


def _web_show(name: str, code: str | None = "US") -> Show:
    country = {"code": code} if code is not None else None
    return _show(network=None, webChannel={"id": 1, "name": name, "country": country})


def test_regular_scripted_show_is_included() -> None:
    assert is_excluded(_show()) is False


@pytest.mark.parametrize("label", ["Sports", "sports", "SPORTS"])
def test_sports_type_is_excluded(label: str) -> None:
    assert is_excluded(_show(type=label)) is True


@pytest.mark.parametrize("genre", ["Sports", "sPoRtS"])
def test_sports_genre_is_excluded(genre: str) -> None:
    assert is_excluded(_show(genres=["Drama", genre])) is True


@pytest.mark.parametrize("label", ["News", "news", "Talk Show", "talk show"])
def test_news_and_talk_shows_are_excluded(label: str) -> None:
    assert is_excluded(_show(type=label, genres=[])) is True


def test_game_show_genre_does_not_exempt_news_by_default() -> None:
    show = _show(type="Talk Show", genres=["Game Show"])

    assert is_excluded(show) is True


def test_exemption_flag_keeps_panel_talk_shows() -> None:
    policy = ContentPolicy(news_exemption_enabled=True)

    assert is_excluded(_show(type="Talk Show", genres=["Quiz"]), policy) is False
    assert is_excluded(_show(type="News", genres=["Comedy"]), policy) is True


def test_exemption_never_lifts_sports() -> None:
    policy = ContentPolicy(news_exemption_enabled=True)
    show = _show(type="Sports", genres=["Game Show"])

    assert is_excluded(show, policy) is True


def test_foreign_network_is_excluded_and_allowed_country_kept() -> None:
    german = _show(network={"id": 1, "name": "ZDF", "country": {"code": "DE"}})
    british = _show(network={"id": 2, "name": "BBC One", "country": {"code": "GB"}})

    assert is_excluded(german) is True
    assert is_excluded(british) is False


def test_country_codes_compare_case_insensitively() -> None:
    show = _show(network={"id": 2, "name": "RTE", "country": {"code": "ie"}})

    assert is_excluded(show) is False


@pytest.mark.parametrize(
    "network",
    [
        None,
        {"id": 3, "name": "Unknown", "country": None},
        {"id": 3, "name": "Unknown", "country": {"code": ""}},
        {"id": 3, "name": "Unknown", "country": {"name": "Nowhere"}},
    ],
)
def test_missing_country_code_never_excludes(network) -> None:
    show = _show(network=network, webChannel=None)

    assert show_country(show) is None
    assert is_excluded(show) is False


def test_web_channel_country_used_without_network() -> None:
    assert is_excluded(_web_show("Viki", code="KR")) is True
    assert is_excluded(_web_show("Netflix", code=None)) is False


@pytest.mark.parametrize("name", ["iQiyi", "IQIYI", "iqiyi"])
def test_blocked_channel_name_is_excluded(name: str) -> None:
    assert is_excluded(_web_show(name, code=None)) is True


@pytest.mark.parametrize("name", ["YouTube", "YouTube Premium", "my youtube channel"])
def test_blocked_channel_substring_is_excluded(name: str) -> None:
    assert is_excluded(_web_show(name, code=None)) is True


def test_settings_build_a_swappable_policy() -> None:
    settings = CatalogSettings(
        allowed_countries=["de"],
        blocked_channel_names=["Netflix"],
        blocked_channel_substrings=[],
    )
    policy = settings.content_policy()

    german = _show(network={"id": 1, "name": "ZDF", "country": {"code": "DE"}})
    american = _show()

    assert policy.allowed_countries == frozenset({"DE"})
    assert is_excluded(german, policy) is False
    assert is_excluded(american, policy) is True
    assert is_excluded(_web_show("netflix", code=None), policy) is True
    assert is_excluded(_web_show("YouTube", code=None), policy) is False
