"""Tests for Pushover alerts."""

from __future__ import annotations

from urllib.parse import parse_qs

import pytest
import responses

from ffhb_calendar.errors import DecryptionError, EmptyFixtureListError, UpstreamFetchError
from ffhb_calendar.notify import PUSHOVER_URL, error_kind, format_alert, send_error_notification
from ffhb_calendar.resolver import resolve_team_ref

from conftest import TEAM_URL


@pytest.fixture
def pushover_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHOVER_USER_KEY", "user")
    monkeypatch.setenv("PUSHOVER_API_TOKEN", "token")


class TestFormatAlert:
    def test_error_kinds(self) -> None:
        assert error_kind(UpstreamFetchError("503")) == "FFHB unreachable"
        assert error_kind(DecryptionError("bad key")) == "FFHB payload unreadable"
        assert error_kind(EmptyFixtureListError(TEAM_URL)) == "No fixtures"
        assert error_kind(ValueError("boom")) is None

    def test_names_team_and_competition(self) -> None:
        team = resolve_team_ref(TEAM_URL)

        title, message = format_alert(UpstreamFetchError("HTTP 503"), team)

        assert title == "FFHB Calendar: FFHB unreachable (équipe 1797563)"
        assert "Équipe : 1797563" in message
        assert "Compétition : nationale-1-masculine-2023-2024-23181" in message
        assert TEAM_URL in message
        assert message.endswith("HTTP 503")

    def test_unknown_error_uses_type_name(self) -> None:
        title, _ = format_alert(KeyError("x"), resolve_team_ref(TEAM_URL))
        assert title.startswith("FFHB Calendar: KeyError")

    def test_without_team(self) -> None:
        title, message = format_alert(ValueError("boom"), None, "https://example.com/")
        assert title == "FFHB Calendar: ValueError"
        assert message == "URL: https://example.com/\n\nboom"


class TestSendErrorNotification:
    def test_not_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PUSHOVER_USER_KEY", raising=False)
        monkeypatch.delenv("PUSHOVER_API_TOKEN", raising=False)
        assert send_error_notification(ValueError("boom")) is False

    @responses.activate
    def test_sends_alert(self, pushover_env: None) -> None:
        responses.add(responses.POST, PUSHOVER_URL, json={"status": 1})

        assert send_error_notification(DecryptionError("bad key"), resolve_team_ref(TEAM_URL))

        form = parse_qs(responses.calls[0].request.body)
        assert form["title"] == ["FFHB Calendar: FFHB payload unreadable (équipe 1797563)"]
        assert form["url"] == [TEAM_URL]
        assert form["token"] == ["token"]

    @responses.activate
    def test_send_failure(self, pushover_env: None) -> None:
        responses.add(responses.POST, PUSHOVER_URL, status=500)
        assert send_error_notification(ValueError("boom"), url=TEAM_URL) is False
