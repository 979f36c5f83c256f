"""Pushover alerts when the FFHB website stops answering the way we expect."""

from __future__ import annotations

import logging
import os

import requests

from ffhb_calendar import TeamRef
from ffhb_calendar.errors import DecryptionError, EmptyFixtureListError, UpstreamFetchError

logger = logging.getLogger(__name__)

PUSHOVER_URL = "https://api.pushover.net/1/messages.json"

# Failures that point at a change on the FFHB side rather than a bad link
ERROR_KINDS: dict[type[Exception], str] = {
    UpstreamFetchError: "FFHB unreachable",
    DecryptionError: "FFHB payload unreadable",
    EmptyFixtureListError: "No fixtures",
}


def error_kind(error: Exception) -> str | None:
    """Alert label of an error, None for errors not worth an alert."""
    for error_type, kind in ERROR_KINDS.items():
        if isinstance(error, error_type):
            return kind
    return None


def format_alert(error: Exception, team: TeamRef | None, url: str = "") -> tuple[str, str]:
    """Title and body of the alert for a failed team calendar."""
    kind = error_kind(error) or type(error).__name__
    if team is None:
        return f"FFHB Calendar: {kind}", f"URL: {url}\n\n{error}"

    title = f"FFHB Calendar: {kind} (équipe {team.team_id})"
    lines = [
        f"Équipe : {team.team_id}",
        f"Compétition : {team.competition_slug or '?'}",
        f"URL : {team.source_url}",
        "",
        str(error),
    ]
    return title, "\n".join(lines)


def send_error_notification(error: Exception, team: TeamRef | None = None, url: str = "") -> bool:
    """Send an alert for a failed calendar via Pushover.

    Reads PUSHOVER_USER_KEY and PUSHOVER_API_TOKEN from environment.
    Returns True if sent, False if credentials missing or send failed.
    """
    user_key = os.environ.get("PUSHOVER_USER_KEY", "")
    api_token = os.environ.get("PUSHOVER_API_TOKEN", "")

    if not user_key or not api_token:
        logger.debug("Pushover not configured (set PUSHOVER_USER_KEY and PUSHOVER_API_TOKEN)")
        return False

    title, message = format_alert(error, team, url)
    try:
        resp = requests.post(
            PUSHOVER_URL,
            data={
                "token": api_token,
                "user": user_key,
                "title": title[:250],
                "message": message[:1024],
                "url": team.source_url if team else url,
                "priority": 0,
            },
            timeout=10,
        )
        resp.raise_for_status()
        logger.info(f"Pushover notification sent: {title}")
        return True
    except requests.RequestException as e:
        logger.warning(f"Failed to send Pushover notification: {e}")
        return False
