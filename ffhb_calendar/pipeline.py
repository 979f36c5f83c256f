"""Team URL to calendar pipeline, served through the file cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ffhb_calendar.cache import CacheStore, FileCacheStore, validate_ics
from ffhb_calendar.calendar_gen import build_events, calendar_name, create_calendar
from ffhb_calendar.config import Settings
from ffhb_calendar.crypto import (
    Decryptor,
    KeySource,
    StaticKeySource,
    decrypt_fixture_list,
    load_decryptor,
)
from ffhb_calendar import TeamRef
from ffhb_calendar.errors import CalendarError, MalformedUrlError
from ffhb_calendar.html_gen import generate_error_html, generate_index_html
from ffhb_calendar.notify import send_error_notification
from ffhb_calendar.resolver import resolve_team_ref
from ffhb_calendar.scraper import fetch_fixture_payload, fetch_venues

logger = logging.getLogger(__name__)

CALENDAR_TYPE = "text/calendar; charset=utf-8"
HTML_TYPE = "text/html; charset=utf-8"
UNEXPECTED_ERROR = "Le calendrier n'a pas pu être généré suite à une erreur interne"


@dataclass(frozen=True)
class CalendarResponse:
    status: int
    content_type: str
    body: bytes

    @property
    def is_calendar(self) -> bool:
        return self.content_type == CALENDAR_TYPE


class CalendarPipeline:
    """Builds the calendar of the team behind an ffhandball.fr team URL."""

    def __init__(
        self,
        settings: Settings,
        key_source: KeySource,
        decryptor: Decryptor,
        cache: CacheStore | None = None,
    ) -> None:
        self.settings = settings
        self.key_source = key_source
        self.decryptor = decryptor
        self.cache = cache or FileCacheStore(settings.cache_dir, settings.cache_ttl)

    def get_ics(self, url: str | None, title: str | None = None) -> CalendarResponse:
        """Serve the calendar for a team URL, or an HTML page explaining what went wrong."""
        if not url:
            return CalendarResponse(200, HTML_TYPE, generate_index_html().encode("utf-8"))

        team = None
        try:
            team = resolve_team_ref(url)
            return CalendarResponse(200, CALENDAR_TYPE, self.build_team(team, title))
        except Exception as e:
            logger.exception(f"Failed to build calendar for {url}")
            if not isinstance(e, MalformedUrlError):
                send_error_notification(e, team, url)
            message = str(e) if isinstance(e, CalendarError) else UNEXPECTED_ERROR
            return CalendarResponse(400, HTML_TYPE, generate_error_html(message, url).encode("utf-8"))

    def build_team(self, team: TeamRef, title: str | None = None) -> bytes:
        """Calendar bytes for a resolved team; raises on any failure."""
        url = team.source_url

        cached = self.cache.get(team.team_id)
        if cached is not None:
            data = cached.value.encode("utf-8")
            if validate_ics(data):
                logger.info(f"Serving cached calendar for team {team.team_id}")
                return data
            logger.warning(f"Discarding invalid cached calendar for team {team.team_id}")

        payload = fetch_fixture_payload(
            team,
            api_url=self.settings.api_url,
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
        )
        fixture_list = decrypt_fixture_list(
            payload,
            self.key_source.fetch_key(),
            self.decryptor,
            source_url=url,
            tz=self.settings.timezone,
        )
        logger.info(f"Found {len(fixture_list.fixtures)} fixtures for team {team.team_id}")

        venues = fetch_venues(
            team, fixture_list, timeout=self.settings.timeout, user_agent=self.settings.user_agent
        )
        events = build_events(fixture_list, venues, url)
        cal = create_calendar(
            calendar_name(title, fixture_list.poule), events, self.settings.timezone
        )

        ics_bytes = cal.to_ical()
        if not validate_ics(ics_bytes):
            raise ValueError("Generated ICS failed validation")

        self.cache.put(team.team_id, ics_bytes.decode("utf-8"))
        return ics_bytes


def pipeline_from_settings(settings: Settings) -> CalendarPipeline:
    """Wire the pipeline with the key and decryptor named in the settings."""
    if not settings.decryptor:
        raise ValueError("FFHB_DECRYPTOR is not set (expected 'module:function')")
    return CalendarPipeline(
        settings,
        key_source=StaticKeySource(settings.cfk_key),
        decryptor=load_decryptor(settings.decryptor),
    )
