"""ICS calendar generation from FFHB fixtures."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta, timezone

from icalendar import Calendar, Event

from ffhb_calendar import CalendarEvent, FixtureList, Poule, RawFixture, VenueInfo, VenueOutcome

logger = logging.getLogger(__name__)

MATCH_DURATION = timedelta(minutes=90)
DOCUMENT_URL = "https://media-ffhb-fdm.ffhandball.fr/fdm/{0}/{1}/{2}/{3}/{code}.pdf"

WIN = "✅"
LOSS = "❌"
DRAW = "🟠"
UPCOMING = "👉 À venir"
LINK = "🔗"
REFEREE = "🧑‍⚖️"


def create_calendar(name: str, events: list[CalendarEvent], tz: str = "Europe/Paris") -> Calendar:
    """Create an ICS calendar from built events."""
    cal = Calendar()
    cal.add("prodid", "-//FFHB Calendar//ffhandball.fr//FR")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", name)
    cal.add("x-wr-timezone", tz)
    # Matches the cache lifetime, no point in refreshing sooner
    cal.add("x-published-ttl", "PT1H")

    stamp = datetime.now(timezone.utc)
    for event in events:
        cal.add_component(_create_event(event, stamp))

    # VTIMEZONE for every TZID used by the events
    cal.add_missing_timezones()
    return cal


def _create_event(data: CalendarEvent, stamp: datetime) -> Event:
    event = Event()
    event.add("uid", data.uid)
    event.add("dtstamp", stamp)
    event.add("summary", data.summary)
    event.add("dtstart", data.start)
    event.add("dtend", data.end)
    event.add("description", data.description)
    if data.location:
        event.add("location", data.location)
    if data.url:
        event.add("url", data.url)
    if data.attachment:
        event.add("attach", data.attachment)
    return event


def build_events(
    fixture_list: FixtureList, venues: list[VenueOutcome], source_url: str
) -> list[CalendarEvent]:
    """Build one event per dated fixture, pairing fixtures and venues by position."""
    events = []
    for i, fixture in enumerate(fixture_list.fixtures):
        venue = venues[i].venue if i < len(venues) else VenueInfo()
        event = build_event(fixture, fixture_list.poule, venue, source_url)
        if event:
            events.append(event)

    skipped = len(fixture_list.fixtures) - len(events)
    if skipped:
        logger.info(f"Skipped {skipped} fixture(s) without a date")
    return events


def build_event(
    fixture: RawFixture, poule: Poule, venue: VenueInfo, source_url: str
) -> CalendarEvent | None:
    """Map a fixture to a calendar event. Fixtures without a date yield None."""
    if fixture.date is None:
        return None

    attachment = attachment_url(fixture.document_code)
    return CalendarEvent(
        uid=f"{fixture.fixture_id}@ffhandball.fr",
        start=fixture.date,
        end=fixture.date + MATCH_DURATION,
        summary=(
            f"J.{fixture.round_number} : "
            f"{fixture.team1_label or '?'} vs {fixture.team2_label or '?'}"
        ),
        description=describe_fixture(fixture, poule, attachment),
        location=format_location(venue),
        url=source_url,
        attachment=attachment,
    )


def describe_fixture(fixture: RawFixture, poule: Poule, attachment: str | None) -> str:
    lines = []
    if fixture.has_score:
        status = status_glyph(fixture, poule)
        lines.append(f"{status} Score : {fixture.team1_score} - {fixture.team2_score}")
    else:
        lines.append(UPCOMING)
    if attachment:
        lines.append(f"{LINK} {attachment.removeprefix('https://')}")
    referees = referee_sentence(fixture.referees)
    if referees:
        lines.append(f"{REFEREE} {referees}")
    return "\n".join(lines)


def status_glyph(fixture: RawFixture, poule: Poule) -> str:
    """Win/loss/draw glyph from the point of view of the followed team.

    The API does not say which side is the followed team; the first team is
    taken to be it when its label matches the pool label.
    """
    if not fixture.has_score:
        return ""

    is_team_one = _normalise(fixture.team1_label) == _normalise(poule.label)
    team_one = parse_score(fixture.team1_score)
    team_two = parse_score(fixture.team2_score)
    ours, theirs = (team_one, team_two) if is_team_one else (team_two, team_one)

    if ours > theirs:
        return WIN
    if ours < theirs:
        return LOSS
    return DRAW


def parse_score(score: str | None) -> int:
    """Leading integer of a score, 0 when there is none."""
    match = re.match(r"\s*([+-]?\d+)", score or "")
    return int(match.group(1)) if match else 0


def attachment_url(code: str | None) -> str | None:
    """URL of the match sheet PDF, sharded by the first four characters of its code."""
    if not code or len(code) < 4:
        return None
    return DOCUMENT_URL.format(*code[:4], code=code)


def referee_sentence(referees: tuple[str, ...] | list[str]) -> str:
    """Join names the French way: "A", "A et B", "A, B et C"."""
    names = [r for r in referees if r]
    if len(names) < 2:
        return "".join(names)
    return f"{', '.join(names[:-1])} et {names[-1]}"


def format_location(venue: VenueInfo) -> str:
    parts = [p.strip() for p in (venue.label, venue.street, venue.city) if p]
    return ", ".join(p for p in parts if p).upper()


def calendar_name(title: str | None, poule: Poule) -> str:
    """Calendar display name with the season years appended when known."""
    name = title or poule.label or ""
    years = season_years(poule.journees)
    if years:
        name += f" ({' - '.join(str(y) for y in years)})"
    return name


def season_years(journees: str | None) -> list[int]:
    """Distinct years of the first and last rounds, in order."""
    if not journees:
        return []
    try:
        rounds = json.loads(journees)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed journees metadata")
        return []
    if not isinstance(rounds, list) or not rounds:
        return []

    years: list[int] = []
    for round_ in (rounds[0], rounds[-1]):
        year = _year(round_.get("date_debut") if isinstance(round_, dict) else None)
        if year and year not in years:
            years.append(year)
    return years


def _year(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).strip()).year
    except ValueError:
        return None


def _normalise(label: str | None) -> str | None:
    return label.strip().lower() if label is not None else None
