"""Shared data models of the FFHB calendar service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class TeamRef:
    """Team identifier and competition resolved from a team page URL."""

    team_id: str
    competition_slug: str
    source_url: str
    base_url: str


@dataclass
class Poule:
    """The pool (group) a team plays in."""

    pool_id: str
    label: str | None = None
    journees: str | None = None


@dataclass
class RawFixture:
    """A single scheduled or played match as returned by the API."""

    fixture_id: str
    team1_label: str | None = None
    team2_label: str | None = None
    team1_score: str | None = None
    team2_score: str | None = None
    date: datetime | None = None
    document_code: str | None = None
    referees: tuple[str, ...] = ()
    round_number: str | None = None

    @property
    def has_score(self) -> bool:
        return bool(self.team1_score) and bool(self.team2_score)


@dataclass
class FixtureList:
    """All fixtures of one team, sharing the same pool."""

    fixtures: list[RawFixture]
    poule: Poule


@dataclass(frozen=True)
class VenueInfo:
    """Venue of a fixture, scraped from its detail page."""

    label: str | None = None
    street: str | None = None
    city: str | None = None


@dataclass(frozen=True)
class VenueFound:
    venue: VenueInfo


@dataclass(frozen=True)
class VenueFailed:
    reason: str
    venue: VenueInfo = field(default_factory=VenueInfo)


VenueOutcome = VenueFound | VenueFailed


@dataclass(frozen=True)
class CalendarEvent:
    """A calendar entry derived from a fixture."""

    uid: str
    start: datetime
    end: datetime
    summary: str
    description: str
    location: str
    url: str
    attachment: str | None = None


@dataclass(frozen=True)
class CachedPayload:
    """A serialized calendar along with the moment it was stored."""

    value: str
    stored_at: datetime
