"""Calendar caching, so the FFHB website is not hit on every subscription refresh."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Protocol

from ffhb_calendar import CachedPayload

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    def get(self, team_id: str, now: datetime | None = None) -> CachedPayload | None: ...

    def put(self, team_id: str, value: str, now: datetime | None = None) -> CachedPayload: ...


class FileCacheStore:
    """One JSON file per team: {"stored_at": <iso>, "value": <ics text>}.

    Entries older than the TTL are treated as missing. Writes are not locked;
    concurrent writers for the same team simply overwrite each other.
    """

    def __init__(self, cache_dir: Path, ttl: timedelta = timedelta(hours=1)) -> None:
        self.cache_dir = Path(cache_dir)
        self.ttl = ttl

    def path_for(self, team_id: str) -> Path:
        return self.cache_dir / f"{team_id}.json"

    def get(self, team_id: str, now: datetime | None = None) -> CachedPayload | None:
        cache_file = self.path_for(team_id)
        if not cache_file.exists():
            return None

        try:
            record = json.loads(cache_file.read_text(encoding="utf-8"))
            payload = CachedPayload(
                value=record["value"],
                stored_at=_aware(datetime.fromisoformat(record["stored_at"])),
            )
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable cache file {cache_file}: {e}")
            return None

        now = now or datetime.now(timezone.utc)
        # Clock skew counts too: an entry stamped in the future is not fresh
        if abs(now - payload.stored_at) >= self.ttl:
            logger.debug(f"Cache entry for team {team_id} expired")
            return None
        return payload

    def put(self, team_id: str, value: str, now: datetime | None = None) -> CachedPayload:
        payload = CachedPayload(value=value, stored_at=now or datetime.now(timezone.utc))
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.path_for(team_id).write_text(
            json.dumps({"stored_at": payload.stored_at.isoformat(), "value": payload.value}),
            encoding="utf-8",
        )
        return payload


def validate_ics(data: bytes) -> bool:
    """Check that a payload is a named calendar built by this service."""
    text = data.decode("utf-8", errors="replace").strip()
    return (
        text.startswith("BEGIN:VCALENDAR")
        and text.endswith("END:VCALENDAR")
        and "\nX-WR-CALNAME" in text
    )


def _aware(stored_at: datetime) -> datetime:
    # Records written without an offset are UTC
    if stored_at.tzinfo is None:
        return stored_at.replace(tzinfo=timezone.utc)
    return stored_at
