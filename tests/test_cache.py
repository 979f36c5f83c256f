"""Tests for the file cache."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ffhb_calendar.cache import FileCacheStore, validate_ics

ICS = "BEGIN:VCALENDAR\r\nVERSION:2.0\r\nEND:VCALENDAR\r\n"
T0 = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


class TestFileCacheStore:
    def test_save_and_load(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path)
        store.put("1797563", ICS, now=T0)
        loaded = store.get("1797563", now=T0 + timedelta(minutes=5))
        assert loaded is not None
        assert loaded.value == ICS
        assert loaded.stored_at == T0

    def test_file_named_after_team(self, tmp_path: Path) -> None:
        FileCacheStore(tmp_path).put("1797563", ICS, now=T0)
        record = json.loads((tmp_path / "1797563.json").read_text(encoding="utf-8"))
        assert record["value"] == ICS
        assert datetime.fromisoformat(record["stored_at"]) == T0

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path / "icals" / "nested")
        store.put("1", ICS)
        assert (tmp_path / "icals" / "nested" / "1.json").exists()

    def test_fresh_just_before_ttl(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path)
        store.put("1", ICS, now=T0)
        assert store.get("1", now=T0 + timedelta(minutes=59, seconds=59)) is not None

    def test_expired_at_ttl(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path)
        store.put("1", ICS, now=T0)
        assert store.get("1", now=T0 + timedelta(hours=1)) is None
        assert store.get("1", now=T0 + timedelta(hours=3)) is None

    def test_custom_ttl(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path, ttl=timedelta(minutes=10))
        store.put("1", ICS, now=T0)
        assert store.get("1", now=T0 + timedelta(minutes=11)) is None

    def test_last_write_wins(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path)
        store.put("1", "first", now=T0)
        store.put("1", ICS, now=T0)
        assert store.get("1", now=T0).value == ICS

    def test_load_missing_returns_none(self, tmp_path: Path) -> None:
        assert FileCacheStore(tmp_path).get("Nonexistent") is None

    def test_corrupt_file_returns_none(self, tmp_path: Path) -> None:
        (tmp_path / "1.json").write_text("{not json", encoding="utf-8")
        assert FileCacheStore(tmp_path).get("1") is None

    def test_timestamp_without_offset_is_utc(self, tmp_path: Path) -> None:
        record = {"stored_at": "2024-01-15T12:00:00", "value": ICS}
        (tmp_path / "1.json").write_text(json.dumps(record), encoding="utf-8")
        store = FileCacheStore(tmp_path)

        loaded = store.get("1", now=T0 + timedelta(minutes=30))
        assert loaded is not None
        assert loaded.stored_at == T0
        assert store.get("1", now=T0 + timedelta(hours=2)) is None

    def test_entry_from_the_future_is_stale(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path)
        store.put("1", ICS, now=T0 + timedelta(days=2))
        assert store.get("1", now=T0) is None

    def test_slight_clock_skew_is_tolerated(self, tmp_path: Path) -> None:
        store = FileCacheStore(tmp_path)
        store.put("1", ICS, now=T0 + timedelta(minutes=5))
        assert store.get("1", now=T0) is not None

    def test_record_without_timestamp_returns_none(self, tmp_path: Path) -> None:
        (tmp_path / "1.json").write_text(json.dumps({"value": ICS}), encoding="utf-8")
        assert FileCacheStore(tmp_path).get("1") is None


class TestValidateIcs:
    def test_valid(self) -> None:
        assert validate_ics(b"BEGIN:VCALENDAR\r\nX-WR-CALNAME:N1M\r\nEND:VCALENDAR\r\n")

    def test_unnamed_calendar_is_invalid(self) -> None:
        assert not validate_ics(b"BEGIN:VCALENDAR\r\nEND:VCALENDAR")

    def test_truncated_calendar_is_invalid(self) -> None:
        assert not validate_ics(b"BEGIN:VCALENDAR\r\nX-WR-CALNAME:N1M\r\nBEGIN:VEVENT\r\n")

    def test_invalid(self) -> None:
        assert not validate_ics(b"not a calendar")
        assert not validate_ics(b"")
