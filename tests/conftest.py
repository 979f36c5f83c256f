from __future__ import annotations

import json
from pathlib import Path

import pytest

from ffhb_calendar import FixtureList
from ffhb_calendar.crypto import parse_fixture_list

FIXTURE_DIR = Path(__file__).parent / "fixtures"

TEAM_URL = (
    "https://www.ffhandball.fr/competitions/saison-2023-2024-19/national/"
    "nationale-1-masculine-2023-2024-23181/equipe-1797563/"
)
BASE_URL = (
    "https://www.ffhandball.fr/competitions/saison-2023-2024-19/national/"
    "nationale-1-masculine-2023-2024-23181"
)


@pytest.fixture
def fixture_data() -> dict:
    return json.loads((FIXTURE_DIR / "rencontre_list.json").read_text(encoding="utf-8"))


@pytest.fixture
def fixture_list(fixture_data: dict) -> FixtureList:
    return parse_fixture_list(fixture_data, source_url=TEAM_URL)


@pytest.fixture
def page_html() -> str:
    return (FIXTURE_DIR / "rencontre_page.html").read_text(encoding="utf-8")
