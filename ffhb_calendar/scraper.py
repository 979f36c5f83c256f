"""FFHB competitions API client and fixture page scraper."""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor

import requests
from bs4 import BeautifulSoup

from ffhb_calendar import FixtureList, TeamRef, VenueFailed, VenueFound, VenueInfo, VenueOutcome
from ffhb_calendar.config import API_URL, USER_AGENT
from ffhb_calendar.errors import UpstreamFetchError, VenueLookupError
from ffhb_calendar.resolver import fixture_url

logger = logging.getLogger(__name__)

RENCONTRE_LIST_BLOCK = "competitions---rencontre-list"
VENUE_COMPONENT = "competitions---rencontre-salle"


def fetch_fixture_payload(
    team: TeamRef,
    api_url: str = API_URL,
    timeout: int = 30,
    user_agent: str = USER_AGENT,
) -> str:
    """Fetch the encrypted fixture list of a team."""
    params = {
        "block": RENCONTRE_LIST_BLOCK,
        "url_competition": team.competition_slug,
        "ext_equipe_id": team.team_id,
    }
    try:
        response = requests.get(
            api_url, params=params, headers={"User-Agent": user_agent}, timeout=timeout
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise UpstreamFetchError(f"Échec de la récupération des rencontres : {e}") from e

    logger.info(f"Fetched fixture list for team {team.team_id} ({len(response.text)} bytes)")
    return response.text


def extract_component_attributes(html: str, component_name: str) -> dict | None:
    """Return the JSON ``attributes`` of a named smartfire component, if any."""
    soup = BeautifulSoup(html, "html.parser")
    component = soup.find("smartfire-component", attrs={"name": component_name})
    if not component or not component.get("attributes"):
        return None

    try:
        attributes = json.loads(component["attributes"])
    except ValueError as e:
        raise VenueLookupError(f"Malformed {component_name} attributes: {e}") from e

    return attributes if isinstance(attributes, dict) else None


def parse_venue_from_html(html: str) -> VenueInfo:
    """Parse the venue of a fixture detail page."""
    attributes = extract_component_attributes(html, VENUE_COMPONENT)
    if attributes is None:
        raise VenueLookupError(f"No {VENUE_COMPONENT} component found")

    equipement = attributes.get("equipement") or {}
    if not isinstance(equipement, dict):
        raise VenueLookupError("Unexpected equipement value")

    return VenueInfo(
        label=equipement.get("libelle"),
        street=equipement.get("rue"),
        city=equipement.get("ville"),
    )


def fetch_venue(url: str, timeout: int = 30, user_agent: str = USER_AGENT) -> VenueInfo:
    """Fetch a fixture detail page and read its venue."""
    response = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
    response.raise_for_status()
    return parse_venue_from_html(response.text)


def fetch_venues(
    team: TeamRef,
    fixture_list: FixtureList,
    timeout: int = 30,
    user_agent: str = USER_AGENT,
) -> list[VenueOutcome]:
    """Fetch the venue of every fixture concurrently.

    Every fetch is awaited; a failed page yields a VenueFailed at its
    position without affecting the others.
    """
    fixtures = fixture_list.fixtures
    if not fixtures:
        return []

    urls = [fixture_url(team, fixture_list.poule.pool_id, f.fixture_id) for f in fixtures]
    with ThreadPoolExecutor(max_workers=len(urls)) as executor:
        futures = [executor.submit(fetch_venue, url, timeout, user_agent) for url in urls]

        outcomes: list[VenueOutcome] = []
        for url, future in zip(urls, futures):
            try:
                outcomes.append(VenueFound(future.result()))
            except Exception as e:
                logger.warning(f"No venue for {url}: {e}")
                outcomes.append(VenueFailed(str(e)))

    found = sum(isinstance(o, VenueFound) for o in outcomes)
    logger.info(f"Resolved {found}/{len(outcomes)} venues for team {team.team_id}")
    return outcomes
