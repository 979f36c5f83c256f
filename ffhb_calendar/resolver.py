"""Team identifier resolution from FFHB team page URLs."""

from __future__ import annotations

import re

from ffhb_calendar import TeamRef
from ffhb_calendar.errors import MalformedUrlError

TEAM_ID_RE = re.compile(r"/equipe-([^/)]+)/")


def resolve_team_ref(url: str) -> TeamRef:
    """Extract the team identifier and competition slug from a team page URL.

    https://www.ffhandball.fr/competitions/<season>/<level>/<competition>/equipe-<id>/
    """
    match = TEAM_ID_RE.search(url)
    if not match:
        raise MalformedUrlError(url)

    segments = re.sub(r"/$", "", url).split("/")
    competition_slug = segments[-2] if len(segments) >= 2 else ""

    return TeamRef(
        team_id=match.group(1),
        competition_slug=competition_slug,
        source_url=url,
        base_url="/".join(segments[:-1]),
    )


def fixture_url(team: TeamRef, pool_id: str, fixture_id: str) -> str:
    """URL of a fixture detail page, which holds the venue."""
    return f"{team.base_url}/poule-{pool_id}/rencontre-{fixture_id}"
