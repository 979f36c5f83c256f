#!/usr/bin/env python3
"""
FFHB Calendar Generator

Builds the ICS calendar of one team from its ffhandball.fr page and writes
it to a file. Uses the same cache as the web service.

Usage:
    python generate_calendar.py https://www.ffhandball.fr/competitions/.../equipe-1797563/
    python generate_calendar.py <url> --title "Mon équipe" --output public/team.ics
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ffhb_calendar.config import load_settings
from ffhb_calendar.errors import MalformedUrlError
from ffhb_calendar.notify import send_error_notification
from ffhb_calendar.pipeline import pipeline_from_settings
from ffhb_calendar.resolver import resolve_team_ref


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate an ICS calendar for an FFHB team")
    parser.add_argument("url", help="Team page on ffhandball.fr")
    parser.add_argument("--title", help="Calendar name (default: pool name)")
    parser.add_argument("--output", "-o", type=Path, help="Output file (default: <team id>.ics)")
    args = parser.parse_args(argv)

    team = None
    try:
        team = resolve_team_ref(args.url)
        pipeline = pipeline_from_settings(load_settings())

        print(f"Fetching fixtures for team {team.team_id} ({team.competition_slug})...")
        ics_bytes = pipeline.build_team(team, args.title)
    except Exception as e:
        print(f"  ERROR: Failed to generate calendar for {args.url}: {e}")
        if not isinstance(e, MalformedUrlError):
            send_error_notification(e, team, args.url)
        return 1

    output = args.output or Path(f"{team.team_id}.ics")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(ics_bytes)
    print(f"  Saved {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
