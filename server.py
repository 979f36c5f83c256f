#!/usr/bin/env python3
"""
FFHB Calendar Service

Serves an iCal feed for any team of the French Handball Federation:

    http://HOST:5000/?url=<ffhandball.fr team page>&title=<optional name>

Usage:
    FFHB_DECRYPTOR=mypackage.cipher:decipher FFHB_CFK_KEY=... python server.py --port 5000
"""

from __future__ import annotations

import argparse
import logging

from flask import Flask, Response, request

from ffhb_calendar.config import load_settings
from ffhb_calendar.pipeline import CalendarPipeline, pipeline_from_settings

logger = logging.getLogger(__name__)


def create_app(pipeline: CalendarPipeline) -> Flask:
    """Create Flask app."""
    app = Flask(__name__)

    @app.route("/")
    def serve_calendar():
        url = request.args.get("url", "").strip()
        title = request.args.get("title", "").strip() or None

        result = pipeline.get_ics(url, title)
        headers = {}
        if result.is_calendar:
            headers = {
                "Content-Disposition": 'inline; filename="calendar.ics"',
                "Cache-Control": "no-cache, no-store, must-revalidate",
            }
        return Response(
            result.body,
            status=result.status,
            content_type=result.content_type,
            headers=headers,
        )

    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="FFHB iCal Subscription Service")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", "-p", type=int, default=5000, help="HTTP port (default: 5000)")
    args = parser.parse_args()

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    app = create_app(pipeline_from_settings(settings))
    logger.info(f"Serving calendars on http://{args.host}:{args.port}/?url=<team page>")
    app.run(host=args.host, port=args.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
