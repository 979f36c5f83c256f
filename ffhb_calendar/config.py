"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Mapping

API_URL = "https://www.ffhandball.fr/wp-json/competitions/v1/computeBlockAttributes"
USER_AGENT = "FFHBCalendarBot/1.0 (team calendar feed)"


@dataclass
class Settings:
    api_url: str = API_URL
    cache_dir: Path = Path("icals")
    cache_ttl: timedelta = timedelta(hours=1)
    timeout: int = 30
    timezone: str = "Europe/Paris"
    user_agent: str = USER_AGENT
    cfk_key: str = ""
    decryptor: str = ""
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from FFHB_* environment variables."""
    env = os.environ if environ is None else environ
    return Settings(
        api_url=env.get("FFHB_API_URL", API_URL),
        cache_dir=Path(env.get("FFHB_CACHE_DIR", "icals")),
        cache_ttl=timedelta(seconds=int(env.get("FFHB_CACHE_TTL", "3600"))),
        timeout=int(env.get("FFHB_TIMEOUT", "30")),
        timezone=env.get("FFHB_TIMEZONE", "Europe/Paris"),
        user_agent=env.get("FFHB_USER_AGENT", USER_AGENT),
        cfk_key=env.get("FFHB_CFK_KEY", ""),
        decryptor=env.get("FFHB_DECRYPTOR", ""),
        log_level=env.get("LOG_LEVEL", "INFO"),
    )
