"""Errors raised while building a team calendar."""

from __future__ import annotations


class CalendarError(Exception):
    """Base class for every failure the pipeline reports to the user."""


class MalformedUrlError(CalendarError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Aucun identifiant d'équipe trouvé dans l'URL {url}")
        self.url = url


class UpstreamFetchError(CalendarError):
    """Network or HTTP failure against the FFHB website."""


class DecryptionError(CalendarError):
    """The API payload could not be decrypted or is not valid fixture data."""


class EmptyFixtureListError(CalendarError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Aucune rencontre n'a été trouvée pour l'URL {url}")
        self.url = url


class VenueLookupError(CalendarError):
    """Venue data missing or unreadable on a fixture page.

    Only raised inside the venue enricher, which turns it into a failed outcome.
    """
