"""Decryption of the competitions API payload into fixtures.

The FFHB API answers with an encrypted blob. The cipher and its key are
supplied from outside this package: a ``KeySource`` hands out the key and a
``Decryptor`` turns ``(payload, key)`` into the plaintext JSON document.
"""

from __future__ import annotations

import importlib
import logging
from datetime import datetime
from typing import Any, Callable, Protocol
from zoneinfo import ZoneInfo

from ffhb_calendar import FixtureList, Poule, RawFixture
from ffhb_calendar.errors import DecryptionError, EmptyFixtureListError

logger = logging.getLogger(__name__)


class KeySource(Protocol):
    def fetch_key(self) -> str: ...


Decryptor = Callable[[str, str], Any]


class StaticKeySource:
    """Serves a key taken from configuration."""

    def __init__(self, key: str) -> None:
        self.key = key

    def fetch_key(self) -> str:
        if not self.key:
            raise DecryptionError("Aucune clé de déchiffrement n'est configurée")
        return self.key


def load_decryptor(path: str) -> Decryptor:
    """Import a decryptor from a ``package.module:function`` path."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Invalid decryptor path {path!r}, expected 'module:function'")
    decryptor = getattr(importlib.import_module(module_name), attr)
    if not callable(decryptor):
        raise ValueError(f"Decryptor {path!r} is not callable")
    return decryptor


def decrypt_fixture_list(
    payload: str,
    key: str,
    decryptor: Decryptor,
    source_url: str = "",
    tz: str = "Europe/Paris",
) -> FixtureList:
    """Decrypt an API payload and map it to a FixtureList."""
    try:
        data = decryptor(payload, key)
    except DecryptionError:
        raise
    except Exception as e:
        raise DecryptionError(f"Impossible de déchiffrer la réponse de l'API : {e}") from e

    return parse_fixture_list(data, source_url=source_url, tz=tz)


def parse_fixture_list(data: Any, source_url: str = "", tz: str = "Europe/Paris") -> FixtureList:
    """Map the decrypted ``{"rencontres": [...], "poule": {...}}`` document."""
    if not isinstance(data, dict):
        raise DecryptionError("La réponse déchiffrée n'est pas un objet JSON")

    rencontres = data.get("rencontres") or []
    if not isinstance(rencontres, list):
        raise DecryptionError("La liste des rencontres est invalide")
    if not rencontres:
        raise EmptyFixtureListError(source_url)

    poule_data = data.get("poule")
    if not isinstance(poule_data, dict):
        raise DecryptionError("La poule est absente de la réponse")

    poule = Poule(
        pool_id=_text(poule_data.get("ext_pouleId")) or "",
        label=_text(poule_data.get("libelle")),
        journees=poule_data.get("journees"),
    )
    zone = ZoneInfo(tz)
    fixtures = [_parse_fixture(r, zone) for r in rencontres]
    return FixtureList(fixtures=fixtures, poule=poule)


def _parse_fixture(rencontre: Any, zone: ZoneInfo) -> RawFixture:
    if not isinstance(rencontre, dict):
        raise DecryptionError("Une rencontre de la réponse est invalide")

    referees = tuple(
        name for name in (_text(rencontre.get("arbitre1")), _text(rencontre.get("arbitre2"))) if name
    )
    return RawFixture(
        fixture_id=_text(rencontre.get("ext_rencontreId")) or "",
        team1_label=_text(rencontre.get("equipe1Libelle")),
        team2_label=_text(rencontre.get("equipe2Libelle")),
        team1_score=_text(rencontre.get("equipe1Score")),
        team2_score=_text(rencontre.get("equipe2Score")),
        date=parse_date(rencontre.get("date"), zone),
        document_code=_text(rencontre.get("fdmCode")),
        referees=referees,
        round_number=_text(rencontre.get("journeeNumero")),
    )


def parse_date(value: Any, zone: ZoneInfo) -> datetime | None:
    """Parse an API date; naive values are in the federation's local time."""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(str(value).strip())
    except ValueError:
        logger.warning(f"Ignoring unparseable fixture date {value!r}")
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return dt


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
