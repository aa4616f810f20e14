"""NBP directory listing scanner."""

from __future__ import annotations

import logging
import os
import re
from datetime import date, datetime

import requests

from models import CatalogEntry

# Plain-text listing of every published table C file, one line per file with
# its publication date. Not well-formed HTML, so tokens are matched by regex.
NBP_LISTING_URL = os.getenv("NBP_LISTING_URL", "http://www.nbp.pl/kursy/xml/dir.aspx?tt=C")
_DEFAULT_TIMEOUT_SECONDS = 20

FILE_NAME_PATTERN = re.compile(r"c\d+z\d+\.xml")
DATE_PATTERN = re.compile(r"\d+-\d+-\d+")

LOGGER = logging.getLogger(__name__)


class CatalogUnavailableError(RuntimeError):
    """Raised when the directory listing itself cannot be downloaded."""


def scan(
    listing_url: str = NBP_LISTING_URL,
    session: requests.Session | None = None,
) -> list[CatalogEntry]:
    """Download the directory listing and pair each rate file with its date.

    Raises:
        CatalogUnavailableError: the listing could not be fetched. A listing
            that downloads fine but matches nothing returns an empty list.
    """
    http = session or requests
    try:
        response = http.get(listing_url, timeout=_request_timeout())
        response.raise_for_status()
    except requests.RequestException as exc:
        raise CatalogUnavailableError(f"Could not fetch catalog {listing_url}: {exc}") from exc

    entries = parse_listing(response.text)
    LOGGER.info("Catalog scan: url=%s entries=%s", listing_url, len(entries))
    return entries


def parse_listing(text: str) -> list[CatalogEntry]:
    """Pair the i-th distinct file name with the i-th date token in ``text``.

    The two token streams are matched independently, so pairing relies on the
    listing printing exactly one date per file in the same order. Surplus
    tokens on the longer side are ignored.
    """
    identifiers = list(dict.fromkeys(FILE_NAME_PATTERN.findall(text)))
    date_tokens = DATE_PATTERN.findall(text)

    if len(identifiers) != len(date_tokens):
        LOGGER.warning(
            "Catalog scan: token count mismatch files=%s dates=%s, pairing first %s",
            len(identifiers),
            len(date_tokens),
            min(len(identifiers), len(date_tokens)),
        )

    entries: list[CatalogEntry] = []
    for identifier, token in zip(identifiers, date_tokens):
        parsed = _parse_date(token)
        if parsed is None:
            LOGGER.warning("Catalog scan: unparseable date %r for %s, skipping", token, identifier)
            continue
        entries.append(CatalogEntry(identifier=identifier, date=parsed))
    return entries


def _parse_date(token: str) -> date | None:
    try:
        return datetime.strptime(token, "%Y-%m-%d").date()
    except ValueError:
        return None


def _request_timeout() -> float:
    # Read per call so a value loaded from .env after import still applies.
    return float(os.getenv("REQUEST_TIMEOUT_SECONDS", _DEFAULT_TIMEOUT_SECONDS))
