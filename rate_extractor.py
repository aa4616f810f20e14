"""Per-file rate extraction from NBP table C XML documents."""

from __future__ import annotations

import logging
import math
import os
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

import requests

from models import FileResult, RateObservation

NBP_BASE_URL = os.getenv("NBP_BASE_URL", "http://www.nbp.pl/kursy/xml/")
_DEFAULT_TIMEOUT_SECONDS = 20

# The tables are served without a usable charset; decode explicitly instead of
# trusting the platform default.
XML_ENCODING = "ISO-8859-1"

TABLE_TAG = "tabela_kursow"
POSITION_TAG = "pozycja"
CURRENCY_CODE_FIELD = "kod_waluty"
BUYING_RATE_FIELD = "kurs_kupna"
SELLING_RATE_FIELD = "kurs_sprzedazy"

LOGGER = logging.getLogger(__name__)


def extract(
    file_url: str,
    currency_code: str,
    session: requests.Session | None = None,
) -> list[RateObservation]:
    """Return observations for ``currency_code`` in one file; never raises."""
    return list(fetch_file_rates(file_url, currency_code, session=session).observations)


def fetch_file_rates(
    file_url: str,
    currency_code: str,
    session: requests.Session | None = None,
) -> FileResult:
    """Fetch and parse one rate table, capturing any failure in the result."""
    http = session or requests
    LOGGER.debug("Requesting file %s", file_url)

    try:
        response = http.get(file_url, timeout=_request_timeout())
        response.raise_for_status()
    except requests.RequestException as exc:
        LOGGER.warning("Rate fetch: failed for url=%s, skipping: %s", file_url, exc)
        return FileResult(url=file_url, error=str(exc))

    try:
        observations = parse_rate_table(response.content.decode(XML_ENCODING), currency_code)
    except ET.ParseError as exc:
        LOGGER.warning("Rate parse: malformed XML at url=%s, skipping: %s", file_url, exc)
        return FileResult(url=file_url, error=f"malformed XML: {exc}")

    if not observations:
        LOGGER.debug("Rate parse: no %s rows in %s", currency_code, file_url)
    return FileResult(url=file_url, observations=tuple(observations))


def parse_rate_table(xml_text: str, currency_code: str) -> list[RateObservation]:
    """Parse a decoded table document and keep rows matching ``currency_code``.

    The code match is exact and case-sensitive. Rows missing a field or
    holding an unparseable number are skipped.

    Raises:
        xml.etree.ElementTree.ParseError: the text is not well-formed XML.
    """
    root = ET.fromstring(xml_text)
    positions = root.findall(POSITION_TAG) if root.tag == TABLE_TAG else []
    if not positions:
        LOGGER.warning("Rate parse: no positions were found under <%s>", TABLE_TAG)
        return []

    observations: list[RateObservation] = []
    for position in positions:
        code = position.findtext(CURRENCY_CODE_FIELD)
        if code is None:
            LOGGER.warning("Rate parse: position without %s, skipping", CURRENCY_CODE_FIELD)
            continue
        if code != currency_code:
            continue

        buy = _parse_rate(position.findtext(BUYING_RATE_FIELD))
        sell = _parse_rate(position.findtext(SELLING_RATE_FIELD))
        if buy is None or sell is None:
            LOGGER.warning("Rate parse: incomplete %s position, skipping", code)
            continue

        observation = RateObservation(currency_code=code, buy_value=buy, sell_value=sell)
        LOGGER.debug("Created rate %s", observation)
        observations.append(observation)
    return observations


def collect_observations(
    file_urls: Sequence[str],
    currency_code: str,
    max_workers: int = 1,
    session: requests.Session | None = None,
) -> tuple[list[RateObservation], list[FileResult]]:
    """Extract rates from every file, isolating per-file failures.

    With ``max_workers > 1`` the files are fetched on a thread pool. Results
    are merged in ``file_urls`` order once every fetch has finished.

    ``session`` is only used for sequential runs; pooled workers each issue
    their own ``requests.get`` so no client state is shared between threads.

    Returns:
        All observations, plus the results of files that failed.
    """
    if max_workers <= 1 or len(file_urls) <= 1:
        results = [fetch_file_rates(url, currency_code, session=session) for url in file_urls]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda url: fetch_file_rates(url, currency_code), file_urls))

    observations = [obs for result in results for obs in result.observations]
    failures = [result for result in results if not result.ok]
    LOGGER.info(
        "Rate fetch: files=%s failed=%s observations=%s workers=%s",
        len(results),
        len(failures),
        len(observations),
        max_workers,
    )
    return observations, failures


def _parse_rate(raw: str | None) -> float | None:
    # Older tables print decimal commas ("3,9560"); float() is locale-independent
    # but also accepts "NaN", "inf" and "1_0", none of which is a rate.
    if raw is None:
        return None
    text = raw.strip().replace(",", ".")
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _request_timeout() -> float:
    return float(os.getenv("REQUEST_TIMEOUT_SECONDS", _DEFAULT_TIMEOUT_SECONDS))
