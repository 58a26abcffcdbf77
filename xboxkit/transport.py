"""
URL building and the single-shot GET shared by the catalog clients.

Both Microsoft catalogs are plain public JSON endpoints: no auth, no paging,
no retries.  A call is one GET, a 2xx check, and a JSON decode.
"""
from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, Optional, Sequence, Union

import requests

from .errors import HTTPStatusError, InvalidURLError, JSONParsingError, XboxNetworkError
from .models import Language, Market

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10  # seconds

LanguageArg = Union[Language, str]
MarketArg = Union[Market, str]


class CatalogHTTPMixin:
    """Mixin that owns the ``requests`` session and the fetch helpers.

    Args:
        session: Optional pre-configured :class:`requests.Session`; a new one
                 is created when omitted.
        timeout: HTTP request timeout in seconds (``None`` waits forever).

    Raises:
        ValueError: *timeout* is zero or negative.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._session = session or requests.Session()
        self._timeout = timeout

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    @staticmethod
    def _build_url(base_url: str, params: Dict[str, Any]) -> str:
        """Return *base_url* with *params* encoded as its query string.

        Raises:
            InvalidURLError: A parameter value could not be encoded.
        """
        try:
            query = urllib.parse.urlencode(params)
        except (TypeError, ValueError) as exc:
            raise InvalidURLError() from exc
        url = f"{base_url}?{query}"
        parts = urllib.parse.urlsplit(url)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise InvalidURLError()
        return url

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _get_json(self, url: str) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises:
            XboxNetworkError: No response was received.
            HTTPStatusError:  The status code is outside 200–299.
            JSONParsingError: The body is not valid JSON.
        """
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise XboxNetworkError(exc) from exc

        if not 200 <= resp.status_code <= 299:
            logger.warning("Catalog returned HTTP %s for %s", resp.status_code, url)
            raise HTTPStatusError(resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("Response from %s is not valid JSON: %s", url, exc)
            raise JSONParsingError(exc) from exc


# ---------------------------------------------------------------------------
# Argument normalisation
# ---------------------------------------------------------------------------

def market_code(market: MarketArg) -> str:
    """ISO code for a :class:`Market`, or the string unchanged."""
    return market.iso_code if isinstance(market, Market) else market


def locale_code(language: LanguageArg) -> str:
    """Full locale (``"en-US"``) for a :class:`Language`, or the string unchanged."""
    return language.locale_code if isinstance(language, Language) else language


def language_subtag(language: LanguageArg) -> str:
    """Language subtag (``"en"``) for a :class:`Language`, or the string unchanged."""
    return language.language_code if isinstance(language, Language) else language


def join_languages(languages: Union[LanguageArg, Sequence[LanguageArg]]) -> str:
    """Comma-join one or more languages as full locales."""
    if isinstance(languages, (Language, str)):
        return locale_code(languages)
    return ','.join(locale_code(lang) for lang in languages)
