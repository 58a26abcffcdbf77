"""
gamepass_client.py
==================
Client for the public Xbox Game Pass "SIGL" catalog feed.

A SIGL is a curated list (all console games, most popular on PC, leaving
soon, ...) selected by an opaque UUID.  The feed answers with a JSON array
whose first element is usually a category header followed by one
``{"id": "<productId>"}`` object per game::

    GET https://catalog.gamepass.com/sigls/v2?id=<sigl>&language=en&market=US

    [
      {"siglId": "...", "title": "Console", "description": "...",
       "requiresShuffling": "False", "imageUrl": "https://..."},
      {"id": "9NBLGGH4R315"},
      {"id": "C3KLDKZBHNCZ"}
    ]

Usage
-----
::

    from gamepass_client import GamePassCatalog, GAME_PASS_CONSOLE

    catalog = GamePassCatalog()
    collection = catalog.fetch_game_collection(GAME_PASS_CONSOLE, 'en-US', 'US')
    collection.game_ids   # ('9NBLGGH4R315', 'C3KLDKZBHNCZ', ...)

Product ids can then be resolved with
:meth:`marketplace_client.XboxMarketplace.fetch_product_information`.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

import requests

from xboxkit.errors import (
    InvalidInputError, InvalidResponseFormatError, MissingRequiredFieldError,
)
from xboxkit.models import CategoryHeader, GamePassCollection
from xboxkit.transport import (
    DEFAULT_TIMEOUT, CatalogHTTPMixin, LanguageArg, MarketArg,
    language_subtag, market_code,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_SIGL_URL = "https://catalog.gamepass.com/sigls/v2"

# All games
GAME_PASS_CONSOLE  = "f6f1f99f-9b49-4ccd-b3bf-4d9767a77f5e"
GAME_PASS_CORE     = "34031711-5a70-4196-bab7-45757dc2294e"
GAME_PASS_STANDARD = "09a72c0d-c466-426a-9580-b78955d8173a"
GAME_PASS_PC       = "609d944c-d395-4c0a-9ea4-e9f39b52c1ad"

# Purpose unknown; served by the feed but not labelled anywhere.
GAME_PASS_PC_SECONDARY      = "fdd9e2a7-0fee-49f6-ad69-4354098401ff"
GAME_PASS_CONSOLE_SECONDARY = "29a81209-df6f-41fd-a528-2ae6b91f719c"

# Day one releases
CONSOLE_DAY_ONE_RELEASES = "a672552e-fdc2-4ecd-96e9-b8409193f524"
PC_DAY_ONE_RELEASES      = "4b59700c-801f-494a-a34c-842b8c98f154"

# Most popular
CONSOLE_MOST_POPULAR            = "eab7757c-ff70-45af-bfa6-79d3cfb2bf81"
PC_MOST_POPULAR                 = "a884932a-f02b-40c8-a903-a008c23b1df1"
GAME_PASS_CORE_MOST_POPULAR     = "c76e2ddb-345d-4483-981e-d90789fcb46b"
GAME_PASS_STANDARD_MOST_POPULAR = "099d5213-25e2-4896-bf09-33432f1c6e66"
CLOUD_MOST_POPULAR              = "e7590b22-e299-44db-ae22-25c61405454c"

# Recently added
CONSOLE_RECENTLY_ADDED            = "f13cf6b4-57e6-4459-89df-6aec18cf0538"
PC_RECENTLY_ADDED                 = "3fdd7f57-7092-4b65-bd40-5a9dac1b2b84"
GAME_PASS_STANDARD_RECENTLY_ADDED = "d545e21a-d165-4f3f-a95b-b08542b0d2ec"

# Coming to Game Pass
CONSOLE_COMING_TO            = "095bda36-f5cd-43f2-9ee1-0a72f371fb96"
PC_COMING_TO                 = "4165f752-d702-49c8-886b-fb57936f6bae"
GAME_PASS_STANDARD_COMING_TO = "83e4b73e-d89c-4b95-8c63-17cdd4b5a7b3"

# Leaving Game Pass soon
CONSOLE_LEAVING_SOON            = "393f05bf-e596-4ef6-9487-6d4fa0eab987"
PC_LEAVING_SOON                 = "cc7fc951-d00f-410e-9e02-5e4628e04163"
GAME_PASS_STANDARD_LEAVING_SOON = "6182c1f2-11b0-4df1-890e-f940fbe33493"

# Ubisoft and EA
UBISOFT_CONSOLE       = "a5a535fb-d926-4141-9ce4-9f6af8ca22e7"
UBISOFT_PC            = "9c09d734-1c45-4740-ae7f-fd73ff629880"
EA_PLAY_CONSOLE       = "b8900d09-a491-44cc-916e-32b5acae621b"
EA_PLAY_PC            = "1d33fbb9-b895-4732-a8ca-a55c8b99fa2c"
EA_PLAY_TRIAL_CONSOLE = "490f4b6e-a107-4d6a-8398-225ee916e1f2"
EA_PLAY_TRIAL_PC      = "19e5b90a-5a20-4b1d-9dda-6441ca632527"

# Symbolic name -> SIGL id, for config files and the command line.
NAMED_IDENTIFIERS: Dict[str, str] = {
    'console':                          GAME_PASS_CONSOLE,
    'core':                             GAME_PASS_CORE,
    'standard':                         GAME_PASS_STANDARD,
    'pc':                               GAME_PASS_PC,
    'pc-secondary':                     GAME_PASS_PC_SECONDARY,
    'console-secondary':                GAME_PASS_CONSOLE_SECONDARY,
    'console-day-one':                  CONSOLE_DAY_ONE_RELEASES,
    'pc-day-one':                       PC_DAY_ONE_RELEASES,
    'console-most-popular':             CONSOLE_MOST_POPULAR,
    'pc-most-popular':                  PC_MOST_POPULAR,
    'core-most-popular':                GAME_PASS_CORE_MOST_POPULAR,
    'standard-most-popular':            GAME_PASS_STANDARD_MOST_POPULAR,
    'cloud-most-popular':               CLOUD_MOST_POPULAR,
    'console-recently-added':           CONSOLE_RECENTLY_ADDED,
    'pc-recently-added':                PC_RECENTLY_ADDED,
    'standard-recently-added':          GAME_PASS_STANDARD_RECENTLY_ADDED,
    'console-coming-soon':              CONSOLE_COMING_TO,
    'pc-coming-soon':                   PC_COMING_TO,
    'standard-coming-soon':             GAME_PASS_STANDARD_COMING_TO,
    'console-leaving-soon':             CONSOLE_LEAVING_SOON,
    'pc-leaving-soon':                  PC_LEAVING_SOON,
    'standard-leaving-soon':            GAME_PASS_STANDARD_LEAVING_SOON,
    'ubisoft-console':                  UBISOFT_CONSOLE,
    'ubisoft-pc':                       UBISOFT_PC,
    'ea-play-console':                  EA_PLAY_CONSOLE,
    'ea-play-pc':                       EA_PLAY_PC,
    'ea-play-trial-console':            EA_PLAY_TRIAL_CONSOLE,
    'ea-play-trial-pc':                 EA_PLAY_TRIAL_PC,
}

ALL_GAME_PASS_IDENTIFIERS = tuple(NAMED_IDENTIFIERS.values())

_HEADER_FIELDS = ('siglId', 'title', 'description', 'requiresShuffling', 'imageUrl')


def is_valid_identifier(identifier: str) -> bool:
    """Return ``True`` if *identifier* is one of the known SIGL ids."""
    return identifier in ALL_GAME_PASS_IDENTIFIERS


def resolve_identifier(name_or_id: str) -> str:
    """Map a symbolic name such as ``"pc-most-popular"`` to its SIGL id.

    Anything that is not a known name is returned unchanged, so raw UUIDs
    pass straight through.
    """
    return NAMED_IDENTIFIERS.get(name_or_id.strip().lower(), name_or_id)


class GamePassCatalog(CatalogHTTPMixin):
    """Fetches SIGL feeds and decodes them into :class:`GamePassCollection`.

    Args:
        session: Optional :class:`requests.Session` to reuse.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        CatalogHTTPMixin.__init__(self, session=session, timeout=timeout)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_game_collection(self, sigl_id: str, language: LanguageArg,
                              market: MarketArg) -> GamePassCollection:
        """Fetch one SIGL feed.

        Args:
            sigl_id:  Catalog identifier, e.g. :data:`GAME_PASS_CONSOLE`.
            language: Locale string, or a :class:`~xboxkit.models.Language`
                      (its language subtag is sent).
            market:   Market code, or a :class:`~xboxkit.models.Market`.

        Returns:
            The collection header (if the feed sent one) and the product ids
            in feed order.

        Raises:
            InvalidInputError:          *sigl_id* is empty.
            HTTPStatusError:            Status outside 200–299.
            JSONParsingError:           Body is not JSON.
            InvalidResponseFormatError: Body is not an array of objects.
            MissingRequiredFieldError:  An entry is neither header nor game.
        """
        if not sigl_id:
            raise InvalidInputError("SIGL ID cannot be empty")

        url = self.build_collection_url(sigl_id, language, market)
        collection = decode_game_collection(self._get_json(url))
        logger.debug("SIGL %s: %d games", sigl_id, len(collection.game_ids))
        return collection

    def fetch_game_collections(self, sigl_ids: Iterable[str], language: LanguageArg,
                               market: MarketArg,
                               max_workers: int = 4) -> Dict[str, GamePassCollection]:
        """Fetch several SIGL feeds concurrently.

        Each feed is an independent request. Once all submitted requests have
        finished, the failure of the earliest failing id in *sigl_ids* order is
        raised, whichever request failed first in time.

        Returns:
            ``{sigl_id: collection}`` in the order *sigl_ids* were given.
        """
        ids: List[str] = list(dict.fromkeys(sigl_ids))
        if not ids:
            raise InvalidInputError("At least one SIGL ID must be provided")
        for sigl_id in ids:
            if not sigl_id:
                raise InvalidInputError("SIGL ID cannot be empty")

        with ThreadPoolExecutor(max_workers=max_workers,
                                thread_name_prefix='xboxkit_sigl') as executor:
            futures = [
                executor.submit(self.fetch_game_collection, sigl_id, language, market)
                for sigl_id in ids
            ]
        return {sigl_id: future.result() for sigl_id, future in zip(ids, futures)}

    def build_collection_url(self, sigl_id: str, language: LanguageArg,
                             market: MarketArg) -> str:
        """Return the feed URL for *sigl_id* (no request is made)."""
        return self._build_url(_SIGL_URL, {
            'id':       sigl_id,
            'language': language_subtag(language),
            'market':   market_code(market),
        })


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_game_collection(payload: Any) -> GamePassCollection:
    """Decode a SIGL feed body into a :class:`GamePassCollection`.

    Each entry is tried as a category header first, then as a game item.
    A later header replaces an earlier one.
    """
    if not isinstance(payload, list) or not all(isinstance(i, dict) for i in payload):
        raise InvalidResponseFormatError("JSON cannot be deserialized")

    header: Optional[CategoryHeader] = None
    game_ids: List[str] = []
    for item in payload:
        decoded = _decode_header(item)
        if decoded is not None:
            header = decoded
            continue
        game_id = item.get('id')
        if isinstance(game_id, str):
            game_ids.append(game_id)
            continue
        raise MissingRequiredFieldError("JSON contains neither title nor id field")

    return GamePassCollection(header=header, game_ids=tuple(game_ids))


def _decode_header(item: Dict[str, Any]) -> Optional[CategoryHeader]:
    values = [item.get(name) for name in _HEADER_FIELDS]
    if not all(isinstance(v, str) for v in values):
        return None
    sigl_id, title, description, requires_shuffling, image_url = values
    return CategoryHeader(
        sigl_id=sigl_id,
        title=title,
        description=description,
        requires_shuffling=requires_shuffling,
        image_url=image_url,
    )
