"""
marketplace_client.py
=====================
Client for the Microsoft Store display catalog (``displaycatalog.mp.microsoft.com``).

Two endpoints are used:

* ``/v7.0/products`` - product metadata for up to a few dozen product ids at
  once (``bigIds``), localized into the requested language(s).
* ``/v7.0/productFamilies/autosuggest`` - free-text search over the
  ``Games`` product family.

Usage
-----
::

    from marketplace_client import XboxMarketplace

    marketplace = XboxMarketplace()
    games = marketplace.fetch_product_information(['9NBLGGH4R315'], 'en-US', 'US')
    games[0].product_title        # 'Halo Infinite'

    marketplace.query_xbox_marketplace('forza', 'en-US', 'US')
    # ['9NKX70BBCDRN', ...]
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

import requests

from xboxkit.errors import InvalidInputError, JSONParsingError
from xboxkit.models import ImageDescriptor, SearchSuggestion, XboxGame
from xboxkit.transport import (
    DEFAULT_TIMEOUT, CatalogHTTPMixin, LanguageArg, MarketArg,
    join_languages, locale_code, market_code,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_DISPLAY_CATALOG = "https://displaycatalog.mp.microsoft.com/v7.0"
_PRODUCTS_URL    = f"{_DISPLAY_CATALOG}/products"
_AUTOSUGGEST_URL = f"{_DISPLAY_CATALOG}/productFamilies/autosuggest"
_PRODUCT_FAMILY  = "Games"


class XboxMarketplace(CatalogHTTPMixin):
    """Resolves product ids to :class:`XboxGame` records and searches the store.

    Args:
        session: Optional :class:`requests.Session` to reuse.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        CatalogHTTPMixin.__init__(self, session=session, timeout=timeout)

    # ------------------------------------------------------------------
    # Product information
    # ------------------------------------------------------------------

    def fetch_product_information(
        self,
        game_ids: Sequence[str],
        language: Union[LanguageArg, Sequence[LanguageArg]],
        market: MarketArg,
    ) -> List[XboxGame]:
        """Fetch localized metadata for *game_ids*.

        Only the first localized-property block of each product is used.
        Products the catalog returns without any localized block are dropped.

        Args:
            game_ids: Store product ids (``bigIds``).
            language: One locale / :class:`~xboxkit.models.Language`, or a
                      list of them (sent comma-joined).
            market:   Market code or :class:`~xboxkit.models.Market`.

        Returns:
            Games in the order the catalog listed them.

        Raises:
            InvalidInputError: *game_ids* is empty.
            HTTPStatusError:   Status outside 200–299.
            JSONParsingError:  Body is not JSON or does not match the schema.
        """
        if not game_ids:
            raise InvalidInputError("At least one game ID must be provided")
        if isinstance(game_ids, str):
            game_ids = [game_ids]

        url = self.build_product_information_url(game_ids, language, market)
        payload = self._get_json(url)
        try:
            games = decode_products(payload)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unexpected product response shape: %s", exc)
            raise JSONParsingError(exc) from exc

        logger.debug("Resolved %d of %d product ids", len(games), len(game_ids))
        return games

    def build_product_information_url(
        self,
        game_ids: Sequence[str],
        language: Union[LanguageArg, Sequence[LanguageArg]],
        market: MarketArg,
    ) -> str:
        """Return the products URL (no request is made)."""
        if not game_ids:
            raise InvalidInputError("At least one game ID must be provided")
        return self._build_url(_PRODUCTS_URL, {
            'bigIds':    ','.join(game_ids),
            'languages': join_languages(language),
            'market':    market_code(market),
        })

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_suggestions(self, query: str, language: LanguageArg,
                           market: MarketArg) -> List[SearchSuggestion]:
        """Free-text search over the Games product family.

        Returns:
            Suggestions from every result family, flattened in order.

        Raises:
            InvalidInputError: *query* is empty.
            HTTPStatusError:   Status outside 200–299.
            JSONParsingError:  Body is not JSON or does not match the schema.
        """
        if not query:
            raise InvalidInputError("Query string must not be empty")

        url = self.build_search_url(query, language, market)
        payload = self._get_json(url)
        try:
            suggestions = decode_suggestions(payload)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unexpected autosuggest response shape: %s", exc)
            raise JSONParsingError(exc) from exc

        logger.debug("Search %r: %d suggestions", query, len(suggestions))
        return suggestions

    def query_xbox_marketplace(self, query: str, language: LanguageArg,
                               market: MarketArg) -> List[str]:
        """Search and return only the matching product ids."""
        return [s.product_id for s in self.search_suggestions(query, language, market)]

    def build_search_url(self, query: str, language: LanguageArg,
                         market: MarketArg) -> str:
        """Return the autosuggest URL (no request is made)."""
        if not query:
            raise InvalidInputError("Query string must not be empty")
        return self._build_url(_AUTOSUGGEST_URL, {
            'languages':          locale_code(language),
            'market':             market_code(market),
            'productFamilyNames': _PRODUCT_FAMILY,
            'query':              query,
        })


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------
# The decoders raise KeyError / TypeError on schema violations; the client
# wraps those in JSONParsingError.

def decode_products(payload: Any) -> List[XboxGame]:
    """Decode a ``/products`` body into :class:`XboxGame` records."""
    products = _field(payload, 'Products', list)
    games: List[XboxGame] = []
    for product in products:
        product_id = _field(product, 'ProductId', str)
        blocks = _field(product, 'LocalizedProperties', list)
        if not blocks:
            logger.debug("Dropping %s: no localized properties", product_id)
            continue
        # Decode every block so a malformed one fails the whole response.
        decoded = [_decode_localized(block) for block in blocks]
        games.append(XboxGame(product_id=product_id, **decoded[0]))
    return games


def _decode_localized(block: Any) -> Dict[str, Any]:
    images = _optional(block, 'Images', list)
    return {
        'product_title':       _field(block, 'ProductTitle', str),
        'product_description': _field(block, 'ProductDescription', str),
        'developer_name':      _optional(block, 'DeveloperName', str),
        'publisher_name':      _optional(block, 'PublisherName', str),
        'short_title':         _optional(block, 'ShortTitle', str),
        'sort_title':          _optional(block, 'SortTitle', str),
        'short_description':   _optional(block, 'ShortDescription', str),
        'image_descriptors':   (tuple(_decode_image(i) for i in images)
                                if images is not None else None),
    }


def _decode_image(image: Any) -> ImageDescriptor:
    if not isinstance(image, dict):
        raise TypeError("image descriptor must be an object")
    return ImageDescriptor(
        file_id=_optional(image, 'FileId', str),
        height=_optional(image, 'Height', int),
        width=_optional(image, 'Width', int),
        uri=_optional(image, 'Uri', str),
        image_purpose=_optional(image, 'ImagePurpose', str),
        image_position_info=_optional(image, 'ImagePositionInfo', str),
    )


def decode_suggestions(payload: Any) -> List[SearchSuggestion]:
    """Decode an ``/autosuggest`` body into :class:`SearchSuggestion` records."""
    results = _field(payload, 'Results', list)
    suggestions: List[SearchSuggestion] = []
    for family in results:
        family_name = _optional(family, 'ProductFamilyName', str) or ''
        for product in _optional(family, 'Products', list) or []:
            if not isinstance(product, dict):
                raise TypeError("product entry must be an object")
            product_id = _optional(product, 'ProductId', str)
            if not product_id:
                continue
            suggestions.append(SearchSuggestion(
                product_id=product_id,
                title=_optional(product, 'Title', str) or '',
                product_type=_optional(product, 'Type', str) or '',
                family_name=family_name,
                icon=_optional(product, 'Icon', str),
                width=_optional(product, 'Width', int),
                height=_optional(product, 'Height', int),
                image_type=_optional(product, 'ImageType', str),
                background_color=_optional(product, 'BackgroundColor', str),
                platform_properties=tuple(_optional(product, 'PlatformProperties', list) or ()),
            ))
    return suggestions


def _field(obj: Any, key: str, kind: Union[Type, Tuple[Type, ...]]) -> Any:
    """Return required *key* of *obj*, checking its type."""
    if not isinstance(obj, dict):
        raise TypeError(f"expected an object holding '{key}'")
    if key not in obj:
        raise KeyError(key)
    value = obj[key]
    if not isinstance(value, kind):
        raise TypeError(f"'{key}' has unexpected type {type(value).__name__}")
    return value


def _optional(obj: Any, key: str, kind: Union[Type, Tuple[Type, ...]]) -> Any:
    """Return optional *key* of *obj* (``None`` when absent or null)."""
    if not isinstance(obj, dict):
        raise TypeError(f"expected an object holding '{key}'")
    value = obj.get(key)
    if value is not None and not isinstance(value, kind):
        raise TypeError(f"'{key}' has unexpected type {type(value).__name__}")
    return value
