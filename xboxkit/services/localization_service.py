"""Lookups over the supported market and language tables."""
import logging
import threading
from typing import Optional, Tuple, Union

from ..models import Language, Market
from ..repositories.localization_repository import LocalizationRepository

logger = logging.getLogger(__name__)

MarketLike = Union[Market, str]
LanguageLike = Union[Language, str]


class LocalizationService:
    """Read-only queries over a :class:`LocalizationRepository`.

    Every code comparison is case-insensitive, so ``market('us')`` and
    ``market('US')`` return the same record.
    """

    def __init__(self, repository: LocalizationRepository) -> None:
        self._repo = repository
        self._markets_by_code = {m.iso_code.upper(): m for m in repository.markets}
        self._languages_by_locale = {
            lang.locale_code.lower(): lang for lang in repository.languages
        }

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @property
    def markets(self) -> Tuple[Market, ...]:
        """All supported markets, sorted by ISO code."""
        return self._repo.markets

    @property
    def languages(self) -> Tuple[Language, ...]:
        """All supported languages, sorted by locale code."""
        return self._repo.languages

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def market(self, code: str) -> Optional[Market]:
        """Find a market by its ISO code, or ``None``."""
        return self._markets_by_code.get(code.upper())

    def language(self, locale: str) -> Optional[Language]:
        """Find a language by its locale code, or ``None``."""
        return self._languages_by_locale.get(locale.lower())

    def languages_in(self, market: MarketLike) -> Tuple[Language, ...]:
        """All languages whose region subtag is *market*."""
        code = _market_code(market).upper()
        return tuple(
            lang for lang in self.languages
            if lang.region_code is not None and lang.region_code.upper() == code
        )

    def markets_speaking(self, language: LanguageLike) -> Tuple[Market, ...]:
        """All markets where the language subtag of *language* is spoken.

        *language* may be a :class:`Language`, a locale such as ``"en-US"`` or
        a bare subtag such as ``"en"``.
        """
        if isinstance(language, Language):
            subtag = language.language_code
        else:
            subtag = language.split('-')[0]
        subtag = subtag.lower()

        regions = {
            lang.region_code.upper() for lang in self.languages
            if lang.language_code.lower() == subtag and lang.region_code
        }
        return tuple(m for m in self.markets if m.iso_code.upper() in regions)

    def default_language(self, market: MarketLike) -> Optional[Language]:
        """First available language for *market*, or ``None``."""
        candidates = self.languages_in(market)
        return candidates[0] if candidates else None

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def is_supported_market(self, code: str) -> bool:
        return code.upper() in self._markets_by_code

    def is_supported_locale(self, locale: str) -> bool:
        return locale.lower() in self._languages_by_locale

    def is_valid_market(self, market: str, language: str) -> bool:
        """Quick check that a market/language combination is usable."""
        return self.is_supported_market(market) and self.is_supported_locale(language)


def _market_code(market: MarketLike) -> str:
    return market.iso_code if isinstance(market, Market) else market


# ---------------------------------------------------------------------------
# Process-wide default instance
# ---------------------------------------------------------------------------

_default: Optional[LocalizationService] = None
_default_lock = threading.Lock()


def load_localization(data_dir: str = None) -> LocalizationService:
    """Load the reference tables and return a service over them.

    Raises:
        ReferenceDataError: A table is missing or malformed.
    """
    service = LocalizationService(LocalizationRepository(data_dir))
    logger.debug("Localization loaded: %d markets, %d languages",
                 len(service.markets), len(service.languages))
    return service


def get_localization() -> LocalizationService:
    """Return the shared service over the bundled tables, loading it once.

    A failed load is raised to the caller and attempted again on the next
    call.

    Raises:
        ReferenceDataError: The bundled tables are missing or malformed.
    """
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = load_localization()
    return _default
