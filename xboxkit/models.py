"""
xboxkit/models.py – Immutable records returned by the catalog clients and the
reference tables.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Market:
    """A supported storefront market.

    Attributes
    ----------
    iso_code         : ISO 3166 two-letter code, e.g. ``"US"``.
    name             : English display name.
    three_letter_iso : ISO 3166 three-letter code, e.g. ``"USA"`` (optional).
    """
    iso_code: str
    name: str
    three_letter_iso: Optional[str] = None


@dataclass(frozen=True)
class Language:
    """A supported locale.

    Attributes
    ----------
    locale_code : Locale as used in query strings, e.g. ``"en-US"``.
    bcp47_tag   : BCP-47 tag for the same locale.
    native_name : Name of the language in that language.
    """
    locale_code: str
    bcp47_tag: str
    native_name: str

    @property
    def language_code(self) -> str:
        """Language subtag, e.g. ``"en"`` from ``"en-US"``."""
        parts = _locale_parts(self.locale_code)
        return parts[0] if parts else self.locale_code

    @property
    def region_code(self) -> Optional[str]:
        """Region subtag, e.g. ``"US"`` from ``"en-US"``; ``None`` without one."""
        parts = _locale_parts(self.locale_code)
        return parts[-1] if len(parts) > 1 else None


def _locale_parts(locale: str):
    return [p for p in locale.split('-') if p]


# ---------------------------------------------------------------------------
# Game Pass SIGL feed
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryHeader:
    """The header object a SIGL feed puts in front of its game ids."""
    sigl_id: str
    title: str
    description: str
    requires_shuffling: str
    image_url: str


@dataclass(frozen=True)
class GamePassCollection:
    """Decoded SIGL feed: optional header plus product ids in server order."""
    header: Optional[CategoryHeader]
    game_ids: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Display catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImageDescriptor:
    file_id: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    uri: Optional[str] = None
    image_purpose: Optional[str] = None
    image_position_info: Optional[str] = None


@dataclass(frozen=True)
class GameReview:
    """Aggregate review data for a product.

    ``score`` and ``recent_score`` are on a 0–100 scale.
    """
    score: Optional[float] = None
    recent_score: Optional[float] = None
    total_reviews: Optional[int] = None

    @property
    def summary(self) -> Optional[str]:
        from .services.review_service import review_summary
        return review_summary(self.score, self.total_reviews)

    @property
    def recent_summary(self) -> Optional[str]:
        from .services.review_service import review_summary
        return review_summary(self.recent_score, self.total_reviews)

    @property
    def has_valid_data(self) -> bool:
        return (self.score is not None and self.total_reviews is not None
                and self.total_reviews >= 10)

    @property
    def sentiment(self) -> Optional[str]:
        """``'positive'``, ``'mixed'`` or ``'negative'`` for colour coding."""
        from .services.review_service import review_sentiment
        return review_sentiment(self.score)


@dataclass(frozen=True)
class GamePlayTime:
    """Typical completion times, in hours."""
    main_story: Optional[float] = None
    main_plus_extras: Optional[float] = None
    completionist: Optional[float] = None


@dataclass(frozen=True)
class XboxGame:
    """One product from the display catalog, projected from its first
    localized-property block."""
    product_id: str
    product_title: str
    product_description: Optional[str] = None
    developer_name: Optional[str] = None
    publisher_name: Optional[str] = None
    short_title: Optional[str] = None
    sort_title: Optional[str] = None
    short_description: Optional[str] = None
    image_descriptors: Optional[Tuple[ImageDescriptor, ...]] = None
    reviews: Optional[GameReview] = None
    playtime: Optional[GamePlayTime] = None


@dataclass(frozen=True)
class SearchSuggestion:
    """One product entry from the autosuggest endpoint."""
    product_id: str
    title: str = ''
    product_type: str = ''
    family_name: str = ''
    icon: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    image_type: Optional[str] = None
    background_color: Optional[str] = None
    platform_properties: Tuple[str, ...] = field(default_factory=tuple)
