"""Services package - expose all concrete services from one import."""
from .localization_service import LocalizationService, load_localization, get_localization
from .review_service import review_summary, review_sentiment

__all__ = [
    'LocalizationService',
    'load_localization',
    'get_localization',
    'review_summary',
    'review_sentiment',
]
