"""
XboxKit application package.

Layered the same way throughout:

  xboxkit/repositories/  - pure I/O: loading the bundled market/language tables.
  xboxkit/services/      - lookups and derived values over those tables.
  xboxkit/transport.py   - URL building and the GET + status check + JSON decode
                           shared by both catalog clients.

The catalog clients themselves live in ``gamepass_client.py`` (SIGL feeds) and
``marketplace_client.py`` (display catalog products and search).
"""
import logging

from .errors import (
    XboxError, InvalidInputError, InvalidURLError, HTTPStatusError,
    JSONParsingError, InvalidResponseFormatError, MissingRequiredFieldError,
    XboxNetworkError, ReferenceDataError,
)
from .models import (
    Market, Language, CategoryHeader, GamePassCollection, ImageDescriptor,
    GameReview, GamePlayTime, XboxGame, SearchSuggestion,
)

__version__ = '0.3.0'


def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the ``xboxkit`` logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so library use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger('xboxkit')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


__all__ = [
    'setup_logging',
    'XboxError',
    'InvalidInputError',
    'InvalidURLError',
    'HTTPStatusError',
    'JSONParsingError',
    'InvalidResponseFormatError',
    'MissingRequiredFieldError',
    'XboxNetworkError',
    'ReferenceDataError',
    'Market',
    'Language',
    'CategoryHeader',
    'GamePassCollection',
    'ImageDescriptor',
    'GameReview',
    'GamePlayTime',
    'XboxGame',
    'SearchSuggestion',
]
