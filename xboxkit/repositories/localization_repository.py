"""Repository for the bundled market and language tables."""
from typing import Any, Callable, Dict, List, Tuple, TypeVar

from ..errors import ReferenceDataError
from ..models import Language, Market
from .base import BaseRepository

T = TypeVar('T')

MARKET_FILE = 'market-data.json'
LANGUAGE_FILE = 'language-data.json'


class LocalizationRepository(BaseRepository):
    """Loads ``market-data.json`` and ``language-data.json``.

    Schema::

        market-data.json    [{"isoCode": "US", "name": "United States",
                              "threeLetterISO": "USA"}, ...]
        language-data.json  [{"localeCode": "en-US", "bcp47Tag": "en-US",
                              "nativeName": "English (United States)"}, ...]

    Markets are sorted by ISO code and languages by locale code.  Codes must
    be unique (compared case-insensitively).
    """

    def __init__(self, data_dir: str = None) -> None:
        super().__init__(data_dir)
        self.markets: Tuple[Market, ...] = tuple(sorted(
            self._decode(MARKET_FILE, _market_from_dict, 'isoCode'),
            key=lambda m: m.iso_code,
        ))
        self.languages: Tuple[Language, ...] = tuple(sorted(
            self._decode(LANGUAGE_FILE, _language_from_dict, 'localeCode'),
            key=lambda lang: lang.locale_code,
        ))

    def _decode(self, file_name: str, build: Callable[[Dict[str, Any]], T],
                key_field: str) -> List[T]:
        raw = self._load(file_name)
        path = self._path(file_name)
        if not isinstance(raw, list):
            raise ReferenceDataError(path, 'expected a JSON array of records')

        records: List[T] = []
        seen = set()
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                raise ReferenceDataError(path, f'record {index} is not an object')
            try:
                record = build(item)
            except (KeyError, TypeError) as exc:
                raise ReferenceDataError(path, f'record {index} is invalid: {exc}', exc) from exc
            key = str(item[key_field]).upper()
            if key in seen:
                raise ReferenceDataError(path, f'duplicate code {item[key_field]!r}')
            seen.add(key)
            records.append(record)
        self._log.debug("Decoded %d records from %s", len(records), file_name)
        return records


def _market_from_dict(item: Dict[str, Any]) -> Market:
    return Market(
        iso_code=_require_str(item, 'isoCode'),
        name=_require_str(item, 'name'),
        three_letter_iso=item.get('threeLetterISO'),
    )


def _language_from_dict(item: Dict[str, Any]) -> Language:
    return Language(
        locale_code=_require_str(item, 'localeCode'),
        bcp47_tag=_require_str(item, 'bcp47Tag'),
        native_name=_require_str(item, 'nativeName'),
    )


def _require_str(item: Dict[str, Any], key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value
