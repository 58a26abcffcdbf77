"""Repository base class used by the reference-data repositories."""
import json
import logging
import os
from typing import Any

from ..errors import ReferenceDataError

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'data')


class BaseRepository:
    """Provides read-only access to JSON files bundled with the package.

    Sub-classes call :meth:`_load` once from ``__init__`` and keep the decoded
    records in memory.  Nothing is ever written back.

    Unlike a cache file, a bundled table is required: a missing or corrupt
    file raises :class:`~xboxkit.errors.ReferenceDataError` so the embedding
    application decides what to do.
    """

    def __init__(self, data_dir: str = None) -> None:
        self._data_dir = data_dir or DEFAULT_DATA_DIR
        self._log = logging.getLogger(f'xboxkit.repository.{type(self).__name__}')

    def _path(self, file_name: str) -> str:
        return os.path.join(self._data_dir, file_name)

    def _load(self, file_name: str) -> Any:
        """Load and return the JSON in *file_name*."""
        path = self._path(file_name)
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except FileNotFoundError as exc:
            self._log.warning("Reference file missing: %s", path)
            raise ReferenceDataError(path, 'file not found', exc) from exc
        except (json.JSONDecodeError, OSError) as exc:
            self._log.warning("Could not load %s: %s", path, exc)
            raise ReferenceDataError(path, str(exc), exc) from exc
        self._log.debug("Loaded %s", path)
        return data
