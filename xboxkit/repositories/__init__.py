"""Repositories package - expose all concrete repositories from one import."""
from .base import BaseRepository
from .localization_repository import LocalizationRepository

__all__ = [
    'BaseRepository',
    'LocalizationRepository',
]
