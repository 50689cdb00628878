"""
Key/value site settings backed by the `SiteSetting` table and Django's cache.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union

from django.apps import apps
from django.conf import settings
from django.core.cache import BaseCache, cache as default_cache
from django.db import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CACHE_KEY_PREFIX = "site_setting:"
# Cached stand-in for "no row", so misses are cached too.
_MISSING = "__missing__"


@dataclass
class SettingWriteResult:
    success: bool
    error: Optional[str] = None


class SettingsGateway:
    """
    Read/write access to persisted site settings.

    Reads never raise: database errors are logged and reported as a missing
    key. Writes report failure through `SettingWriteResult`.
    """

    def __init__(self, cache_backend: Optional[BaseCache] = None, timeout: Optional[int] = None):
        self.cache = cache_backend if cache_backend is not None else default_cache
        self.timeout = timeout if timeout is not None else getattr(settings, "SITE_SETTINGS_CACHE_TIMEOUT", 300)

    @staticmethod
    def _model():
        return apps.get_model("storefront", "SiteSetting")

    @staticmethod
    def _cache_key(key: str) -> str:
        return f"{CACHE_KEY_PREFIX}{key}"

    def get_string(self, key: str) -> Optional[str]:
        cached = self.cache.get(self._cache_key(key))
        if cached is not None:
            return None if cached == _MISSING else cached

        try:
            row = self._model().objects.filter(key=key).only("value").first()
        except DatabaseError as exc:
            logger.warning("Error fetching setting %s: %s", key, exc, exc_info=exc)
            return None

        value = row.value if row is not None and row.value else None
        self.cache.set(self._cache_key(key), value if value is not None else _MISSING, self.timeout)
        return value

    def get_json(self, key: str, default: T) -> Union[T, Any]:
        """
        Decode the JSON stored under ``key``.

        Returns ``default`` when the key is missing, empty, or not valid JSON.
        """
        raw = self.get_string(key)
        if not raw:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("Failed to parse JSON setting for %s: %s", key, exc)
            return default

    def set_value(self, key: str, value: Union[str, Any]) -> SettingWriteResult:
        """Upsert ``value``; non-string values are stored as JSON."""
        try:
            string_value = value if isinstance(value, str) else json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.error("Setting %s is not JSON serialisable: %s", key, exc)
            return SettingWriteResult(success=False, error=str(exc))

        try:
            self._model().objects.update_or_create(key=key, defaults={"value": string_value})
        except DatabaseError as exc:
            logger.error("Error updating setting %s: %s", key, exc, exc_info=exc)
            return SettingWriteResult(success=False, error=str(exc))

        self.cache.delete(self._cache_key(key))
        return SettingWriteResult(success=True)

    def has_key(self, key: str) -> bool:
        return self.get_string(key) is not None
