"""
Daily spotlight: the single product promoted on the homepage.
"""
from __future__ import annotations

import datetime
import logging
from typing import Optional, Sequence, TypeVar, Union

from django.utils import timezone

logger = logging.getLogger(__name__)

P = TypeVar("P")
CalendarDate = Union[str, datetime.date]


def today_iso() -> str:
    """Canonical "today" string (``YYYY-MM-DD``) in the site's time zone."""
    return timezone.localdate().isoformat()


def _as_iso(today: CalendarDate) -> str:
    if isinstance(today, datetime.datetime):
        return today.date().isoformat()
    if isinstance(today, datetime.date):
        return today.isoformat()
    return today


def day_seed(today: CalendarDate) -> int:
    """Sum of character codes of the ISO date string."""
    return sum(ord(char) for char in _as_iso(today))


def select_spotlight(pool: Sequence[P], today: CalendarDate) -> Optional[P]:
    """
    Pick the spotlight product for ``today``.

    Hidden products are skipped unless every product is hidden, in which case
    the whole pool is used. The first ``is_featured`` product wins; otherwise
    the pick rotates daily as ``pool[day_seed(today) % len(pool)]``.
    """
    if not pool:
        logger.warning("Daily spotlight: no products to choose from.")
        return None

    visible = [product for product in pool if not getattr(product, "is_hidden", False)]
    working_pool = visible or list(pool)

    for product in working_pool:
        if getattr(product, "is_featured", False):
            return product

    return working_pool[day_seed(today) % len(working_pool)]
