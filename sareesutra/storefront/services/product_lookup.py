"""
Product lookups that feed the media resolver.

Model rows are turned into immutable `ProductMedia` snapshots so that the
resolver and spotlight never touch the ORM themselves.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from django.apps import apps
from django.db import DatabaseError, connections

from .media.resolver import ProductMedia, VariantMedia

logger = logging.getLogger(__name__)


def _product_model():
    return apps.get_model("storefront", "Product")


def coerce_bundle_ids(raw: Any) -> tuple:
    ids = []
    for item in raw or []:
        try:
            ids.append(int(item))
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed bundle item id: %r", item)
    return tuple(ids)


def snapshot_from_model(product) -> ProductMedia:
    """Build a `ProductMedia` snapshot from a `Product` instance."""
    # Use prefetched variants when available to avoid N+1 queries.
    variants = getattr(product, "_prefetched_objects_cache", {}).get("variants")
    if variants is None:
        variants = product.variants.all()
    return ProductMedia(
        id=product.pk,
        images=tuple(url or "" for url in (product.images or [])),
        is_gift_set=bool(product.is_gift_set),
        is_hidden=bool(product.is_hidden),
        is_featured=bool(product.is_featured),
        bundle_items=coerce_bundle_ids(product.bundle_items),
        variants=tuple(
            VariantMedia(size=variant.size, price=variant.price, image=variant.image or None)
            for variant in variants
        ),
    )


def get_product_by_id(product_id: Any) -> Optional[ProductMedia]:
    """
    Return the media snapshot for ``product_id``, or None.

    Unknown or malformed ids and database errors all yield None.
    """
    try:
        pk = int(product_id)
    except (TypeError, ValueError):
        logger.debug("Product lookup with non-numeric id %r", product_id)
        return None

    try:
        product = _product_model().objects.prefetch_related("variants").filter(pk=pk).first()
    except DatabaseError as exc:
        logger.warning("Failed to load product %s: %s", pk, exc, exc_info=exc)
        return None

    if product is None:
        return None
    return snapshot_from_model(product)


def lookup_in_worker(product_id: Any) -> Optional[ProductMedia]:
    """
    `get_product_by_id` for use on pool threads.

    Database connections are thread-local, so the worker's connection is
    closed once the lookup is done.
    """
    try:
        return get_product_by_id(product_id)
    finally:
        connections.close_all()


def get_spotlight_pool() -> List[ProductMedia]:
    """All products as snapshots, in id order."""
    queryset = _product_model().objects.prefetch_related("variants").order_by("id")
    try:
        return [snapshot_from_model(product) for product in queryset]
    except DatabaseError as exc:
        logger.warning("Failed to load spotlight pool: %s", exc, exc_info=exc)
        return []
