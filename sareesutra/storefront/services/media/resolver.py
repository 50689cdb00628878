"""
Per-product display decisions: which image(s) a product card or detail page shows.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .normalizer import DEFAULT_TARGET_WIDTH, normalize_media_url

logger = logging.getLogger(__name__)

MODE_BUNDLE_GRID = "bundle-grid"
MODE_SINGLE = "single"
MODE_PLACEHOLDER = "placeholder"

MAX_GRID_IMAGES = 4
DEFAULT_LOOKUP_WORKERS = 4

GRID_LAYOUTS: Dict[int, Dict[str, int]] = {
    2: {"columns": 2, "rows": 1},
    # The third image spans both columns of the second row.
    3: {"columns": 2, "rows": 2, "last_span": 2},
    4: {"columns": 2, "rows": 2},
}


class MediaResolutionError(ValueError):
    """Raised when a resolution request is malformed and cannot be issued."""


@dataclass(frozen=True)
class VariantMedia:
    size: str
    price: Any = None
    image: Optional[str] = None


@dataclass(frozen=True)
class ProductMedia:
    """
    Media-relevant snapshot of a product.

    ``images`` holds canonical URLs; an empty tuple or a single empty entry
    means the product has no main image of its own.
    """

    id: int
    images: Tuple[str, ...] = ()
    is_gift_set: bool = False
    is_hidden: bool = False
    is_featured: bool = False
    bundle_items: Tuple[int, ...] = ()
    variants: Tuple[VariantMedia, ...] = ()


@dataclass(frozen=True)
class DisplayPlan:
    """
    Outcome of `resolve_display`.

    Attributes:
        mode: One of ``bundle-grid``, ``single`` or ``placeholder``.
        images: Images to render (one for ``single``, up to four for a grid).
        default_image: The product's own main image, or None. Callers use it
            to reset the view when a variant without an image is selected.
    """

    mode: str
    images: Tuple[str, ...] = field(default_factory=tuple)
    default_image: Optional[str] = None

    @property
    def image(self) -> Optional[str]:
        return self.images[0] if self.images else None

    @property
    def layout(self) -> Optional[Dict[str, int]]:
        if self.mode != MODE_BUNDLE_GRID:
            return None
        return grid_layout(len(self.images))

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"mode": self.mode, "default_image": self.default_image}
        if self.mode == MODE_SINGLE:
            data["image"] = self.image
        elif self.mode == MODE_BUNDLE_GRID:
            data["images"] = list(self.images)
            data["layout"] = self.layout
        return data


Lookup = Callable[[int], Optional[ProductMedia]]


def grid_layout(count: int) -> Dict[str, int]:
    """
    Column/row template for a grid of ``count`` images.

    A single image is rendered as a 1x1 grid; counts above four are clamped.
    """
    if count <= 1:
        return {"columns": 1, "rows": 1}
    return dict(GRID_LAYOUTS[min(count, MAX_GRID_IMAGES)])


def default_main_image(product: ProductMedia) -> Optional[str]:
    """Return the product's first image when it is usable, otherwise None."""
    images = product.images or ()
    if images and images[0]:
        return images[0]
    return None


def select_variant_image(product: ProductMedia, variant: Optional[VariantMedia]) -> Optional[str]:
    """
    Image to show after a variant is picked.

    A variant with its own image overrides the display; one without reverts
    to the product's default main image (never to a bundle grid).
    """
    if variant is not None and variant.image:
        return normalize_media_url(variant.image)
    return default_main_image(product)


def _lookup_member(lookup: Lookup, member_id: int) -> Optional[str]:
    try:
        member = lookup(member_id)
    except Exception as exc:
        logger.warning("Bundle member %s lookup failed: %s", member_id, exc, exc_info=exc)
        return None
    image = default_main_image(member) if member is not None else None
    if image is None:
        logger.info("Bundle member %s has no image; skipping.", member_id)
    return image


def collect_bundle_images(
    bundle_items: Sequence[int],
    lookup: Lookup,
    *,
    max_workers: Optional[int] = None,
) -> List[str]:
    """
    Look up every bundle member concurrently and return their primary images.

    Waits for the whole batch. Failed or image-less members are dropped;
    the survivors keep their ``bundle_items`` order.
    """
    if not bundle_items:
        return []
    workers = max(1, min(len(bundle_items), max_workers or DEFAULT_LOOKUP_WORKERS))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bundle-lookup") as executor:
        results = list(executor.map(lambda member_id: _lookup_member(lookup, member_id), bundle_items))
    return [image for image in results if image]


def _validate(product: Any, lookup: Optional[Lookup]) -> None:
    if product is None:
        raise MediaResolutionError("Cannot resolve media for a missing product.")
    bundle_items = getattr(product, "bundle_items", None)
    if bundle_items is not None and not isinstance(bundle_items, (list, tuple)):
        raise MediaResolutionError(
            f"bundle_items must be a list of product ids, got {type(bundle_items).__name__}."
        )
    if lookup is not None and not callable(lookup):
        raise MediaResolutionError("lookup must be callable.")


def resolve_display(
    product: ProductMedia,
    *,
    lookup: Optional[Lookup] = None,
    override_images: Optional[Sequence[str]] = None,
    target_width: int = DEFAULT_TARGET_WIDTH,
    max_workers: Optional[int] = None,
) -> DisplayPlan:
    """
    Decide what to display for ``product``.

    Rules, first match wins:
        1. non-empty ``override_images`` are used as given;
        2. the product's own main image;
        3. for gift sets without a main image, a grid of bundle member
           images fetched through ``lookup``;
        4. placeholder.
    """
    _validate(product, lookup)
    main_image = default_main_image(product)

    if override_images:
        images = tuple(override_images[:MAX_GRID_IMAGES])
        mode = MODE_SINGLE if len(images) == 1 else MODE_BUNDLE_GRID
        return DisplayPlan(mode=mode, images=images, default_image=main_image)

    if main_image:
        return DisplayPlan(
            mode=MODE_SINGLE,
            images=(normalize_media_url(main_image, target_width),),
            default_image=main_image,
        )

    if product.is_gift_set and product.bundle_items:
        if lookup is None:
            raise MediaResolutionError(f"Product {product.id} is a bundle but no lookup was supplied.")
        bundle_images = collect_bundle_images(product.bundle_items, lookup, max_workers=max_workers)
        if bundle_images:
            grid = tuple(
                normalize_media_url(image, target_width) for image in bundle_images[:MAX_GRID_IMAGES]
            )
            return DisplayPlan(mode=MODE_BUNDLE_GRID, images=grid)
        logger.info("No bundle images resolved for gift set %s; using placeholder.", product.id)

    return DisplayPlan(mode=MODE_PLACEHOLDER)
