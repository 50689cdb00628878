"""
Media resolution helpers (authoritative implementation).
"""

from .loader import GenerationTracker, MediaPlanLoader, ResolutionTicket
from .normalizer import (
    PLACEHOLDER_IMAGE,
    is_placeholder,
    normalize_media_url,
    normalize_media_urls,
)
from .resolver import (
    MODE_BUNDLE_GRID,
    MODE_PLACEHOLDER,
    MODE_SINGLE,
    DisplayPlan,
    MediaResolutionError,
    ProductMedia,
    VariantMedia,
    collect_bundle_images,
    default_main_image,
    grid_layout,
    resolve_display,
    select_variant_image,
)
from .slots import (
    DEFAULT_HOME_MEDIA_SLOTS,
    HOME_MEDIA_SETTING_KEY,
    HeroImage,
    MediaSlot,
    coerce_hero_images,
    merge_slots,
    slot_to_dict,
    slots_by_key,
)
from .spotlight import day_seed, select_spotlight, today_iso

__all__ = [
    "GenerationTracker",
    "MediaPlanLoader",
    "ResolutionTicket",
    "PLACEHOLDER_IMAGE",
    "is_placeholder",
    "normalize_media_url",
    "normalize_media_urls",
    "MODE_BUNDLE_GRID",
    "MODE_PLACEHOLDER",
    "MODE_SINGLE",
    "DisplayPlan",
    "MediaResolutionError",
    "ProductMedia",
    "VariantMedia",
    "collect_bundle_images",
    "default_main_image",
    "grid_layout",
    "resolve_display",
    "select_variant_image",
    "DEFAULT_HOME_MEDIA_SLOTS",
    "HOME_MEDIA_SETTING_KEY",
    "HeroImage",
    "MediaSlot",
    "coerce_hero_images",
    "merge_slots",
    "slot_to_dict",
    "slots_by_key",
    "day_seed",
    "select_spotlight",
    "today_iso",
]
