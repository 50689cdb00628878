"""
Homepage media composition: slots, hero carousel and announcement banner.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .media.normalizer import normalize_media_url
from .media.slots import (
    DEFAULT_HOME_MEDIA_SLOTS,
    HOME_MEDIA_SETTING_KEY,
    HeroImage,
    MediaSlot,
    coerce_hero_images,
    merge_slots,
    slot_to_dict,
    slots_by_key,
)
from .settings_gateway import SettingsGateway

logger = logging.getLogger(__name__)

HERO_IMAGES_KEY = "hero_images"
HERO_IMAGES_MOBILE_KEY = "hero_images_mobile"
LEGACY_HERO_IMAGE_KEY = "hero_image_url"
BANNER_ENABLED_KEY = "banner_enabled"
BANNER_TEXT_KEY = "banner_text"

DEFAULT_BANNER_TEXT = "Welcome to Saree Sutra!"


@dataclass
class AnnouncementBanner:
    enabled: bool = False
    text: str = ""

    @property
    def visible(self) -> bool:
        return self.enabled and bool(self.text)


@dataclass
class HomeMedia:
    slots: List[MediaSlot]
    hero_images: List[HeroImage] = field(default_factory=list)
    hero_images_mobile: List[HeroImage] = field(default_factory=list)
    banner: AnnouncementBanner = field(default_factory=AnnouncementBanner)

    def slot(self, key: str) -> Optional[MediaSlot]:
        return slots_by_key(self.slots).get(key)

    def slot_url(self, key: str) -> Optional[str]:
        slot = self.slot(key)
        return slot.url if slot else None


def load_home_slots(
    gateway: SettingsGateway,
    defaults: Sequence[MediaSlot] = DEFAULT_HOME_MEDIA_SLOTS,
) -> List[MediaSlot]:
    persisted = gateway.get_json(HOME_MEDIA_SETTING_KEY, None)
    if persisted is not None and not isinstance(persisted, list):
        logger.warning("Ignoring %s: expected a list, got %s", HOME_MEDIA_SETTING_KEY, type(persisted).__name__)
        persisted = None
    return merge_slots(defaults, persisted)


def load_hero_images(gateway: SettingsGateway, key: str = HERO_IMAGES_KEY) -> List[HeroImage]:
    """
    Hero carousel for ``key``.

    The desktop carousel falls back to the single legacy ``hero_image_url``
    setting when the list is empty.
    """
    images = coerce_hero_images(gateway.get_json(key, []))
    if images or key != HERO_IMAGES_KEY:
        return images
    legacy_url = gateway.get_string(LEGACY_HERO_IMAGE_KEY)
    if legacy_url:
        return [HeroImage(url=normalize_media_url(legacy_url), link="")]
    return []


def load_banner(gateway: SettingsGateway) -> AnnouncementBanner:
    enabled = gateway.get_json(BANNER_ENABLED_KEY, False)
    text = gateway.get_string(BANNER_TEXT_KEY) or ""
    return AnnouncementBanner(enabled=enabled is True, text=text)


def load_home_media(gateway: Optional[SettingsGateway] = None) -> HomeMedia:
    gateway = gateway or SettingsGateway()
    return HomeMedia(
        slots=load_home_slots(gateway),
        hero_images=load_hero_images(gateway, HERO_IMAGES_KEY),
        hero_images_mobile=load_hero_images(gateway, HERO_IMAGES_MOBILE_KEY),
        banner=load_banner(gateway),
    )


def serialize_home_media(media: HomeMedia) -> Dict[str, Any]:
    return {
        "slots": [slot_to_dict(slot) for slot in media.slots],
        "hero_images": [{"url": image.url, "link": image.link} for image in media.hero_images],
        "hero_images_mobile": [{"url": image.url, "link": image.link} for image in media.hero_images_mobile],
        "banner": {"enabled": media.banner.enabled, "text": media.banner.text},
    }


def save_home_slots(gateway: SettingsGateway, entries: Iterable[Dict[str, Any]]):
    """Persist operator slot edits merged over the defaults."""
    merged = merge_slots(DEFAULT_HOME_MEDIA_SLOTS, list(entries))
    return gateway.set_value(HOME_MEDIA_SETTING_KEY, [slot_to_dict(slot) for slot in merged])


def save_hero_images(gateway: SettingsGateway, key: str, entries: Iterable[Any]):
    images = coerce_hero_images(list(entries))
    return gateway.set_value(key, [{"url": image.url, "link": image.link} for image in images])


def save_banner(gateway: SettingsGateway, enabled: bool, text: str):
    results = [
        gateway.set_value(BANNER_ENABLED_KEY, "true" if enabled else "false"),
        gateway.set_value(BANNER_TEXT_KEY, text),
    ]
    failed = next((result for result in results if not result.success), None)
    return failed or results[0]


def initialize_default_settings(gateway: Optional[SettingsGateway] = None) -> bool:
    """
    Seed home media slots and banner settings on a fresh install.

    Returns True when defaults were written, False when slots already exist.
    """
    gateway = gateway or SettingsGateway()
    if gateway.has_key(HOME_MEDIA_SETTING_KEY):
        return False

    logger.info("Initializing default %s...", HOME_MEDIA_SETTING_KEY)
    results = [
        gateway.set_value(HOME_MEDIA_SETTING_KEY, [slot_to_dict(slot) for slot in DEFAULT_HOME_MEDIA_SLOTS]),
        gateway.set_value(BANNER_ENABLED_KEY, "false"),
        gateway.set_value(BANNER_TEXT_KEY, DEFAULT_BANNER_TEXT),
    ]
    for result in results:
        if not result.success:
            raise RuntimeError(f"Failed to initialize settings: {result.error}")
    return True
