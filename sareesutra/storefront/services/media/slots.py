"""
Homepage media slots: compiled-in catalogue plus merge with persisted overrides.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .normalizer import normalize_media_url

HOME_MEDIA_SETTING_KEY = "home_media_slots"


@dataclass(frozen=True)
class MediaSlot:
    """
    A named media placement on a page.

    Attributes:
        key: Stable identity, fixed by the default catalogue.
        label: Human-readable name shown in the admin.
        location: Where on the site the slot renders.
        url: Canonical image URL.
        link: Optional navigation target for the slot.
    """

    key: str
    label: str
    location: str
    url: str
    link: str = ""


@dataclass(frozen=True)
class HeroImage:
    """One entry of the hero carousel."""

    url: str
    link: str = ""


DEFAULT_HOME_MEDIA_SLOTS: Tuple[MediaSlot, ...] = (
    MediaSlot(
        key="hero_main",
        label="Hero Main Banner",
        location="Homepage > Top Hero",
        url="/home/banner-main.jpg",
        link="/products",
    ),
    MediaSlot(
        key="collection_1",
        label="Collection Card 1",
        location="Homepage > Shop By Collection",
        url="/home/collection-1.jpg",
        link="/products",
    ),
    MediaSlot(
        key="collection_2",
        label="Collection Card 2",
        location="Homepage > Shop By Collection",
        url="/home/collection-2.jpg",
        link="/products",
    ),
    MediaSlot(
        key="collection_3",
        label="Collection Card 3",
        location="Homepage > Shop By Collection",
        url="/home/collection-3.jpg",
        link="/products",
    ),
    MediaSlot(
        key="brand_story",
        label="Brand Story Image",
        location="Homepage > Brand Story Split Section",
        url="/our-story-saree.jpg",
        link="/about",
    ),
    MediaSlot(
        key="gallery_1",
        label="Gallery Image 1",
        location="Homepage > Photo Gallery",
        url="/home/gallery-1.jpg",
        link="/products",
    ),
    MediaSlot(
        key="gallery_2",
        label="Gallery Image 2",
        location="Homepage > Photo Gallery",
        url="/home/gallery-2.jpg",
        link="/products",
    ),
    MediaSlot(
        key="gallery_3",
        label="Gallery Image 3",
        location="Homepage > Photo Gallery",
        url="/home/gallery-3.jpg",
        link="/products",
    ),
    MediaSlot(
        key="gallery_4",
        label="Gallery Image 4",
        location="Homepage > Photo Gallery",
        url="/home/gallery-4.jpg",
        link="/products",
    ),
)


def _entry_key(entry: Any) -> Optional[str]:
    if isinstance(entry, MediaSlot):
        return entry.key
    if isinstance(entry, Mapping):
        key = entry.get("key")
        return key if isinstance(key, str) and key else None
    # Legacy bare-URL strings carry no key and cannot address a slot.
    return None


def _entry_field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _index_persisted(persisted: Iterable[Any]) -> Dict[str, Any]:
    indexed: Dict[str, Any] = {}
    for entry in persisted:
        key = _entry_key(entry)
        # Later entries for the same key overwrite earlier ones.
        if key is not None:
            indexed[key] = entry
    return indexed


def merge_slots(
    defaults: Sequence[MediaSlot],
    persisted: Optional[Iterable[Any]],
) -> List[MediaSlot]:
    """
    Overlay persisted slot overrides on top of the default catalogue.

    Output follows ``defaults`` order and always has the same length.
    ``label``/``location`` are never taken from storage; ``url``/``link``
    are, when truthy. Persisted keys that are not in ``defaults`` are
    dropped.
    """
    if not persisted:
        return list(defaults)

    saved = _index_persisted(persisted)
    if not saved:
        return list(defaults)

    merged: List[MediaSlot] = []
    for slot in defaults:
        entry = saved.get(slot.key)
        if entry is None:
            merged.append(slot)
            continue
        saved_url = _entry_field(entry, "url")
        saved_link = _entry_field(entry, "link")
        merged.append(
            replace(
                slot,
                url=normalize_media_url(saved_url) if saved_url else slot.url,
                link=saved_link if saved_link else slot.link,
            )
        )
    return merged


def slots_by_key(slots: Iterable[MediaSlot]) -> Dict[str, MediaSlot]:
    return {slot.key: slot for slot in slots}


def slot_to_dict(slot: MediaSlot) -> Dict[str, str]:
    return asdict(slot)


def coerce_hero_images(raw: Any) -> List[HeroImage]:
    """
    Read a persisted hero carousel.

    Accepts a list of ``{"url": ..., "link": ...}`` objects or legacy plain
    URL strings (upgraded to ``HeroImage(url, "")``). Entries without a URL
    are skipped; everything else is normalised.
    """
    if not isinstance(raw, (list, tuple)):
        return []

    images: List[HeroImage] = []
    for entry in raw:
        if isinstance(entry, str):
            url, link = entry, ""
        elif isinstance(entry, Mapping):
            url, link = entry.get("url"), entry.get("link") or ""
        else:
            continue
        if not url:
            continue
        images.append(HeroImage(url=normalize_media_url(url), link=str(link)))
    return images
