"""
Canonicalisation of operator-pasted image references.

Admins paste whatever the browser gives them: Google Drive share links,
links without a scheme, root-relative asset paths. Everything that reaches a
template goes through `normalize_media_url` first.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "/fallback-product.jpg"
DEFAULT_TARGET_WIDTH = 800

DRIVE_DOMAIN = "drive.google.com"
DRIVE_DIRECT_MARKERS = ("/uc?", "/thumbnail?")
DRIVE_THUMBNAIL_TEMPLATE = "https://drive.google.com/thumbnail?id={file_id}&sz=w{width}"

# Order matters: the first pattern that matches wins.
DRIVE_ID_PATTERNS = (
    re.compile(r"/file/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"[?&]id=([a-zA-Z0-9_-]+)"),
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
)

CANONICAL_PREFIXES = ("http://", "https://", "data:image", "/")

# Prefix match: anything may follow the domain.
BARE_DOMAIN_RE = re.compile(
    r"^(?:[a-zA-Z0-9][a-zA-Z0-9-]{0,61}[a-zA-Z0-9]\.)+[a-zA-Z]{2,}"
)


def extract_drive_file_id(url: str) -> Optional[str]:
    """Return the Drive file id embedded in a share link, if any."""
    for pattern in DRIVE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def normalize_media_url(raw: Optional[str], target_width: int = DEFAULT_TARGET_WIDTH) -> str:
    """
    Turn a pasted media reference into a directly renderable URL.

    Drive share links become thumbnail URLs sized to ``target_width``; links
    that already point at a direct Drive endpoint, absolute/relative URLs and
    ``data:image`` URIs pass through; bare domains gain ``https://``.
    Anything else is replaced with `PLACEHOLDER_IMAGE`.

    The function never raises and is idempotent: feeding its output back in
    returns the same string.
    """
    if not raw or not isinstance(raw, str):
        return PLACEHOLDER_IMAGE
    url = raw.strip()
    if not url:
        return PLACEHOLDER_IMAGE

    if DRIVE_DOMAIN in url:
        if any(marker in url for marker in DRIVE_DIRECT_MARKERS):
            return url
        file_id = extract_drive_file_id(url)
        if file_id:
            return DRIVE_THUMBNAIL_TEMPLATE.format(file_id=file_id, width=target_width)

    if url.startswith(CANONICAL_PREFIXES):
        return url

    if BARE_DOMAIN_RE.match(url):
        return f"https://{url}"

    logger.warning("Filtered invalid image URL: %r", raw)
    return PLACEHOLDER_IMAGE


def normalize_media_urls(
    urls: Iterable[Optional[str]],
    target_width: int = DEFAULT_TARGET_WIDTH,
) -> List[str]:
    """Normalise every entry of ``urls``, preserving order and length."""
    return [normalize_media_url(url, target_width) for url in urls]


def is_placeholder(url: Optional[str]) -> bool:
    return url == PLACEHOLDER_IMAGE
