"""
Placeholder (demo) results used when a provider cannot be queried.
"""

import hashlib
from typing import List
from urllib.parse import quote

from ..models import ImageResult

PLACEHOLDER_HOST = "https://picsum.photos"

THEMES = ['house', 'building', 'street', 'neighborhood', 'architecture', 'property', 'home', 'exterior']


def _query_digest(query: str) -> str:
    return hashlib.md5(query.encode('utf-8')).hexdigest()[:8]


def generate_placeholders(query: str, source: str, count: int) -> List[ImageResult]:
    """
    Build ``count`` deterministic demo images for ``source``.

    Image URLs come from picsum.photos keyed by ``{query}-{source}-{index}``,
    so the same inputs always produce the same records, ids included.

    Args:
        query: Free-text search query
        source: Source tag the placeholders stand in for
        count: Number of records to generate

    Returns:
        List of ImageResult
    """
    images = []
    digest = _query_digest(query)

    for i in range(count):
        theme = THEMES[i % len(THEMES)]
        width = 800 + (i % 3) * 100
        height = 600 + (i % 4) * 50
        seed = quote(f"{query}-{source}-{i}", safe='')

        images.append(ImageResult(
            id=f"{source}-demo-{i}-{digest}",
            url=f"{PLACEHOLDER_HOST}/seed/{seed}/{width}/{height}",
            thumbnail=f"{PLACEHOLDER_HOST}/seed/{seed}/400/300",
            title=f"{query} - {theme} (Demo)",
            source=source,
            source_url=PLACEHOLDER_HOST,
            width=width,
            height=height,
        ))

    return images
