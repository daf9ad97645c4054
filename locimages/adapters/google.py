"""
Google Custom Search adapter (image search mode).
"""

import hashlib
from typing import List, Optional

from ..models import ImageResult, Coordinates, positive_int
from .base import BaseAdapter


class GoogleAdapter(BaseAdapter):
    """
    Searches images through the Google Custom Search JSON API.

    Needs both an API key and a search engine id (``cx``).
    """

    source = "google"
    label = "Google Images"
    description = "Google Images"
    placeholder_count = 10

    base_url = "https://www.googleapis.com/customsearch/v1"

    def __init__(self, config=None, http_client=None):
        super().__init__(config, http_client)
        self.api_key = self.config.get('api_key')
        self.cx = self.config.get('cx')

    def has_credentials(self) -> bool:
        return bool(self.api_key and self.cx)

    async def fetch(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "searchType": "image",
            "safe": "active",
            "num": 10,
        }

        data = await self.http_client.get_json(self.base_url, params=params)

        results = []
        for index, item in enumerate(data.get("items") or []):
            link = item.get("link")
            if not link:
                continue

            image = item.get("image") or {}
            url_hash = hashlib.md5(link.encode('utf-8')).hexdigest()[:12]
            result = self.build_result(
                id=f"google-{index}-{url_hash}",
                url=link,
                thumbnail=image.get("thumbnailLink") or link,
                title=item.get("title") or "",
                source_url=image.get("contextLink") or "",
                width=positive_int(image.get("width")),
                height=positive_int(image.get("height")),
            )
            if result is not None:
                results.append(result)

        return results
