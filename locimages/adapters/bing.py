"""
Bing Image Search adapter.
Uses the Bing Image Search v7 API with strict safe search.
"""

import hashlib
from typing import List, Dict, Optional

from ..models import ImageResult, Coordinates, positive_int
from .base import BaseAdapter


class BingAdapter(BaseAdapter):
    """
    Bing adapter for searching images through the Bing Image Search API.
    """

    source = "bing"
    label = "Bing Images"
    description = "Bing Image Search"
    placeholder_count = 8

    base_url = "https://api.bing.microsoft.com/v7.0/images/search"

    def __init__(self, config=None, http_client=None):
        """
        Initialize the Bing adapter.

        Args:
            config: Configuration dictionary containing 'api_key'
            http_client: Shared HTTP client
        """
        super().__init__(config, http_client)
        self.api_key = self.config.get('api_key')

    def has_credentials(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        params = {
            "q": query,
            "count": 20,
            "safeSearch": "Strict",
        }
        headers = {
            "Ocp-Apim-Subscription-Key": self.api_key
        }

        data = await self.http_client.get_json(self.base_url, headers=headers, params=params)

        results = []
        for index, image in enumerate(data.get("value") or []):
            content_url = image.get("contentUrl")
            # Only include images with valid URLs
            if not content_url:
                continue

            result = self.build_result(
                id=self._generate_image_id(image, index),
                url=content_url,
                thumbnail=image.get("thumbnailUrl") or content_url,
                title=image.get("name") or "",
                source_url=image.get("hostPageUrl") or "",
                width=positive_int(image.get("width")),
                height=positive_int(image.get("height")),
            )
            if result is not None:
                results.append(result)

        return results

    def _generate_image_id(self, image_data: Dict, index: int) -> str:
        """
        Build an id for a Bing result.

        Uses Bing's own imageId when present, otherwise a hash of the content URL
        plus the result position.
        """
        bing_id = image_data.get("imageId")
        if bing_id:
            return f"bing-{bing_id}"

        url_hash = hashlib.md5(image_data["contentUrl"].encode('utf-8')).hexdigest()[:12]
        return f"bing-{index}-{url_hash}"
