from typing import List, Optional
from urllib.parse import quote

from ..models import ImageResult, Coordinates, positive_int
from .base import BaseAdapter

SOURCE_HOST = "https://source.unsplash.com"


class UnsplashAdapter(BaseAdapter):
    """
    Unsplash adapter.

    Without an access key the results are built from the source.unsplash.com
    URL template, so no search API is called. With ``access_key`` configured the
    official search API is used instead.
    """

    source = "unsplash"
    label = "Unsplash"
    description = "High-quality free photos"
    result_count = 10

    api_url = "https://api.unsplash.com/search/photos"

    def __init__(self, config=None, http_client=None):
        """
        Initialize the Unsplash adapter.

        Args:
            config: Configuration dictionary, optionally containing 'access_key'
            http_client: Shared HTTP client
        """
        super().__init__(config, http_client)
        self.access_key = self.config.get('access_key')

    @property
    def live(self) -> bool:
        return bool(self.access_key)

    async def fetch(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        if self.live:
            return await self._search_api(query)
        return self._templated_results(query)

    def _templated_results(self, query: str) -> List[ImageResult]:
        encoded = quote(query, safe='')
        images = []

        for i in range(self.result_count):
            images.append(ImageResult(
                id=f"unsplash-{query}-{i}",
                url=f"{SOURCE_HOST}/800x600/?{encoded}&sig={i}",
                thumbnail=f"{SOURCE_HOST}/400x300/?{encoded}&sig={i}",
                title=f"{query} - Unsplash Photo {i + 1}",
                source=self.source,
                source_url=f"https://unsplash.com/s/photos/{encoded}",
                width=800,
                height=600,
            ))

        return images

    async def _search_api(self, query: str) -> List[ImageResult]:
        params = {
            "query": query,
            "per_page": self.result_count,
            "content_filter": "high",
        }
        headers = {
            "Authorization": f"Client-ID {self.access_key}"
        }

        data = await self.http_client.get_json(self.api_url, headers=headers, params=params)

        results = []
        for photo in data.get("results") or []:
            urls = photo.get("urls") or {}
            url = urls.get("regular") or urls.get("full")
            if not url or not photo.get("id"):
                continue

            result = self.build_result(
                id=f"unsplash-{photo['id']}",
                url=url,
                thumbnail=urls.get("small") or urls.get("thumb") or url,
                title=photo.get("alt_description") or photo.get("description") or f"{query} - Unsplash Photo",
                source_url=(photo.get("links") or {}).get("html") or "",
                width=positive_int(photo.get("width")),
                height=positive_int(photo.get("height")),
            )
            if result is not None:
                results.append(result)

        return results
