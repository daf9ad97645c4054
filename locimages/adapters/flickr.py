"""
Flickr adapter.
Searches public photos through the Flickr REST API, optionally around a point.
"""

from typing import List, Dict, Optional

from ..models import ImageResult, Coordinates
from .base import BaseAdapter

STATIC_HOST = "https://live.staticflickr.com"


class FlickrAdapter(BaseAdapter):
    """
    Flickr adapter.

    Unlike the other live providers, a failed call degrades to a smaller set
    of demo results instead of an empty list.
    """

    source = "flickr"
    label = "Flickr"
    description = "Flickr photos"
    placeholder_count = 8
    failure_placeholder_count = 5

    base_url = "https://api.flickr.com/services/rest/"
    radius_km = 10

    def __init__(self, config=None, http_client=None):
        super().__init__(config, http_client)
        self.api_key = self.config.get('api_key')

    def has_credentials(self) -> bool:
        return bool(self.api_key)

    def build_params(self, query: str, coordinates: Optional[Coordinates] = None) -> Dict[str, str]:
        """Query string for flickr.photos.search, with a radius filter when coordinates are known."""
        params = {
            "method": "flickr.photos.search",
            "api_key": self.api_key or "demo",
            "text": query,
            "safe_search": "1",
            "content_type": "1",  # photos only
            "media": "photos",
            "per_page": "20",
            "format": "json",
            "nojsoncallback": "1",
            "extras": "url_m,url_l,url_o",
        }

        if coordinates is not None:
            params["lat"] = str(coordinates.lat)
            params["lon"] = str(coordinates.lng)
            params["radius"] = str(self.radius_km)

        return params

    async def fetch(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        data = await self.http_client.get_json(self.base_url, params=self.build_params(query, coordinates))

        photos = (data.get("photos") or {}).get("photo")
        if not photos:
            return []

        results = []
        for photo in photos:
            photo_id = photo.get("id")
            if not photo_id:
                continue

            static_base = f"{STATIC_HOST}/{photo.get('server')}/{photo_id}_{photo.get('secret')}"
            result = self.build_result(
                id=f"flickr-{photo_id}",
                url=photo.get("url_l") or photo.get("url_m") or f"{static_base}_b.jpg",
                thumbnail=photo.get("url_m") or f"{static_base}_m.jpg",
                title=photo.get("title") or f"Photo from {query}",
                source_url=f"https://www.flickr.com/photos/{photo.get('owner')}/{photo_id}",
            )
            if result is not None:
                results.append(result)

        return results
