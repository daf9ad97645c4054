"""
Real-estate listing adapters (Zillow, Redfin).

Neither site offers a public image search API; results are always demo
placeholders.
"""

from typing import List, Optional

from ..models import ImageResult, Coordinates
from .base import BaseAdapter
from .placeholder import generate_placeholders


class RealEstateAdapter(BaseAdapter):
    placeholder_count = 6

    @property
    def live(self) -> bool:
        return False

    async def fetch(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        return generate_placeholders(query, self.source, self.placeholder_count)


class ZillowAdapter(RealEstateAdapter):
    source = "zillow"
    label = "Zillow"
    description = "Real estate listings"


class RedfinAdapter(RealEstateAdapter):
    source = "redfin"
    label = "Redfin"
    description = "Property photos"
