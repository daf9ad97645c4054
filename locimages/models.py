"""
Domain models shared by the adapters, the aggregator and the web layer.
"""

from dataclasses import dataclass
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field

SourceTag = Literal["google", "bing", "flickr", "unsplash", "zillow", "redfin"]


class ImageResult(BaseModel):
    """One normalized image, whichever provider produced it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    url: str = Field(min_length=1)
    thumbnail: str = Field(min_length=1)
    title: str = ""
    source: SourceTag
    source_url: str = Field(default="", alias="sourceUrl")
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)

    def to_dict(self) -> dict:
        """JSON shape sent to the browser: camelCase keys, unknown dimensions omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SearchResponse(BaseModel):
    """Merged result of one aggregation request."""

    images: List[ImageResult]
    count: int
    sources: List[str]

    def to_dict(self) -> dict:
        return {
            "images": [image.to_dict() for image in self.images],
            "count": self.count,
            "sources": list(self.sources),
        }


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


def positive_int(value) -> Optional[int]:
    """Coerce a provider-supplied dimension; anything not a positive integer becomes None."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
