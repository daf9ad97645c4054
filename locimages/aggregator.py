"""
Merges the results of several providers into one gallery for a location.
"""

import math
import random
from typing import List, Optional, Tuple

from .adapters.manager import AdapterManager, KNOWN_SOURCES
from .models import SearchResponse, Coordinates
from .utils.logger import get_logger, log_with_extra

logger = get_logger("locimages.aggregator")

DEFAULT_SOURCES = ('google', 'bing', 'flickr', 'unsplash')


class MissingLocationError(ValueError):
    """Raised when a search is requested without a location."""

    def __init__(self):
        super().__init__("Location is required")


def parse_sources(sources_param: Optional[str]) -> List[str]:
    """
    Turn the comma-separated ``sources`` parameter into known source tags.

    Unknown and repeated tags are dropped; request order is kept. An empty or
    missing parameter selects the default sources.
    """
    if not sources_param or not sources_param.strip():
        return list(DEFAULT_SOURCES)

    sources = []
    for raw in sources_param.split(','):
        tag = raw.strip().lower()
        if tag in KNOWN_SOURCES and tag not in sources:
            sources.append(tag)
        elif tag and tag not in KNOWN_SOURCES:
            logger.warning(f"Ignoring unknown source: {tag}")

    return sources


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or not str(value).strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid coordinate value: {value!r}")
        return None
    return number if math.isfinite(number) else None


def parse_coordinates(lat: Optional[str], lng: Optional[str]) -> Optional[Coordinates]:
    """Coordinates from raw query values; None unless both parse as finite floats."""
    lat_value = _parse_float(lat)
    lng_value = _parse_float(lng)
    if lat_value is None or lng_value is None:
        return None
    return Coordinates(lat=lat_value, lng=lng_value)


class LocationSearch:
    """
    Fans a location query out to the selected adapters and merges the answers.

    Args:
        manager: Adapter manager holding one adapter per source
        rng: Random generator used for shuffling (seedable in tests)
    """

    def __init__(self, manager: AdapterManager, rng: Optional[random.Random] = None):
        self.manager = manager
        self.rng = rng or random.Random()

    async def search(self, location: Optional[str], sources: Optional[List[str]] = None,
                     coordinates: Optional[Coordinates] = None) -> SearchResponse:
        """
        Search every selected source for ``location``.

        Args:
            location: Free-text place description (required)
            sources: Source tags; defaults to DEFAULT_SOURCES
            coordinates: Optional latitude/longitude for geo-aware providers

        Returns:
            SearchResponse with the shuffled images and the sources that
            contributed at least one image

        Raises:
            MissingLocationError: If ``location`` is empty
        """
        if not location or not location.strip():
            raise MissingLocationError()

        location = location.strip()
        if sources is None:
            sources = list(DEFAULT_SOURCES)

        paired = await self.manager.search_sources(location, sources, coordinates)
        images, contributing = self.merge(paired)

        log_with_extra(
            logger, "INFO", f"Search for '{location}' returned {len(images)} images",
            location=location, requested=",".join(sources), contributing=",".join(contributing),
            count=len(images)
        )

        return SearchResponse(images=images, count=len(images), sources=contributing)

    def merge(self, paired: List[Tuple[str, list]]) -> Tuple[list, List[str]]:
        """
        Flatten (source, results) pairs, shuffle uniformly, and list the non-empty sources.

        Images whose id was already seen are dropped; the first one wins.
        """
        images = []
        seen_ids = set()
        for source, results in paired:
            for image in results:
                if image.id in seen_ids:
                    logger.debug(f"Dropping duplicate image id {image.id} from {source}")
                    continue
                seen_ids.add(image.id)
                images.append(image)

        # random.shuffle is a Fisher-Yates shuffle
        self.rng.shuffle(images)

        contributing = [source for source, results in paired if results]
        return images, contributing
