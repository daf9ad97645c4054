"""
Adapter manager.
Builds every provider adapter from the configuration and runs a selection of
them concurrently.
"""

import asyncio
from typing import Dict, List, Optional, Tuple, Any

from ..models import ImageResult, Coordinates
from ..utils.logger import get_logger
from ..utils.http_client import HTTPClient, get_http_client
from .base import BaseAdapter
from .google import GoogleAdapter
from .bing import BingAdapter
from .flickr import FlickrAdapter
from .unsplash import UnsplashAdapter
from .real_estate import ZillowAdapter, RedfinAdapter

logger = get_logger("locimages.adapters.manager")

# Order is the display order of the source toggles
ADAPTER_CLASSES = {
    'google': GoogleAdapter,
    'bing': BingAdapter,
    'flickr': FlickrAdapter,
    'unsplash': UnsplashAdapter,
    'zillow': ZillowAdapter,
    'redfin': RedfinAdapter,
}

KNOWN_SOURCES = tuple(ADAPTER_CLASSES)


class AdapterManager:
    """
    Holds one adapter per known source.

    Every source gets an adapter even without credentials; those adapters
    answer with demo results.
    """

    def __init__(self, config: Dict = None, http_client: Optional[HTTPClient] = None):
        """
        Initialize the adapter manager.

        Args:
            config: Configuration dictionary containing API keys and settings
            http_client: HTTP client shared by all adapters
        """
        self.config = config or {}
        self.http_client = http_client or get_http_client(self.config.get('http_client', {}))
        self.adapters: Dict[str, BaseAdapter] = {}

        apis = self.config.get('apis') or {}
        for source, adapter_class in ADAPTER_CLASSES.items():
            self.adapters[source] = adapter_class(apis.get(source) or {}, http_client=self.http_client)

        live = [source for source, adapter in self.adapters.items() if adapter.live]
        logger.info(f"Initialized {len(self.adapters)} adapters (live: {', '.join(live) if live else 'none'})")

    def get_adapter(self, name: str) -> Optional[BaseAdapter]:
        return self.adapters.get(name)

    def describe_sources(self) -> List[Dict[str, Any]]:
        """Label, description and live/demo mode of every source, in display order."""
        return [
            {
                'id': source,
                'label': adapter.label,
                'description': adapter.description,
                'live': adapter.live,
            }
            for source, adapter in self.adapters.items()
        ]

    async def search_sources(self, query: str, sources: List[str],
                             coordinates: Optional[Coordinates] = None) -> List[Tuple[str, List[ImageResult]]]:
        """
        Run the named adapters concurrently and wait for all of them.

        Coordinates are only passed to adapters that use them (Flickr).
        A failure in one adapter is logged and counted as an empty list; it
        never cancels the others.

        Args:
            query: Search query string
            sources: Source tags to query (unknown tags are ignored)
            coordinates: Optional latitude/longitude

        Returns:
            (source, results) pairs in the order of ``sources``
        """
        selected = [source for source in sources if source in self.adapters]

        calls = []
        for source in selected:
            adapter = self.adapters[source]
            if isinstance(adapter, FlickrAdapter):
                calls.append(adapter.search(query, coordinates))
            else:
                calls.append(adapter.search(query))

        outcomes = await asyncio.gather(*calls, return_exceptions=True)

        paired = []
        for source, outcome in zip(selected, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Error searching {source}: {outcome}")
                outcome = []
            paired.append((source, outcome))

        return paired
