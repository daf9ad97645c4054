"""
Base adapter class for the location image providers.
All adapters extend this class so the fallback policy lives in one place.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional

from pydantic import ValidationError

from ..models import ImageResult, Coordinates
from ..utils.logger import get_logger, log_search, log_error
from ..utils.http_client import HTTPClient, get_http_client
from .placeholder import generate_placeholders


class BaseAdapter(ABC):
    """
    Abstract base class for all image provider adapters.

    Subclasses implement ``fetch`` and describe their fallback policy with
    class attributes:

    - ``placeholder_count``: placeholders returned when credentials are missing
    - ``failure_placeholder_count``: placeholders returned when ``fetch`` raises
      (0 means an empty list)
    """

    source: str = ""
    label: str = ""
    description: str = ""
    placeholder_count: int = 8
    failure_placeholder_count: int = 0

    def __init__(self, config: Dict = None, http_client: Optional[HTTPClient] = None):
        """
        Initialize the adapter with optional configuration.

        Args:
            config: Provider section of the configuration (api keys etc.)
            http_client: Shared HTTP client; defaults to the global one
        """
        self.config = config or {}
        self.logger = get_logger(f"locimages.adapters.{self.source}")
        self.http_client = http_client or get_http_client()

    def has_credentials(self) -> bool:
        """Whether the provider can be queried live. Credential-free adapters return True."""
        return True

    @property
    def live(self) -> bool:
        """Whether results come from the real provider rather than demo data."""
        return self.has_credentials()

    @abstractmethod
    async def fetch(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        """
        Query the provider and map its native response onto ImageResult.

        May raise on network or parse errors; ``search`` handles that.
        """

    async def search(self, query: str, coordinates: Optional[Coordinates] = None) -> List[ImageResult]:
        """
        Search for images of ``query``. Never raises.

        Args:
            query: Free-text location description
            coordinates: Optional latitude/longitude

        Returns:
            List of ImageResult, possibly placeholders or empty
        """
        if not self.has_credentials():
            self.logger.info(f"{self.source} credentials not configured, using demo results")
            results = generate_placeholders(query, self.source, self.placeholder_count)
            log_search(self.logger, self.source, query, len(results), "placeholder")
            return results

        try:
            results = await self.fetch(query, coordinates)
        except Exception as e:
            log_error(self.logger, f"{self.source} search failed", e, source=self.source, query=query)
            return self.on_failure(query)

        log_search(self.logger, self.source, query, len(results), "live" if self.live else "demo")
        return results

    def build_result(self, **fields) -> Optional[ImageResult]:
        """Build one ImageResult; a provider item that fails validation is logged and skipped."""
        try:
            return ImageResult(source=self.source, **fields)
        except ValidationError as e:
            log_error(self.logger, f"Skipping invalid {self.source} item", e,
                      source=self.source, item_id=fields.get("id"))
            return None

    def on_failure(self, query: str) -> List[ImageResult]:
        if self.failure_placeholder_count:
            return generate_placeholders(query, self.source, self.failure_placeholder_count)
        return []
