"""
Shared HTTP client for the provider adapters.
Provides User-Agent rotation and a common timeout for all outbound calls.
"""

import random
from typing import Dict, Any, Optional
import httpx
from .logger import get_logger

logger = get_logger("locimages.utils.http_client")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class HTTPClient:
    """
    Thin async wrapper around httpx used by every adapter.

    A fresh ``httpx.AsyncClient`` is opened per call, so nothing is shared
    between concurrent requests. Errors are raised to the caller; there is no
    retry layer.
    """

    def __init__(self, config: Dict = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the HTTP client.

        Args:
            config: ``http_client`` section of the configuration
            transport: Optional httpx transport (used to stub providers in tests)
        """
        self.config = config or {}
        self.user_agents = self.config.get('user_agents') or [DEFAULT_USER_AGENT]
        self.timeout = self.config.get('timeout', 30)
        self.transport = transport

        logger.debug(f"HTTP Client initialized with {len(self.user_agents)} User-Agents, timeout {self.timeout}s")

    def get_random_user_agent(self) -> str:
        return random.choice(self.user_agents)

    def _get_headers_for_request(self, additional_headers: Dict[str, str] = None) -> Dict[str, str]:
        headers = {
            'User-Agent': self.get_random_user_agent(),
            'Accept': 'application/json',
            'Accept-Language': 'en-US,en;q=0.5',
        }

        if additional_headers:
            headers.update(additional_headers)

        return headers

    async def get(self, url: str, headers: Dict[str, str] = None, **kwargs) -> httpx.Response:
        """
        Make a GET request.

        Args:
            url: Request URL
            headers: Additional headers
            **kwargs: Additional httpx parameters (``params`` etc.)

        Returns:
            httpx Response object

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses
        """
        request_headers = self._get_headers_for_request(headers)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url, headers=request_headers, **kwargs)
            response.raise_for_status()
            logger.debug(f"Request successful: GET {response.request.url.host}{response.request.url.path}")
            return response

    async def get_json(self, url: str, headers: Dict[str, str] = None, **kwargs) -> Any:
        """GET ``url`` and decode the body as JSON. Malformed bodies raise ValueError."""
        response = await self.get(url, headers=headers, **kwargs)
        return response.json()


# Global HTTP client instance
_http_client: Optional[HTTPClient] = None


def get_http_client(config: Dict = None) -> HTTPClient:
    """
    Get the global HTTP client instance.

    Passing a config replaces the current instance.
    """
    global _http_client

    if _http_client is None or config is not None:
        _http_client = HTTPClient(config)

    return _http_client


def reset_http_client():
    """Reset the global HTTP client instance."""
    global _http_client
    _http_client = None
