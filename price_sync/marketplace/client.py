"""
MercadoLibre items API client.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from price_sync.models import MarketplaceListing

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base exception for MercadoLibre errors. Also used for unclassified failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MarketplaceRateLimitError(MarketplaceError):
    """Rate limit exceeded (HTTP 429)."""

    def __init__(self, message: str, retry_after: float):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class MarketplaceNotFoundError(MarketplaceError):
    """Item does not exist (HTTP 404)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class MarketplaceForbiddenError(MarketplaceError):
    """Access to the item was denied (HTTP 403)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=403)


def parse_retry_after(value: Optional[str], default: float) -> float:
    """Parse a Retry-After header given in seconds."""
    if value is None:
        return default
    try:
        seconds = float(value.strip())
    except ValueError:
        return default
    if seconds < 0:
        return default
    return seconds


class MercadoLibreClient:
    """
    Async HTTP client for MercadoLibre item lookups.

    One request per call, no retries: retry policy belongs to the caller.
    """

    BASE_URL = "https://api.mercadolibre.com"
    DEFAULT_RETRY_AFTER = 5.0  # seconds

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize MercadoLibre client.

        Args:
            access_token: Optional bearer token
            base_url: API root, defaults to BASE_URL
            transport: Optional httpx transport (used by tests)
        """
        self.access_token = access_token
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {}
            if self.access_token:
                headers["Authorization"] = f"Bearer {self.access_token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(30.0, connect=10.0),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch_item(self, item_id: str) -> MarketplaceListing:
        """
        Fetch a single item by id (the shared SKU).

        Returns:
            The listing; its price may be None

        Raises:
            MarketplaceRateLimitError: On 429, with retry_after in seconds
            MarketplaceNotFoundError: On 404
            MarketplaceForbiddenError: On 403
            MarketplaceError: Any other failure
        """
        client = await self._get_client()
        path = f"/items/{quote(item_id, safe='')}"

        try:
            response = await client.get(path)
        except httpx.RequestError as e:
            raise MarketplaceError(f"ML request error: {e}") from e

        if response.status_code == 429:
            retry_after = parse_retry_after(
                response.headers.get("Retry-After"), self.DEFAULT_RETRY_AFTER
            )
            raise MarketplaceRateLimitError("ML rate limit", retry_after=retry_after)

        if response.status_code == 404:
            raise MarketplaceNotFoundError(f"ML item not found: {item_id}")

        if response.status_code == 403:
            raise MarketplaceForbiddenError(f"ML forbidden: {item_id}")

        if not response.is_success:
            raise MarketplaceError(
                f"ML error {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return MarketplaceListing.model_validate(response.json())
        except ValueError as e:
            raise MarketplaceError(
                f"ML invalid payload for {item_id}: {e}",
                status_code=response.status_code,
            ) from e

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
