"""
Shopify REST Admin API client.
"""

import logging
from typing import Any, Dict, Optional, Union

import httpx

logger = logging.getLogger(__name__)


class ShopifyClientError(Exception):
    """Base exception for Shopify client errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ShopifyAuthError(ShopifyClientError):
    """Authentication error."""
    pass


class ShopifyWriteError(ShopifyClientError):
    """A write (PUT) was rejected or could not be sent."""
    pass


def normalize_shop_domain(shop_domain: str) -> str:
    """
    Turn "mystore", "mystore.myshopify.com" or "https://mystore.myshopify.com/"
    into "mystore.myshopify.com".
    """
    domain = shop_domain.strip()
    if domain.startswith("https://"):
        domain = domain[8:]
    elif domain.startswith("http://"):
        domain = domain[7:]
    domain = domain.rstrip("/")
    if "." not in domain:
        domain = f"{domain}.myshopify.com"
    return domain


class ShopifyClient:
    """
    Async HTTP client for the Shopify REST Admin API.

    Reads and writes are single attempts: read failures are fatal for a
    sync run and write failures are handled per variant by the caller.
    """

    API_VERSION = "2025-07"

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Shopify client.

        Args:
            shop_domain: Store name or domain (e.g., "mystore.myshopify.com")
            access_token: Admin API access token
            api_version: REST API version, defaults to API_VERSION
            transport: Optional httpx transport (used by tests)
        """
        domain = normalize_shop_domain(shop_domain)

        self.shop_domain = domain
        self.access_token = access_token
        self.api_version = api_version or self.API_VERSION
        self.base_url = f"https://{domain}/admin/api/{self.api_version}"

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(60.0, connect=10.0),
                headers={
                    "Content-Type": "application/json",
                    "X-Shopify-Access-Token": self.access_token,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        GET a REST resource.

        Args:
            path: Path relative to the versioned API root (e.g. "/products.json")
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            ShopifyAuthError: If authentication fails
            ShopifyClientError: For any other non-success response
        """
        client = await self._get_client()

        try:
            response = await client.get(path, params=params)
        except httpx.RequestError as e:
            raise ShopifyClientError(f"Shopify GET {path} request error: {e}") from e

        if response.status_code == 401:
            raise ShopifyAuthError(
                f"Authentication failed for {self.shop_domain}",
                status_code=401,
                body=response.text,
            )

        if not response.is_success:
            raise ShopifyClientError(
                f"Shopify GET {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return response.json()

    async def put(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        PUT a JSON body to a REST resource.

        Raises:
            ShopifyWriteError: For any non-success response or transport error
        """
        client = await self._get_client()

        try:
            response = await client.put(path, json=body)
        except httpx.RequestError as e:
            raise ShopifyWriteError(f"Shopify PUT {path} request error: {e}") from e

        if not response.is_success:
            raise ShopifyWriteError(
                f"Shopify PUT {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return response.json()

    async def update_variant_price(
        self,
        variant_id: Union[int, str],
        price: str,
    ) -> Dict[str, Any]:
        """
        Update the price of a single variant.

        Args:
            variant_id: Shopify variant id
            price: New price, already serialized as a string
        """
        body = {"variant": {"id": variant_id, "price": price}}
        return await self.put(f"/variants/{variant_id}.json", body)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
