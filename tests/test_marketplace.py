"""
Tests for the MercadoLibre client.
"""

import pytest

from price_sync.marketplace import (
    MarketplaceError,
    MarketplaceForbiddenError,
    MarketplaceNotFoundError,
    MarketplaceRateLimitError,
    MercadoLibreClient,
)
from price_sync.marketplace.client import parse_retry_after
from tests.fakes import FakeMarketplace


def _client(fake: FakeMarketplace, token=None) -> MercadoLibreClient:
    return MercadoLibreClient(access_token=token, transport=fake.transport)


class TestFetchItem:
    """Tests for MercadoLibreClient.fetch_item."""

    @pytest.mark.asyncio
    async def test_returns_price(self):
        fake = FakeMarketplace({"MLA1": {"id": "MLA1", "price": 105.0, "currency_id": "ARS"}})
        async with _client(fake) as client:
            listing = await client.fetch_item("MLA1")

        assert listing.price == 105.0
        assert listing.currency_id == "ARS"

    @pytest.mark.asyncio
    async def test_missing_price_is_none(self):
        fake = FakeMarketplace({"MLA1": {"id": "MLA1", "price": None}})
        async with _client(fake) as client:
            listing = await client.fetch_item("MLA1")

        assert listing.price is None

    @pytest.mark.asyncio
    async def test_bearer_token_only_when_configured(self):
        fake = FakeMarketplace({"MLA1": {"price": 1}})
        async with _client(fake) as client:
            await client.fetch_item("MLA1")
        async with _client(fake, token="APP_USR-1") as client:
            await client.fetch_item("MLA1")

        assert fake.auth_headers == [None, "Bearer APP_USR-1"]

    @pytest.mark.asyncio
    async def test_rate_limited_with_retry_after(self):
        fake = FakeMarketplace({"MLA1": (429, {"Retry-After": "3"})})
        async with _client(fake) as client:
            with pytest.raises(MarketplaceRateLimitError) as exc_info:
                await client.fetch_item("MLA1")

        assert exc_info.value.retry_after == 3.0
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_rate_limited_defaults_to_five_seconds(self):
        fake = FakeMarketplace({"MLA1": 429})
        async with _client(fake) as client:
            with pytest.raises(MarketplaceRateLimitError) as exc_info:
                await client.fetch_item("MLA1")

        assert exc_info.value.retry_after == 5.0

    @pytest.mark.asyncio
    async def test_not_found(self):
        fake = FakeMarketplace()
        async with _client(fake) as client:
            with pytest.raises(MarketplaceNotFoundError):
                await client.fetch_item("GHOST")

    @pytest.mark.asyncio
    async def test_forbidden(self):
        fake = FakeMarketplace({"MLA1": 403})
        async with _client(fake) as client:
            with pytest.raises(MarketplaceForbiddenError):
                await client.fetch_item("MLA1")

    @pytest.mark.asyncio
    async def test_other_status_is_generic_error(self):
        fake = FakeMarketplace({"MLA1": 500})
        async with _client(fake) as client:
            with pytest.raises(MarketplaceError) as exc_info:
                await client.fetch_item("MLA1")

        assert type(exc_info.value) is MarketplaceError
        assert exc_info.value.status_code == 500


class TestParseRetryAfter:
    """Tests for parse_retry_after function."""

    def test_seconds(self):
        assert parse_retry_after("3", 5.0) == 3.0

    def test_absent(self):
        assert parse_retry_after(None, 5.0) == 5.0

    def test_http_date_falls_back_to_default(self):
        assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT", 5.0) == 5.0
