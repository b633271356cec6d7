"""
Cursor-paginated reads of the Shopify product catalog.
"""

import logging
from contextlib import aclosing
from typing import AsyncIterator, List, Optional, Tuple, Union

from price_sync.models import CatalogEntry, Product
from price_sync.shopify.client import ShopifyClient

logger = logging.getLogger(__name__)


Cursor = Union[int, str]


class CatalogReader:
    """
    Reads products page by page using since_id pagination and flattens
    them into one CatalogEntry per variant.
    """

    PAGE_SIZE = 250  # Shopify REST maximum

    def __init__(self, client: ShopifyClient, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    async def fetch_page(
        self, since_id: Cursor = 0
    ) -> Tuple[List[CatalogEntry], Optional[Cursor]]:
        """
        Fetch one page of products.

        Args:
            since_id: Id of the last product seen, 0 for the first page

        Returns:
            (entries, next cursor), the cursor is None when the catalog is exhausted

        Raises:
            ShopifyClientError: On any read failure (never retried)
        """
        data = await self.client.get(
            "/products.json",
            params={"limit": self.page_size, "since_id": since_id},
        )
        products = [Product.model_validate(p) for p in data.get("products") or []]

        entries = [
            CatalogEntry(product=product, variant=variant)
            for product in products
            for variant in product.variants
        ]

        if not products or len(products) < self.page_size:
            return entries, None
        return entries, products[-1].id

    async def iter_pages(self) -> AsyncIterator[List[CatalogEntry]]:
        """Yield the entries of each page until the catalog is exhausted."""
        cursor: Optional[Cursor] = 0
        while cursor is not None:
            entries, cursor = await self.fetch_page(cursor)
            yield entries

    async def list_variants(self, limit: int = 0) -> List[CatalogEntry]:
        """
        Collect catalog entries in catalog order.

        Args:
            limit: Maximum number of entries, 0 for the whole catalog
        """
        results: List[CatalogEntry] = []
        pages = 0

        async with aclosing(self.iter_pages()) as page_iter:
            async for entries in page_iter:
                pages += 1
                for entry in entries:
                    results.append(entry)
                    if limit > 0 and len(results) >= limit:
                        break
                if limit > 0 and len(results) >= limit:
                    break

        logger.debug(f"Read {len(results)} variants from {pages} page(s)")
        return results

    async def find_variants_by_sku(self, sku: str) -> List[CatalogEntry]:
        """
        Scan the whole catalog for variants whose SKU matches exactly
        (case-sensitive, surrounding whitespace ignored).
        """
        target = sku.strip()
        matches: List[CatalogEntry] = []

        async for entries in self.iter_pages():
            matches.extend(e for e in entries if e.variant.clean_sku == target)

        return matches
