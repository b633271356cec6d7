"""
Shopify API module.
"""

from price_sync.shopify.client import (
    ShopifyClient,
    ShopifyClientError,
    ShopifyAuthError,
    ShopifyWriteError,
    normalize_shop_domain,
)
from price_sync.shopify.catalog import CatalogReader

__all__ = [
    "ShopifyClient",
    "ShopifyClientError",
    "ShopifyAuthError",
    "ShopifyWriteError",
    "normalize_shop_domain",
    "CatalogReader",
]
