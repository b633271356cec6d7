"""
MercadoLibre API module.
"""

from price_sync.marketplace.client import (
    MercadoLibreClient,
    MarketplaceError,
    MarketplaceRateLimitError,
    MarketplaceNotFoundError,
    MarketplaceForbiddenError,
)

__all__ = [
    "MercadoLibreClient",
    "MarketplaceError",
    "MarketplaceRateLimitError",
    "MarketplaceNotFoundError",
    "MarketplaceForbiddenError",
]
