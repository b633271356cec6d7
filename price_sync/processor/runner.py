"""
Runner that wires clients, queues and the orchestrator for one sync run.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..config import Settings
from ..marketplace import MercadoLibreClient
from ..shopify import CatalogReader, ShopifyClient
from .queues import ConcurrencyQueue, SlidingWindowQueue
from .selector import select_working_set
from .sync import SyncOrchestrator, SyncStats

logger = logging.getLogger(__name__)


async def run_sync(
    config: Settings,
    shopify_transport: Optional[httpx.AsyncBaseTransport] = None,
    marketplace_transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> SyncStats:
    """
    Run one sync with fresh clients and queues.

    Raises:
        ShopifyClientError: If the catalog cannot be read
    """
    plan = select_working_set(config)
    logger.info(f"Working set: {plan}")

    marketplace_queue = SlidingWindowQueue(
        max_calls=config.ml_rate_limit,
        period=config.ml_rate_period,
        name="mercadolibre",
        sleep=sleep,
    )
    shopify_queue = ConcurrencyQueue(
        config.shopify_write_concurrency, name="shopify-writes"
    )

    async with ShopifyClient(
        config.shop_domain,
        config.shopify_admin_token,
        api_version=config.shopify_api_version,
        transport=shopify_transport,
    ) as shopify, MercadoLibreClient(
        access_token=config.ml_token,
        base_url=config.ml_base_url,
        transport=marketplace_transport,
    ) as marketplace:
        orchestrator = SyncOrchestrator(
            catalog=CatalogReader(shopify),
            marketplace=marketplace,
            shopify=shopify,
            marketplace_queue=marketplace_queue,
            shopify_queue=shopify_queue,
            retry_rate_limited=config.retry_rate_limited,
            sleep=sleep,
        )
        return await orchestrator.run(plan)
