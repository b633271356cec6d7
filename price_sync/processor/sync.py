"""
Sync processor: MercadoLibre price -> Shopify variant price.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable

from ..marketplace import (
    MercadoLibreClient,
    MarketplaceError,
    MarketplaceForbiddenError,
    MarketplaceNotFoundError,
    MarketplaceRateLimitError,
)
from ..models import CatalogEntry, MarketplaceListing
from ..shopify import CatalogReader, ShopifyClient, ShopifyWriteError
from .queues import ConcurrencyQueue, SlidingWindowQueue
from .rules import format_price, should_update_price
from .selector import BoundedScan, ExplicitSkus, FullScan, WorkingSetPlan

logger = logging.getLogger(__name__)


class EntryOutcome(str, Enum):
    """Terminal state of one catalog entry."""
    SKIPPED = "skipped"
    NO_PRICE = "no_price"
    UNCHANGED = "unchanged"
    WRITTEN = "written"
    WRITE_FAILED = "write_failed"
    RATE_LIMITED = "rate_limited"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    ERROR = "error"


@dataclass
class SyncStats:
    """Per-outcome counts for one run."""
    outcomes: Counter = field(default_factory=Counter)
    unresolved_skus: int = 0

    def record(self, outcome: EntryOutcome) -> None:
        self.outcomes[outcome] += 1

    def count(self, outcome: EntryOutcome) -> int:
        return self.outcomes[outcome]

    @property
    def entries_processed(self) -> int:
        return sum(self.outcomes.values())

    def summary(self) -> str:
        parts = [f"{o.value}={self.outcomes[o]}" for o in EntryOutcome if self.outcomes[o]]
        if self.unresolved_skus:
            parts.append(f"unresolved_skus={self.unresolved_skus}")
        return ", ".join(parts) or "nothing processed"


class SyncOrchestrator:
    """
    Drives catalog entries through fetch -> detect -> write.

    Failures are isolated per entry; only catalog read errors escape run().
    """

    def __init__(
        self,
        catalog: CatalogReader,
        marketplace: MercadoLibreClient,
        shopify: ShopifyClient,
        marketplace_queue: SlidingWindowQueue,
        shopify_queue: ConcurrencyQueue,
        retry_rate_limited: bool = False,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            catalog: Shopify catalog reader
            marketplace: MercadoLibre client
            shopify: Shopify client used for price writes
            marketplace_queue: Admission gate for marketplace fetches
            shopify_queue: Admission gate for Shopify writes
            retry_rate_limited: Re-fetch once after a rate-limit wait
                instead of dropping the entry for this run
            sleep: Sleep function for rate-limit waits
        """
        self.catalog = catalog
        self.marketplace = marketplace
        self.shopify = shopify
        self.marketplace_queue = marketplace_queue
        self.shopify_queue = shopify_queue
        self.retry_rate_limited = retry_rate_limited
        self._sleep = sleep

    async def run(self, plan: WorkingSetPlan) -> SyncStats:
        """
        Process a working set and wait for both queues to drain.

        Raises:
            ShopifyClientError: If the catalog cannot be read
        """
        stats = SyncStats()

        if isinstance(plan, ExplicitSkus):
            logger.info(f"Processing SKU list with {len(plan.skus)} items")
            for sku in plan.skus:
                logger.info(f"Processing SKU: {sku}")
                matches = await self.catalog.find_variants_by_sku(sku)
                if not matches:
                    logger.warning(f"No variants found with SKU: {sku}")
                    stats.unresolved_skus += 1
                    continue
                await self._process_all(matches, stats)
        elif isinstance(plan, (FullScan, BoundedScan)):
            batch = await self.catalog.list_variants(plan.limit)
            logger.info(f"Processing batch size {len(batch)}")
            await self._process_all(batch, stats)
        else:
            raise TypeError(f"Unknown working set plan: {plan!r}")

        await self.marketplace_queue.on_idle()
        await self.shopify_queue.on_idle()

        logger.info(f"Sync finished: {stats.summary()}")
        return stats

    async def _process_all(self, entries: Iterable[CatalogEntry], stats: SyncStats) -> None:
        for entry in entries:
            stats.record(await self.process_entry(entry))

    async def process_entry(self, entry: CatalogEntry) -> EntryOutcome:
        """Fetch, compare and, if needed, write one variant. Never raises."""
        variant = entry.variant
        sku = variant.clean_sku
        if not sku:
            return EntryOutcome.SKIPPED

        attempts = 2 if self.retry_rate_limited else 1

        for attempt in range(attempts):
            try:
                listing = await self.marketplace_queue.add(
                    self.marketplace.fetch_item, sku
                )
            except MarketplaceRateLimitError as e:
                logger.warning(
                    f"ML 429 for sku {sku} - waiting {e.retry_after:.1f}s "
                    f"(attempt {attempt + 1}/{attempts})"
                )
                await self._sleep(e.retry_after)
                continue
            except MarketplaceNotFoundError:
                logger.warning(f"ML item not found for sku {sku}")
                return EntryOutcome.NOT_FOUND
            except MarketplaceForbiddenError:
                logger.warning(f"ML forbidden for sku {sku}")
                return EntryOutcome.FORBIDDEN
            except MarketplaceError as e:
                logger.error(f"Error processing sku {sku}: {e}")
                return EntryOutcome.ERROR
            except Exception:
                logger.exception(f"Unexpected error processing sku {sku}")
                return EntryOutcome.ERROR

            return await self._apply_listing(entry, listing)

        return EntryOutcome.RATE_LIMITED

    async def _apply_listing(
        self, entry: CatalogEntry, listing: MarketplaceListing
    ) -> EntryOutcome:
        variant = entry.variant
        sku = variant.clean_sku

        if listing.price is None:
            logger.info(f"No ML price for variant {variant.id} sku {sku}")
            return EntryOutcome.NO_PRICE

        if not should_update_price(variant.price, listing.price):
            logger.info(f"No change for variant {variant.id} sku {sku}")
            return EntryOutcome.UNCHANGED

        new_price = format_price(listing.price)
        return await self.shopify_queue.add(self._write_price, entry, new_price)

    async def _write_price(self, entry: CatalogEntry, new_price: str) -> EntryOutcome:
        variant = entry.variant
        sku = variant.clean_sku
        try:
            await self.shopify.update_variant_price(variant.id, new_price)
        except ShopifyWriteError as e:
            logger.error(f"Shopify update error for variant {variant.id}: {e}")
            return EntryOutcome.WRITE_FAILED
        except Exception:
            logger.exception(f"Unexpected error updating variant {variant.id}")
            return EntryOutcome.WRITE_FAILED

        logger.info(
            f"Updated variant {variant.id} sku {sku}: {variant.price} -> {new_price}"
        )
        return EntryOutcome.WRITTEN
