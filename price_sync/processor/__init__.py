"""
Processor package for sync operations.
"""

from .rules import (
    should_update_price,
    relative_difference,
    parse_price,
    format_price,
    PRICE_CHANGE_THRESHOLD,
)
from .queues import WorkQueue, SlidingWindowQueue, ConcurrencyQueue
from .selector import (
    FullScan,
    ExplicitSkus,
    BoundedScan,
    WorkingSetPlan,
    select_working_set,
    read_sku_list_file,
    parse_sku_list,
)
from .sync import SyncOrchestrator, SyncStats, EntryOutcome
from .runner import run_sync

__all__ = [
    "should_update_price",
    "relative_difference",
    "parse_price",
    "format_price",
    "PRICE_CHANGE_THRESHOLD",
    "WorkQueue",
    "SlidingWindowQueue",
    "ConcurrencyQueue",
    "FullScan",
    "ExplicitSkus",
    "BoundedScan",
    "WorkingSetPlan",
    "select_working_set",
    "read_sku_list_file",
    "parse_sku_list",
    "SyncOrchestrator",
    "SyncStats",
    "EntryOutcome",
    "run_sync",
]
