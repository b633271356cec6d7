"""
Working set selection: which catalog entries a run processes, and in what order.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FullScan:
    """Scan the entire catalog."""
    limit: int = 0


@dataclass(frozen=True)
class ExplicitSkus:
    """Resolve and process these SKUs, in order."""
    skus: Tuple[str, ...]


@dataclass(frozen=True)
class BoundedScan:
    """Scan the first `limit` variants of the catalog (0 = all)."""
    limit: int


WorkingSetPlan = Union[FullScan, ExplicitSkus, BoundedScan]


def read_sku_list_file(path: str) -> List[str]:
    """
    Read one SKU per line. Blank lines and lines starting with '#' are ignored.

    Returns an empty list if the file does not exist.
    """
    if not os.path.exists(path):
        return []

    with open(path, encoding="utf-8") as f:
        raw = f.read()

    skus = [line.strip() for line in raw.splitlines()]
    return [s for s in skus if s and not s.startswith("#")]


def parse_sku_list(raw: str) -> List[str]:
    """Split a comma separated SKU list."""
    return [s.strip() for s in raw.split(",") if s.strip()]


def prioritize(skus: List[str], priority_sku: str) -> List[str]:
    """Move priority_sku to the front, removing any other occurrence."""
    if not priority_sku:
        return list(skus)
    return [priority_sku] + [s for s in skus if s != priority_sku]


def select_working_set(config: Settings) -> WorkingSetPlan:
    """
    Decide what this run processes.

    Precedence: FULL_SYNC > SKU list file > SKU_LIST > bounded batch scan.
    The two list sources are never merged. TEST_SKU, when set, is processed
    first and only once.
    """
    if config.full_sync:
        logger.info("FULL_SYNC=true - processing entire catalog")
        return FullScan(limit=0)

    sku_list = read_sku_list_file(config.sku_list_file)
    if sku_list:
        logger.info(
            f"Detected {config.sku_list_file} with {len(sku_list)} SKUs - "
            "processing ONLY these SKUs"
        )
    else:
        sku_list = parse_sku_list(config.sku_list)
        if sku_list:
            logger.info(f"Detected SKU_LIST with {len(sku_list)} SKUs - processing these")

    priority_sku = config.test_sku.strip()
    sku_list = prioritize(sku_list, priority_sku)

    if sku_list:
        return ExplicitSkus(skus=tuple(sku_list))

    return BoundedScan(limit=config.batch_size)
