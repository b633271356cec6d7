"""
ML -> Shopify Price Sync - command line entry point.
"""

import asyncio
import logging
import sys
from typing import Optional

from .config import Settings, settings
from .processor import run_sync
from .shopify import ShopifyClientError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def main(config: Optional[Settings] = None) -> int:
    """Run one sync. Returns the process exit code."""
    if config is None:
        config = settings
    configure_logging(config.log_level)

    missing = config.missing_credentials()
    if missing:
        logger.error(f"Missing {' or '.join(missing)} in env. Aborting.")
        return 1

    logger.info("Starting sync...")
    try:
        asyncio.run(run_sync(config))
    except ShopifyClientError as e:
        logger.error(f"Fatal: catalog read failed: {e}")
        return 1
    except Exception:
        logger.exception("Fatal")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
