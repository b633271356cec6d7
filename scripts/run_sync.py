#!/usr/bin/env python3
"""
Cron job script to run one MercadoLibre -> Shopify price sync.
Add to crontab: 0 */6 * * * cd /path/to/app && /path/to/venv/bin/python scripts/run_sync.py

Reads SHOP_DOMAIN, SHOPIFY_ADMIN_TOKEN, ML_TOKEN, etc. from the environment or .env.
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from price_sync.main import main


if __name__ == "__main__":
    sys.exit(main())
