"""
Shared fixtures.
"""

import pytest

from price_sync.config import Settings
from tests.fakes import FakeSleep


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def make_settings(tmp_path):
    """Build Settings isolated from the process environment and cwd."""

    def _make(**overrides) -> Settings:
        values = dict(
            shop_domain="mystore",
            shopify_admin_token="shpat_test",
            ml_token=None,
            batch_size=200,
            test_sku="",
            full_sync=False,
            sku_list="",
            sku_list_file=str(tmp_path / "sku_list.txt"),
            retry_rate_limited=False,
            ml_rate_limit=1000,
            ml_rate_period=60.0,
            shopify_write_concurrency=2,
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make
