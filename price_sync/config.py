"""
Configuration management.
Environment / .env based config for cron or CI runs.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Shopify
    shop_domain: str = ""  # "mystore" or "mystore.myshopify.com"
    shopify_admin_token: str = ""
    shopify_api_version: str = "2025-07"
    shopify_write_concurrency: int = 2
    
    # MercadoLibre
    ml_token: Optional[str] = None
    ml_base_url: str = "https://api.mercadolibre.com"
    ml_rate_limit: int = 40  # requests per period
    ml_rate_period: float = 60.0  # seconds
    retry_rate_limited: bool = False
    
    # Working set
    batch_size: int = 200
    test_sku: str = ""
    full_sync: bool = False
    sku_list_file: str = "sku_list.txt"
    sku_list: str = ""  # comma separated
    
    # Logging
    log_level: str = "INFO"

    def missing_credentials(self) -> List[str]:
        """Names of required variables that are not set."""
        missing = []
        if not self.shop_domain.strip():
            missing.append("SHOP_DOMAIN")
        if not self.shopify_admin_token.strip():
            missing.append("SHOPIFY_ADMIN_TOKEN")
        return missing


# Global settings instance
settings = Settings()
