"""
Pydantic models for Shopify catalog and MercadoLibre item payloads.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Variant(BaseModel):
    """A Shopify product variant (REST representation)."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Union[int, str]
    sku: Optional[str] = None
    price: Optional[str] = None  # e.g. "29.99"

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_string(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def clean_sku(self) -> str:
        return (self.sku or "").strip()


class Product(BaseModel):
    """A Shopify product with its variants."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Union[int, str]
    title: Optional[str] = None
    variants: List[Variant] = Field(default_factory=list)


class CatalogEntry(BaseModel):
    """One (product, variant) pair produced by the catalog reader."""
    model_config = ConfigDict(frozen=True)

    product: Product
    variant: Variant


class MarketplaceListing(BaseModel):
    """A MercadoLibre item. Only the price matters for sync."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: Optional[str] = None
    price: Optional[Union[float, str]] = None
    currency_id: Optional[str] = None
