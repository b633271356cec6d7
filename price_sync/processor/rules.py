"""
Business rules for deciding when a storefront price follows the marketplace.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union


# Rule constants
PRICE_CHANGE_THRESHOLD = Decimal("0.01")  # 1% relative difference
MIN_DENOMINATOR = Decimal("1")

PriceValue = Union[str, int, float, Decimal, None]


def parse_price(value: PriceValue) -> Optional[Decimal]:
    """
    Parse a price into a finite Decimal.

    Returns:
        The Decimal, or None when the value is missing or not a number
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None

    if not price.is_finite():
        return None
    return price


def relative_difference(storefront_price: Decimal, marketplace_price: Decimal) -> Decimal:
    """
    |marketplace - storefront| / max(storefront, 1).

    Storefront prices below 1 (including zero) are measured against 1.
    """
    denominator = max(storefront_price, MIN_DENOMINATOR)
    return abs(marketplace_price - storefront_price) / denominator


def should_update_price(
    storefront_price: PriceValue,
    marketplace_price: PriceValue,
) -> bool:
    """
    Determine if a variant price must be rewritten.
    
    Args:
        storefront_price: Current Shopify price (e.g., "100.00")
        marketplace_price: MercadoLibre price (e.g., 105.0)
        
    Returns:
        True if the relative difference exceeds PRICE_CHANGE_THRESHOLD,
        False otherwise or if either price cannot be parsed
    """
    current = parse_price(storefront_price)
    target = parse_price(marketplace_price)

    if current is None or target is None:
        return False

    return relative_difference(current, target) > PRICE_CHANGE_THRESHOLD


def format_price(value: Union[str, int, float, Decimal]) -> str:
    """
    Serialize a marketplace price for the Shopify write.

    Integral floats drop the fractional part (105.0 -> "105"), other
    numbers keep their shortest representation (105.5 -> "105.5").
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
