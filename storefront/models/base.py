"""Shared model configuration"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

PRICE_QUANTUM = Decimal("0.01")


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def normalize_price(value) -> str:
    """Parse a price and return it as an exact two-place decimal string."""
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"Invalid price: {value!r}")
        # Raises InvalidOperation when the result exceeds the context precision
        return str(amount.quantize(PRICE_QUANTUM))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid price: {value!r}")


def normalize_optional_price(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return normalize_price(value)
