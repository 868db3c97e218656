"""Vehicle line items.

A vehicle has no identity beyond its position on an invoice. The list is a
tuple; editing helpers return a new tuple and never mutate their input.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from core.totals import MAX_PRICE, coerce_price, parse_price


def _price_before(value: Any) -> Any:
    """Blank or non-numeric prices become zero; out-of-range ones are left for the bounds to reject."""
    price = parse_price(value)
    if price is not None and (price < 0 or price > MAX_PRICE):
        return price
    return coerce_price(value)


Price = Annotated[Decimal, BeforeValidator(_price_before), Field(ge=0, le=MAX_PRICE)]


class Vehicle(BaseModel):
    """A vehicle sold on an invoice."""

    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: str = Field(..., min_length=1, max_length=10)
    vin: str = Field(..., min_length=1, max_length=50)
    color: str = Field("", max_length=50)
    mileage: str = Field("", max_length=50)
    price: Price = Decimal("0")

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    @property
    def price_cents(self) -> int:
        return int(self.price * 100)


def add_vehicle(vehicles: tuple[Vehicle, ...], vehicle: Vehicle) -> tuple[Vehicle, ...]:
    """Append a vehicle, returning a new tuple."""
    return (*vehicles, vehicle)


def replace_vehicle(vehicles: tuple[Vehicle, ...], index: int, **changes: Any) -> tuple[Vehicle, ...]:
    """
    Replace fields on the vehicle at index, returning a new tuple.

    Changes are re-validated, so a blank price becomes zero exactly as on
    creation.

    Raises:
        IndexError: If index is out of range
        pydantic.ValidationError: If a changed field is invalid
    """
    if not -len(vehicles) <= index < len(vehicles):
        raise IndexError(f"Vehicle index {index} out of range")

    current = vehicles[index]
    updated = Vehicle.model_validate({**current.model_dump(), **changes})

    result = list(vehicles)
    result[index] = updated
    return tuple(result)


def remove_vehicle(vehicles: tuple[Vehicle, ...], index: int) -> tuple[Vehicle, ...]:
    """
    Remove the vehicle at index, returning a new tuple.

    Raises:
        IndexError: If index is out of range
    """
    if not -len(vehicles) <= index < len(vehicles):
        raise IndexError(f"Vehicle index {index} out of range")

    result = list(vehicles)
    del result[index]
    return tuple(result)
