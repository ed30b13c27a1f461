"""
Package <-> unit conversion.

A product's conversion_factor is the number of stock-keeping units in one
packaging unit. Counts are entered in packages and stored in both forms.
"""
import math
from decimal import Decimal
from typing import Union

Number = Union[int, float, Decimal]


class InvalidArgument(ValueError):
    """Raised when a quantity is negative or a conversion factor is not positive."""
    pass


def _check_factor(conversion_factor: Number) -> None:
    if conversion_factor <= 0:
        raise InvalidArgument("Conversion factor must be greater than zero")


def to_units(package_quantity: Number, conversion_factor: Number) -> Number:
    """
    Convert a package quantity into units.

    Exact multiplication, no rounding: 2.5 packages at factor 12 is 30 units.
    """
    if package_quantity < 0:
        raise InvalidArgument("Package quantity cannot be negative")
    _check_factor(conversion_factor)
    return package_quantity * conversion_factor


def to_packages(unit_quantity: Number, conversion_factor: Number) -> int:
    """
    Convert a unit quantity into whole packages.

    Incomplete packages are truncated: 65 units at factor 12 is 5 packages.
    """
    if unit_quantity < 0:
        raise InvalidArgument("Unit quantity cannot be negative")
    _check_factor(conversion_factor)
    return math.floor(unit_quantity / conversion_factor)
