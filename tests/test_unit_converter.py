"""Tests for package <-> unit conversion."""
from decimal import Decimal

import pytest

from stocktake.services.unit_converter import InvalidArgument, to_packages, to_units


class TestToUnits:
    """Package quantities multiply exactly by the conversion factor."""

    def test_whole_packages(self):
        assert to_units(5, 12) == 60

    def test_fractional_packages_are_not_rounded(self):
        assert to_units(Decimal("2.5"), 12) == Decimal("30.0")

    def test_zero_packages(self):
        assert to_units(0, 24) == 0

    def test_negative_quantity_rejected(self):
        with pytest.raises(InvalidArgument):
            to_units(-1, 12)

    @pytest.mark.parametrize("factor", [0, -3])
    def test_non_positive_factor_rejected(self, factor):
        with pytest.raises(InvalidArgument):
            to_units(5, factor)


class TestToPackages:
    """Unit quantities convert to whole packages, truncating the remainder."""

    def test_exact_division(self):
        assert to_packages(72, 12) == 6

    def test_incomplete_package_is_truncated(self):
        assert to_packages(65, 12) == 5

    def test_less_than_one_package(self):
        assert to_packages(11, 12) == 0

    def test_decimal_units(self):
        assert to_packages(Decimal("47.5"), 24) == 1

    def test_negative_quantity_rejected(self):
        with pytest.raises(InvalidArgument):
            to_packages(-12, 12)

    @pytest.mark.parametrize("factor", [0, -3])
    def test_non_positive_factor_rejected(self, factor):
        with pytest.raises(InvalidArgument):
            to_packages(12, factor)

    def test_invalid_argument_is_value_error(self):
        assert issubclass(InvalidArgument, ValueError)


class TestRoundTrip:
    """Whole package counts survive conversion to units and back."""

    @pytest.mark.parametrize("factor", [1, 7, 12, 24])
    def test_whole_packages_round_trip(self, factor):
        for packages in range(50):
            assert to_packages(to_units(packages, factor), factor) == packages

    @pytest.mark.parametrize("factor", [12, 24])
    def test_decimal_packages_round_trip(self, factor):
        packages = Decimal("37")
        assert to_packages(to_units(packages, factor), factor) == 37
