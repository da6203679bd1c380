"""
Unit Registry and Length Conversion for Traverse Reconstruction.

This module provides a centralized unit system using the `pint` library.
Survey records state their distances in feet (occasionally in other
surveyor's units); every projection on the sphere works in meters. All
conversions between the two go through this module.

Example Usage
-------------
>>> from common.units import Q_
>>> Q_(100, 'foot').to('meter')
<Quantity(30.48, 'meter')>
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


class UnitRegistry:
    """Wrapper around pint UnitRegistry with land-survey extensions.

    Attributes
    ----------
    registry : pint.UnitRegistry
        The underlying pint unit registry.

    Examples
    --------
    >>> units = UnitRegistry()
    >>> units.quantity(1, 'vara').to('foot')
    <Quantity(2.77777778, 'foot')>
    """

    def __init__(self):
        """Initialize the unit registry with survey units."""
        self._registry = ureg
        self._setup_survey_units()

    def _setup_survey_units(self) -> None:
        """Define length units found in older legal descriptions."""
        try:
            # Texas / Spanish vara
            self._registry.define("vara = 100 / 3 * inch")
        except pint.errors.RedefinitionError:
            # Units already defined, skip
            pass

    @property
    def registry(self) -> PintUnitRegistry:
        """Access the underlying pint registry."""
        return self._registry

    def quantity(self, value: float, unit: str) -> pint.Quantity:
        """Create a quantity with units.

        Parameters
        ----------
        value : float
            The numerical value.
        unit : str
            The unit string (e.g., 'foot', 'survey_foot', 'chain').

        Returns
        -------
        pint.Quantity
            A quantity object with associated units.
        """
        return self._registry.Quantity(value, unit)

    def validate_dimensionality(
        self,
        quantity: pint.Quantity,
        expected_dim: str
    ) -> bool:
        """Check if a quantity has the expected dimensionality.

        Parameters
        ----------
        quantity : pint.Quantity
            The quantity to check.
        expected_dim : str
            The expected dimensionality (e.g., '[length]').

        Returns
        -------
        bool
            True if dimensionality matches.

        Raises
        ------
        pint.DimensionalityError
            If dimensionality does not match.
        """
        expected = self._registry.get_dimensionality(expected_dim)
        if quantity.dimensionality != expected:
            raise pint.DimensionalityError(
                quantity.units,
                expected,
                quantity.dimensionality,
                expected
            )
        return True


_units = UnitRegistry()


def length_to_meters(value: Union[float, str], unit: str = "foot") -> float:
    """Convert a length stated in `unit` to meters.

    Parameters
    ----------
    value : float or str
        The length. Strings are accepted because record fields arrive as
        text from the record file.
    unit : str
        Any pint length unit.

    Returns
    -------
    float
        Length in meters.

    Raises
    ------
    pint.DimensionalityError
        If `unit` is not a length unit.
    """
    quantity = _units.quantity(float(value), unit)
    _units.validate_dimensionality(quantity, "[length]")
    return float(quantity.to("meter").magnitude)


def feet_to_meters(feet: Union[float, str]) -> float:
    """Convert international feet to meters."""
    return length_to_meters(feet, "foot")
