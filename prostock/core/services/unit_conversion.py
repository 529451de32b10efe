"""
Unit conversion between an item's default (base) unit and its alternates.

Pure functions. Factors are validated when items are ingested, so every
UnitOption reaching this module carries a finite factor greater than zero.
"""

from prostock.core.entities import InventoryItem, UnitOption
from prostock.core.entities.unit import normalize_alt_units, parse_factor
from prostock.core.exceptions import InvalidUnitFactorError, UnitNotFoundError

__all__ = [
    "parse_factor",
    "normalize_alt_units",
    "build_unit_options",
    "find_unit",
    "to_base",
    "from_base",
    "require_factor",
]


def build_unit_options(item: InventoryItem) -> list[UnitOption]:
    """
    List the units an item may be entered in.

    The default unit comes first with factor 1, followed by the item's
    alternate units in declared order.
    """
    options = [UnitOption(name=item.default_unit, factor=1.0, is_default=True)]
    options.extend(item.alt_units)
    return options


def find_unit(options: list[UnitOption], name: str) -> UnitOption:
    """Look up a unit by name (case-insensitive)."""
    key = name.strip().casefold()
    for option in options:
        if option.name.casefold() == key:
            return option
    raise UnitNotFoundError(name, [o.name for o in options])


def require_factor(unit: str, raw: object) -> float:
    """Parse a factor supplied by an operator, raising on bad input."""
    factor = parse_factor(raw)
    if factor is None:
        raise InvalidUnitFactorError(unit, raw)
    return factor


def to_base(quantity: float, unit: UnitOption) -> float:
    """Convert a quantity in `unit` into base units."""
    return quantity * unit.factor


def from_base(base_quantity: float, unit: UnitOption) -> float:
    """Convert a base-unit quantity into `unit`."""
    return base_quantity / unit.factor
