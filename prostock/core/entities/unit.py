"""Measurement unit value object and ingestion-time factor validation."""

import math
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prostock.config import get_logger

logger = get_logger(__name__)


class UnitOption(BaseModel):
    """A unit an item can be counted in, with its multiplier into the base unit."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(min_length=1)
    factor: float = Field(gt=0, allow_inf_nan=False)
    is_default: bool = False


def parse_factor(raw: Any) -> float | None:
    """
    Parse a conversion factor coming from the backend.

    Returns None for anything that is not a finite number greater than zero.
    Numeric strings are accepted; booleans are not.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def normalize_alt_units(
    pairs: Iterable[tuple[Any, Any]],
    default_unit: str,
) -> list[UnitOption]:
    """
    Build the validated alternate unit list for an item.

    Keeps declared order. A pair is dropped when its name is blank, its
    factor is malformed, or its name repeats the default unit or an earlier
    alternate.
    """
    seen = {default_unit.strip().casefold()} if default_unit else set()
    units: list[UnitOption] = []

    for raw_name, raw_factor in pairs:
        name = str(raw_name).strip() if raw_name is not None else ""
        if not name:
            continue

        factor = parse_factor(raw_factor)
        if factor is None:
            logger.warning("alt_unit_rejected", unit=name, factor=raw_factor, reason="bad_factor")
            continue

        key = name.casefold()
        if key in seen:
            logger.warning("alt_unit_rejected", unit=name, reason="duplicate_name")
            continue

        seen.add(key)
        units.append(UnitOption(name=name, factor=factor, is_default=False))

    return units
