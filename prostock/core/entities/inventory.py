"""Inventory domain entities."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from prostock.core.entities.unit import UnitOption, normalize_alt_units

# The backend sheet holds at most three alternate units per item
MAX_ALT_UNITS = 3


class ItemStatus(str, Enum):
    """Whether an item can be transacted."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


def _blank_to_zero(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return value


class InventoryItem(BaseModel):
    """One stock-keeping unit as cached from the backend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    sku: str = ""
    name: str
    category: str = ""
    stock: float = 0.0  # base unit
    min_stock: float = 0.0
    price: float = 0.0
    default_unit: str = "Pcs"
    initial_stock: float = 0.0
    status: ItemStatus = ItemStatus.ACTIVE
    alt_units: list[UnitOption] = Field(default_factory=list, max_length=MAX_ALT_UNITS)

    @field_validator("id", "sku", "name", "category", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        # Sheet-backed ids and SKUs frequently arrive as numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v)) if float(v).is_integer() else str(v)
        return "" if v is None else v

    @field_validator("stock", "min_stock", "price", "initial_stock", mode="before")
    @classmethod
    def _coerce_numbers(cls, v: Any) -> Any:
        return _blank_to_zero(v)

    @field_validator("default_unit", mode="before")
    @classmethod
    def _default_unit(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "Pcs"
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="before")
    @classmethod
    def _collect_alt_units(cls, data: Any) -> Any:
        """Fold the altUnitN/convN wire pairs into one validated list."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        default_unit = str(data.get("defaultUnit") or data.get("default_unit") or "Pcs")

        listed = data.pop("altUnits", None)
        if listed is None:
            listed = data.pop("alt_units", None)

        if listed is not None:
            pairs = [
                (u.name, u.factor) if isinstance(u, UnitOption) else (u.get("name"), u.get("factor"))
                for u in listed
                if isinstance(u, (UnitOption, dict))
            ]
        else:
            pairs = [
                (data.pop(f"altUnit{n}", None), data.pop(f"conv{n}", None))
                for n in range(1, MAX_ALT_UNITS + 1)
            ]

        data["altUnits"] = normalize_alt_units(pairs, default_unit)[:MAX_ALT_UNITS]
        return data

    @property
    def is_active(self) -> bool:
        return self.status == ItemStatus.ACTIVE

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    def to_payload(self) -> dict[str, Any]:
        """Serialize in the backend's flat sheet layout."""
        payload = self.model_dump(by_alias=True, mode="json", exclude={"alt_units"})
        for n in range(1, MAX_ALT_UNITS + 1):
            unit = self.alt_units[n - 1] if n <= len(self.alt_units) else None
            payload[f"altUnit{n}"] = unit.name if unit else ""
            payload[f"conv{n}"] = unit.factor if unit else ""
        return payload


class Supplier(BaseModel):
    """Vendor master record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    name: str
    contact_person: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""

    @field_validator("id", "phone", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v)) if float(v).is_integer() else str(v)
        return "" if v is None else v
