"""Transaction domain entities: cart lines, submitted documents and ledger rows."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TransactionType(str, Enum):
    """Kinds of stock movement."""

    IN = "IN"
    OUT = "OUT"
    OPNAME = "OPNAME"


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse backend timestamps into naive UTC datetimes.

    Accepts datetimes, dates, ISO strings (with or without a trailing Z)
    and epoch milliseconds.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class TransactionItem(BaseModel):
    """One cart line: a quantity in a chosen unit plus its base-unit equivalent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    item_id: str
    item_name: str
    quantity: float  # in `unit`
    unit: str
    converted_quantity: float  # in the item's base unit
    remarks: str = ""


class OpnameItem(TransactionItem):
    """Physical count line. Positive difference means the shelf is short."""

    system_stock: float
    physical_stock: float
    difference: float


class Transaction(BaseModel):
    """A single historical movement of one item."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    item_id: str = ""
    item_name: str = ""
    type: TransactionType
    quantity: float = 0.0
    difference: float | None = None  # signed, opname only
    timestamp: datetime | None = None
    user: str = ""

    @field_validator("timestamp", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)

    @field_validator("id", "item_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return "" if v is None else str(v)

    @property
    def adjustment(self) -> float:
        """Signed amount an opname removes from the ledger balance."""
        return self.difference if self.difference is not None else self.quantity


class ManualTransaction(BaseModel):
    """Single ad-hoc movement recorded outside the cart flows."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_id: str
    item_name: str
    type: TransactionType
    quantity: float = Field(gt=0)
    user: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class StockInDocument(BaseModel):
    """Inbound receipt header plus lines, sent as one SAVE_STOCK_IN."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    transaction_date: date = Field(alias="date")
    supplier: str
    po_number: str
    delivery_note: str = ""
    items: list[TransactionItem]
    photos: list[str] = Field(default_factory=list)
    user: str


class StockOutDocument(BaseModel):
    """Outbound issuance header plus lines, sent as one SAVE_STOCK_OUT."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    transaction_date: date = Field(alias="date")
    customer: str
    items: list[TransactionItem]
    user: str


class OpnameDocument(BaseModel):
    """Physical count session, sent as one SAVE_OPNAME."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    transaction_date: date = Field(alias="date")
    items: list[OpnameItem]
    user: str


class TransactionRecord(BaseModel):
    """Flat ledger row as stored by the backend sheet (GET_TRANSACTIONS)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timestamp: datetime | None = Field(default=None, alias="Timestamp")
    transaction_date: datetime | None = Field(default=None, alias="Tgl")
    type: TransactionType | None = None
    item_code: str = Field(default="", alias="Kode")
    item_name: str = Field(default="", alias="Nama")
    input_quantity: float = Field(default=0.0, alias="QtyInput")
    input_unit: str = Field(default="", alias="SatuanInput")
    base_quantity: float = Field(default=0.0, alias="QtyDefault")
    stock_before: float | None = Field(default=None, alias="StokSebelum")
    stock_after: float | None = Field(default=None, alias="StokSesudah")
    supplier: str = Field(default="", alias="Supplier")
    remarks: str = Field(default="", alias="KeteranganGlobal")
    delivery_note: str = Field(default="", alias="NoSJ")
    form_number: str = Field(default="", alias="NoForm")
    user: str = Field(default="", alias="User")

    @field_validator("timestamp", "transaction_date", mode="before")
    @classmethod
    def _timestamps(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        text = str(v).strip().upper()
        return text if text in TransactionType.__members__ else None

    @field_validator(
        "item_code", "item_name", "input_unit", "supplier", "remarks",
        "delivery_note", "form_number", "user",
        mode="before",
    )
    @classmethod
    def _text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("input_quantity", "base_quantity", mode="before")
    @classmethod
    def _numbers(cls, v: Any) -> Any:
        return 0 if v is None or v == "" else v

    @field_validator("stock_before", "stock_after", mode="before")
    @classmethod
    def _optional_numbers(cls, v: Any) -> Any:
        return None if v == "" else v
