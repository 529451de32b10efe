"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from prostock.core.entities import ItemStatus, TransactionType, UserRole


class LoginRequest(BaseModel):
    """Credentials forwarded to the backend."""

    username: str = Field(..., description="Account name", examples=["admin"])
    password: str = Field(..., description="Account password")


class SelectItemRequest(BaseModel):
    """Start a cart entry for a cached item."""

    item_id: str = Field(..., description="Inventory item ID")


class SetUnitRequest(BaseModel):
    unit: str = Field(..., min_length=1, description="Unit name offered for the item")


class SetQuantityRequest(BaseModel):
    # Range checks happen in the cart so the error carries the cart's code
    quantity: float = Field(..., description="Quantity in the active unit")


class SetRemarksRequest(BaseModel):
    remarks: str = Field(default="", max_length=500)


class SubmitCartRequest(BaseModel):
    """Document header for a cart submission.

    Which fields are required depends on the flow:
    inbound needs supplier and po_number, outbound needs customer.
    """

    model_config = ConfigDict(populate_by_name=True)

    transaction_date: date = Field(default_factory=date.today, alias="date")
    supplier: str = Field(default="", description="Supplier name (inbound)")
    po_number: str = Field(default="", description="Purchase order number (inbound)")
    delivery_note: str = Field(default="", description="Delivery note number (inbound)")
    photos: list[str] = Field(default_factory=list, description="Proof-of-receipt images (inbound)")
    customer: str = Field(default="", description="Recipient or destination (outbound)")


class ManualTransactionRequest(BaseModel):
    """Single ad-hoc movement."""

    item_id: str
    type: TransactionType = TransactionType.IN
    quantity: float = Field(..., gt=0)


class ExportRequest(BaseModel):
    """Ledger export filter."""

    start_date: date
    end_date: date
    item_id: str | None = Field(default=None, description="Restrict to one item")
    type: TransactionType | None = Field(default=None, description="Restrict to one movement type")
    save: bool = Field(default=False, description="Also write the file to the export directory")


class ChatRequest(BaseModel):
    """Message to the inventory assistant."""

    message: str = Field(..., min_length=1, max_length=4000)


class AltUnitRequest(BaseModel):
    name: str
    # Parsed by the use case so a bad factor yields INVALID_UNIT_FACTOR
    factor: Any


class ItemRequest(BaseModel):
    """Create or update an inventory item. Empty id creates."""

    id: str = ""
    sku: str = ""
    name: str = Field(..., min_length=1)
    category: str = ""
    min_stock: float = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    default_unit: str = "Pcs"
    initial_stock: float = Field(default=0, ge=0)
    status: ItemStatus = ItemStatus.ACTIVE
    alt_units: list[AltUnitRequest] = Field(default_factory=list, max_length=3)


class SupplierRequest(BaseModel):
    id: str = ""
    name: str = Field(..., min_length=1)
    contact_person: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""


class UserRequest(BaseModel):
    """Create or update a user account. Password is optional on update."""

    id: str = ""
    username: str = Field(..., min_length=1)
    name: str = ""
    role: UserRole = UserRole.STAFF
    password: str | None = None
