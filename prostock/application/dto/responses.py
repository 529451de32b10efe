"""Response bodies returned by the HTTP surface.

Routes never return entities directly; entity-backed bodies are built with from_entity.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from prostock.core.entities import (
    ActivityLog,
    ChatMessage,
    InventoryItem,
    OpnameItem,
    Supplier,
    TransactionItem,
    TransactionRecord,
    User,
)
from prostock.core.services import (
    BalancedMovement,
    CartBuilder,
    ReconstructedReport,
    RefreshOutcome,
    StockCache,
    SufficiencyResult,
    build_unit_options,
)
from prostock.core.services.notifications import Notification


class UserResponse(BaseModel):
    """User without secrets."""

    id: str
    username: str
    name: str
    role: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, name=user.name, role=user.role.value)


class SessionResponse(BaseModel):
    """Current session state."""

    authenticated: bool
    user: UserResponse | None = None
    refresh: str | None = Field(default=None, description="Outcome of the refresh triggered by login")


class UnitOptionResponse(BaseModel):
    name: str
    factor: float
    is_default: bool


class ItemResponse(BaseModel):
    """Cached inventory item with its selectable units."""

    id: str
    sku: str
    name: str
    category: str
    stock: float = Field(..., description="Stock in the default unit")
    min_stock: float
    price: float
    default_unit: str
    status: str
    is_low_stock: bool
    units: list[UnitOptionResponse]

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "ItemResponse":
        return cls(
            id=item.id,
            sku=item.sku,
            name=item.name,
            category=item.category,
            stock=item.stock,
            min_stock=item.min_stock,
            price=item.price,
            default_unit=item.default_unit,
            status=item.status.value,
            is_low_stock=item.is_low_stock,
            units=[
                UnitOptionResponse(name=u.name, factor=u.factor, is_default=u.is_default)
                for u in build_unit_options(item)
            ],
        )


class SupplierResponse(BaseModel):
    id: str
    name: str
    contact_person: str
    phone: str
    email: str
    address: str

    @classmethod
    def from_entity(cls, supplier: Supplier) -> "SupplierResponse":
        return cls(**supplier.model_dump())


class CacheResponse(BaseModel):
    """Snapshot of the client cache."""

    loading: bool
    refreshed_at: datetime | None
    inventory: list[ItemResponse]
    suppliers: list[SupplierResponse]
    stats: dict[str, Any]


class RefreshResponse(BaseModel):
    outcome: str
    loading: bool
    refreshed_at: datetime | None

    @classmethod
    def from_outcome(cls, outcome: RefreshOutcome, cache: StockCache) -> "RefreshResponse":
        return cls(outcome=outcome.value, loading=cache.loading, refreshed_at=cache.refreshed_at)


class ValidationResponse(BaseModel):
    ok: bool
    requested_base: float
    available_base: float
    unit: str
    message: str | None = None

    @classmethod
    def from_result(cls, result: SufficiencyResult) -> "ValidationResponse":
        return cls(
            ok=result.ok,
            requested_base=result.requested_base,
            available_base=result.available_base,
            unit=result.unit,
            message=result.message,
        )


class CartLineResponse(BaseModel):
    index: int
    item_id: str
    item_name: str
    quantity: float
    unit: str
    converted_quantity: float
    remarks: str
    system_stock: float | None = None
    physical_stock: float | None = None
    difference: float | None = None

    @classmethod
    def from_line(cls, index: int, line: TransactionItem) -> "CartLineResponse":
        extra: dict[str, Any] = {}
        if isinstance(line, OpnameItem):
            extra = {
                "system_stock": line.system_stock,
                "physical_stock": line.physical_stock,
                "difference": line.difference,
            }
        return cls(
            index=index,
            item_id=line.item_id,
            item_name=line.item_name,
            quantity=line.quantity,
            unit=line.unit,
            converted_quantity=line.converted_quantity,
            remarks=line.remarks,
            **extra,
        )


class CartEntryResponse(BaseModel):
    """The line being typed."""

    state: str
    item: ItemResponse | None = None
    unit: str | None = None
    quantity: float = 0
    remarks: str = ""
    validation: ValidationResponse | None = None
    can_commit: bool = False


class CartResponse(BaseModel):
    flow: str
    entry: CartEntryResponse
    lines: list[CartLineResponse]
    is_empty: bool
    submitting: bool = False

    @classmethod
    def from_cart(cls, cart: CartBuilder) -> "CartResponse":
        item = cart.selected_item
        entry = CartEntryResponse(
            state=cart.state.value,
            item=ItemResponse.from_entity(item) if item else None,
            unit=cart.unit.name if cart.unit else None,
            quantity=cart.quantity,
            remarks=cart.remarks,
            validation=ValidationResponse.from_result(cart.validation) if cart.validation else None,
            can_commit=cart.can_commit,
        )
        return cls(
            flow=cart.flow.value,
            entry=entry,
            lines=[CartLineResponse.from_line(i, line) for i, line in enumerate(cart.lines)],
            is_empty=cart.is_empty,
            submitting=cart.submitting,
        )


class SubmitResponse(BaseModel):
    flow: str
    lines_submitted: int
    refresh: str


class MovementResponse(BaseModel):
    """Movement with replayed balances."""

    id: str
    type: str
    quantity: float
    difference: float | None
    timestamp: datetime | None
    user: str
    balance_before: float
    balance_after: float

    @classmethod
    def from_balanced(cls, row: BalancedMovement) -> "MovementResponse":
        m = row.movement
        return cls(
            id=m.id,
            type=m.type.value,
            quantity=m.quantity,
            difference=m.difference,
            timestamp=m.timestamp,
            user=m.user,
            balance_before=row.balance_before,
            balance_after=row.balance_after,
        )


class HistoryReportResponse(BaseModel):
    item_id: str
    item_name: str
    start_date: date
    end_date: date
    opening_stock: float
    total_in: float
    total_out: float
    total_adjustment: float
    closing_stock: float
    final_balance: float
    consistent: bool
    problems: list[str]
    movements: list[MovementResponse]

    @classmethod
    def from_report(
        cls, result: ReconstructedReport, start_date: date, end_date: date
    ) -> "HistoryReportResponse":
        report = result.report
        return cls(
            item_id=report.item_id,
            item_name=report.item_name,
            start_date=start_date,
            end_date=end_date,
            opening_stock=report.opening_stock,
            total_in=report.total_in,
            total_out=report.total_out,
            total_adjustment=report.total_adjustment,
            closing_stock=report.closing_stock,
            final_balance=result.final_balance,
            consistent=result.consistent,
            problems=result.problems,
            movements=[MovementResponse.from_balanced(m) for m in result.movements],
        )


class TransactionResponse(BaseModel):
    """Ledger row."""

    timestamp: datetime | None
    transaction_date: datetime | None
    type: str | None
    item_code: str
    item_name: str
    input_quantity: float
    input_unit: str
    base_quantity: float
    stock_before: float | None
    stock_after: float | None
    supplier: str
    remarks: str
    delivery_note: str
    form_number: str
    user: str

    @classmethod
    def from_record(cls, record: TransactionRecord) -> "TransactionResponse":
        data = record.model_dump()
        data["type"] = record.type.value if record.type else None
        return cls(**data)


class ChatMessageResponse(BaseModel):
    role: str
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(role=message.role.value, content=message.content, created_at=message.created_at)


class ChatResponse(BaseModel):
    reply: ChatMessageResponse
    message_count: int


class InsightsResponse(BaseModel):
    insights: str


class NotificationResponse(BaseModel):
    id: int
    message: str
    level: str
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            message=notification.message,
            level=notification.level.value,
            created_at=notification.created_at,
        )


class ActivityLogResponse(BaseModel):
    timestamp: str
    user: str
    action: str
    details: str

    @classmethod
    def from_entity(cls, log: ActivityLog) -> "ActivityLogResponse":
        return cls(**log.model_dump())


class ProviderHealthResponse(BaseModel):
    """One dependency in a health report."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health report for the service and its dependencies."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    backend_configured: bool
    authenticated: bool
    llm: ProviderHealthResponse | None = None
    backend: ProviderHealthResponse | None = None
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response. error_code is stable (e.g. INSUFFICIENT_STOCK)."""

    error_code: str = Field(..., description="Stable code such as MISSING_FIELD")
    message: str = Field(..., description="Shown to the user as is")
    hint: str | None = Field(default=None, description="What to do next")
    detail: str | None = Field(default=None, description="Extra context, e.g. failing fields")
    path: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
