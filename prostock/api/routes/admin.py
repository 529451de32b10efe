"""
Master data administration endpoints.

Items, users and logs need an ADMIN session; suppliers need any session.
"""

from fastapi import APIRouter, Depends

from prostock.api.dependencies import get_context, get_master_data_use_case
from prostock.application import AppContext
from prostock.application.dto.requests import ItemRequest, SupplierRequest, UserRequest
from prostock.application.dto.responses import (
    ActivityLogResponse,
    ErrorResponse,
    RefreshResponse,
    SupplierResponse,
    UserResponse,
)
from prostock.application.use_cases import ManageMasterDataUseCase

router = APIRouter(prefix="/api/admin", tags=["admin"])

_admin_errors = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse, "description": "Requires ADMIN"},
    409: {"model": ErrorResponse, "description": "Backend rejected the change"},
}


# Items


@router.put("/items", response_model=RefreshResponse, responses=_admin_errors)
async def save_item(
    request: ItemRequest,
    ctx: AppContext = Depends(get_context),
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> RefreshResponse:
    """Create (empty id) or update an item."""
    outcome = await use_case.save_item(request)
    return RefreshResponse.from_outcome(outcome, ctx.cache)


@router.delete("/items/{item_id}", response_model=RefreshResponse, responses=_admin_errors)
async def delete_item(
    item_id: str,
    ctx: AppContext = Depends(get_context),
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> RefreshResponse:
    outcome = await use_case.delete_item(item_id)
    return RefreshResponse.from_outcome(outcome, ctx.cache)


# Suppliers


@router.get("/suppliers", response_model=list[SupplierResponse])
async def list_suppliers(
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> list[SupplierResponse]:
    return [SupplierResponse.from_entity(s) for s in await use_case.list_suppliers()]


@router.put("/suppliers", response_model=RefreshResponse, responses=_admin_errors)
async def save_supplier(
    request: SupplierRequest,
    ctx: AppContext = Depends(get_context),
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> RefreshResponse:
    outcome = await use_case.save_supplier(request)
    return RefreshResponse.from_outcome(outcome, ctx.cache)


@router.delete("/suppliers/{supplier_id}", response_model=RefreshResponse, responses=_admin_errors)
async def delete_supplier(
    supplier_id: str,
    ctx: AppContext = Depends(get_context),
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> RefreshResponse:
    outcome = await use_case.delete_supplier(supplier_id)
    return RefreshResponse.from_outcome(outcome, ctx.cache)


# Users


@router.get("/users", response_model=list[UserResponse], responses=_admin_errors)
async def list_users(
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> list[UserResponse]:
    return [UserResponse.from_entity(u) for u in await use_case.list_users()]


@router.put("/users", response_model=RefreshResponse, responses=_admin_errors)
async def save_user(
    request: UserRequest,
    ctx: AppContext = Depends(get_context),
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> RefreshResponse:
    """Create (empty id, password required) or update a user."""
    outcome = await use_case.save_user(request)
    return RefreshResponse.from_outcome(outcome, ctx.cache)


@router.delete("/users/{user_id}", response_model=RefreshResponse, responses=_admin_errors)
async def delete_user(
    user_id: str,
    ctx: AppContext = Depends(get_context),
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> RefreshResponse:
    """The primary administrator and the caller's own account are protected."""
    outcome = await use_case.delete_user(user_id)
    return RefreshResponse.from_outcome(outcome, ctx.cache)


# Audit


@router.get("/logs", response_model=list[ActivityLogResponse], responses=_admin_errors)
async def activity_logs(
    use_case: ManageMasterDataUseCase = Depends(get_master_data_use_case),
) -> list[ActivityLogResponse]:
    return [ActivityLogResponse.from_entity(log) for log in await use_case.activity_logs()]
