"""
Login, logout and session state endpoints.
"""

from fastapi import APIRouter, Depends, status

from prostock.api.dependencies import get_context, get_login_use_case, get_logout_use_case
from prostock.application import AppContext
from prostock.application.dto.requests import LoginRequest
from prostock.application.dto.responses import ErrorResponse, SessionResponse, UserResponse
from prostock.application.use_cases import LoginUseCase, LogoutUseCase

router = APIRouter(prefix="/api/session", tags=["session"])


@router.get("", response_model=SessionResponse)
async def get_session(ctx: AppContext = Depends(get_context)) -> SessionResponse:
    """Who is signed in, if anyone."""
    user = ctx.user
    return SessionResponse(
        authenticated=user is not None,
        user=UserResponse.from_entity(user) if user else None,
    )


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        401: {"model": ErrorResponse, "description": "Credentials rejected"},
    },
)
async def login(
    request: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> SessionResponse:
    """Sign in and load the stock cache."""
    result = await use_case.execute(request)
    return SessionResponse(
        authenticated=True,
        user=UserResponse.from_entity(result.user) if result.user else None,
        refresh=result.refresh.value if result.refresh else None,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(use_case: LogoutUseCase = Depends(get_logout_use_case)) -> None:
    """Sign out and drop all session state."""
    await use_case.execute()
