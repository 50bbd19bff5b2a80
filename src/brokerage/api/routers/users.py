"""User directory endpoints."""

from fastapi import APIRouter, Depends, Response

from brokerage.api.deps import get_account_service, get_portfolio_service
from brokerage.api.schemas import OverviewResponse, UserListResponse, UserResponse
from brokerage.core.exceptions import NotFoundError
from brokerage.services import AccountService, PortfolioService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
def list_users(
    service: AccountService = Depends(get_account_service),
) -> UserListResponse:
    """List users with total and active account counts."""
    users = service.list_users()
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        count=len(users),
    )


@router.get("/{user_id}/overview", response_model=OverviewResponse)
def get_user_overview(
    user_id: str,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> OverviewResponse:
    """Overview pooled across every account the user owns."""
    return OverviewResponse.model_validate(portfolio.get_user_overview(user_id))


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: str,
    service: AccountService = Depends(get_account_service),
) -> Response:
    """Deactivate all of a user's accounts."""
    if not service.delete_user(user_id):
        raise NotFoundError("User", user_id)
    return Response(status_code=204)
