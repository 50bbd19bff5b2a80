"""Account directory endpoints."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_account_service
from brokerage.api.schemas import AccountCreate, AccountResponse, AccountListResponse
from brokerage.services import AccountService, NewAccount

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=AccountListResponse)
def list_accounts(
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List active accounts."""
    accounts = service.list_accounts()
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Open an account, creating its user when the username is new."""
    account = service.create_account(
        NewAccount(
            username=data.username,
            account_name=data.account_name,
            full_name=data.full_name,
            email=data.email,
            account_type=data.account_type,
        )
    )
    return AccountResponse.model_validate(account)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get an active account by ID."""
    return AccountResponse.model_validate(service.get_account(account_id))
