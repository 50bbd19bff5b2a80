"""Pydantic schemas for account and user endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request schema for opening an account."""

    username: str = Field(..., min_length=1, max_length=100, description="Owner; created when new")
    account_name: str = Field(..., min_length=1, max_length=255)
    full_name: str = ""
    email: str = ""
    account_type: str = Field(default="Individual", max_length=50)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    username: str
    account_type: str
    is_active: bool
    created_at_est: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int


class UserResponse(BaseModel):
    """Response schema for a user with account counts."""

    model_config = {"from_attributes": True}

    user_id: str
    username: str
    full_name: str
    email: str
    account_count: int
    active_account_count: int


class UserListResponse(BaseModel):
    """Response schema for listing users."""

    users: list[UserResponse]
    count: int
