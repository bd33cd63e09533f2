from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.enums import AccountType


class AccountCreate(BaseModel):
    name: str
    type: AccountType = AccountType.DEMO
    initial_balance: float = 0.0

    class Config:
        use_enum_values = True
        validate_default = True
        allow_inf_nan = False


class AccountUpdate(BaseModel):
    """Renaming or retyping only; balances move through trades or reset-balance."""
    name: Optional[str] = None
    type: Optional[AccountType] = None

    class Config:
        use_enum_values = True


class BalanceReset(BaseModel):
    balance: float

    class Config:
        allow_inf_nan = False


class AccountResponse(BaseModel):
    id: int
    user_id: int
    name: str
    type: AccountType
    balance: float
    initial_balance: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountListResponse(BaseModel):
    items: list[AccountResponse]
    total: int


class ReconcileResponse(BaseModel):
    account: AccountResponse
    previous_balance: float
    drift: float  # recomputed minus stored
