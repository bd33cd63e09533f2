import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.models.account import Account
from app.models.user import User
from app.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
    BalanceReset,
    ReconcileResponse,
)
from app.services.ledger.service import TradeLedger
from app.services.ledger.store import LedgerError, SqlTradeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


def owned_account(store: SqlTradeStore, account_id: int) -> Account:
    try:
        return store.get_account(account_id)
    except LedgerError:
        raise HTTPException(status_code=404, detail="Account not found")


@router.get("", response_model=AccountListResponse)
def list_accounts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    accounts = (
        db.query(Account)
        .filter(Account.user_id == current_user.id)
        .order_by(Account.created_at.asc(), Account.id.asc())
        .all()
    )
    return {"items": accounts, "total": len(accounts)}


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    account = Account(
        user_id=current_user.id,
        name=payload.name,
        type=payload.type,
        balance=payload.initial_balance,
        initial_balance=payload.initial_balance,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info("Account %s created for user %s", account.id, current_user.id)
    return account


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return owned_account(SqlTradeStore(db, current_user.id), account_id)


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    payload: AccountUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    account = owned_account(SqlTradeStore(db, current_user.id), account_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(account, key, value)
    db.commit()
    db.refresh(account)
    return account


@router.delete("/{account_id}")
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    account = owned_account(SqlTradeStore(db, current_user.id), account_id)
    db.delete(account)  # trades and journals go with it
    db.commit()
    logger.info("Account %s deleted", account_id)
    return {"status": "ok"}


@router.post("/{account_id}/reset-balance", response_model=AccountResponse)
def reset_balance(
    account_id: int,
    payload: BalanceReset,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return TradeLedger(db, current_user.id).reset_balance(account_id, payload.balance)
    except LedgerError:
        raise HTTPException(status_code=404, detail="Account not found")


@router.post("/{account_id}/reconcile", response_model=ReconcileResponse)
def reconcile_balance(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        account, previous = TradeLedger(db, current_user.id).reconcile(account_id)
    except LedgerError:
        raise HTTPException(status_code=404, detail="Account not found")
    return ReconcileResponse(
        account=AccountResponse.model_validate(account),
        previous_balance=previous,
        drift=account.balance - previous,
    )
