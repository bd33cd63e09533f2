import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.accounts import owned_account
from app.core.auth import get_current_user
from app.core.database import get_db
from app.models.enums import MarketType, TradeStatus, TradeType
from app.models.user import User
from app.schemas.trade import TradeCreate, TradeUpdate, TradeResponse, TradeListResponse
from app.services.export import trades_to_csv
from app.services.ledger.service import TradeLedger
from app.services.ledger.store import LedgerError, SqlTradeStore
from app.services.trade_filters import TradeFilter, filter_trades

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trades"])

# Columns a client may clear with an explicit null
NULLABLE_FIELDS = {"stop_loss", "take_profit", "risk_reward", "notes", "image_url"}


def _trade_filter(
    search: Optional[str] = None,
    market: Optional[MarketType] = None,
    type: Optional[TradeType] = None,
    status: Optional[TradeStatus] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> TradeFilter:
    return TradeFilter(
        search=search,
        market=market.value if market else None,
        type=type.value if type else None,
        status=status.value if status else None,
        start=start,
        end=end,
    )


def _filtered(db: Session, user: User, account_id: int, flt: TradeFilter) -> list:
    store = SqlTradeStore(db, user.id)
    owned_account(store, account_id)
    return filter_trades(store.list_trades(account_id), flt)


@router.get("/api/accounts/{account_id}/trades", response_model=TradeListResponse)
def list_trades(
    account_id: int,
    flt: TradeFilter = Depends(_trade_filter),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    trades = _filtered(db, current_user, account_id, flt)
    return {"items": trades, "total": len(trades)}


@router.get("/api/accounts/{account_id}/trades/export.csv")
def export_trades(
    account_id: int,
    flt: TradeFilter = Depends(_trade_filter),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    trades = _filtered(db, current_user, account_id, flt)
    return Response(
        content=trades_to_csv(trades),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="trades-{account_id}-{date.today():%Y-%m-%d}.csv"'},
    )


@router.post(
    "/api/accounts/{account_id}/trades",
    response_model=TradeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_trade(
    account_id: int,
    payload: TradeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return TradeLedger(db, current_user.id).add_trade(account_id, payload.model_dump())
    except LedgerError:
        raise HTTPException(status_code=404, detail="Account not found")


@router.get("/api/trades/{trade_id}", response_model=TradeResponse)
def get_trade(
    trade_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return SqlTradeStore(db, current_user.id).get_trade(trade_id)
    except LedgerError:
        raise HTTPException(status_code=404, detail="Trade not found")


@router.put("/api/trades/{trade_id}", response_model=TradeResponse)
def update_trade(
    trade_id: int,
    payload: TradeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    try:
        return TradeLedger(db, current_user.id).edit_trade(trade_id, changes)
    except LedgerError:
        raise HTTPException(status_code=404, detail="Trade not found")


@router.delete("/api/trades/{trade_id}")
def delete_trade(
    trade_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        TradeLedger(db, current_user.id).remove_trade(trade_id)
    except LedgerError:
        raise HTTPException(status_code=404, detail="Trade not found")
    return {"status": "ok"}
