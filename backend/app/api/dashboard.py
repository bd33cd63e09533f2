"""
Dashboard, analytics and calendar views: aggregated data for one account.
Each request loads the account's full trade history, aggregates it and
returns plain data.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.accounts import owned_account
from app.core.auth import get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.models.user import User
from app.schemas.analytics import (
    AnalyticsResponse,
    CalendarDayResponse,
    CalendarResponse,
    DailyPoint,
    DashboardResponse,
    EquityPointResponse,
    MarketPoint,
    MonthlyPoint,
    StatsResponse,
    TypePoint,
    WeekdayPoint,
)
from app.services.analytics import series
from app.services.analytics.calendar_grid import build_calendar, calendar_day
from app.services.analytics.stats import compute_stats
from app.services.ledger.store import SqlTradeStore

router = APIRouter(prefix="/api/accounts", tags=["dashboard"])


def _load(db: Session, user: User, account_id: int):
    store = SqlTradeStore(db, user.id)
    account = owned_account(store, account_id)
    return account, store.list_trades(account_id, newest_first=False)


@router.get("/{account_id}/dashboard", response_model=DashboardResponse)
def dashboard_summary(
    account_id: int,
    as_of: Optional[date] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Headline stats, monthly P&L and day-by-day P&L for the current month."""
    account, trades = _load(db, user, account_id)
    today = as_of or date.today()

    return DashboardResponse(
        account_id=account.id,
        balance=account.balance,
        currency=settings.DEFAULT_CURRENCY,
        stats=StatsResponse.model_validate(compute_stats(trades)),
        monthly=[MonthlyPoint.model_validate(m) for m in series.monthly_performance(trades)],
        daily=[DailyPoint.model_validate(d) for d in series.daily_performance(trades, today)],
    )


@router.get("/{account_id}/analytics", response_model=AnalyticsResponse)
def analytics(
    account_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    account, trades = _load(db, user, account_id)

    return AnalyticsResponse(
        account_id=account.id,
        stats=StatsResponse.model_validate(compute_stats(trades)),
        monthly=[MonthlyPoint.model_validate(m) for m in series.monthly_performance(trades)],
        markets=[MarketPoint.model_validate(m) for m in series.market_distribution(trades)],
        types=[TypePoint.model_validate(t) for t in series.type_distribution(trades)],
        weekdays=[WeekdayPoint.model_validate(w) for w in series.day_of_week_performance(trades)],
        equity_curve=[
            EquityPointResponse.model_validate(p)
            for p in series.equity_curve(trades, account.initial_balance)
        ],
    )


@router.get("/{account_id}/calendar", response_model=CalendarResponse)
def trade_calendar(
    account_id: int,
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    as_of: Optional[date] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Whole-week grid for a month; defaults to the current month."""
    _, trades = _load(db, user, account_id)
    today = as_of or date.today()
    year = year or today.year
    month = month or today.month

    days = build_calendar(trades, year, month, today)
    in_month = [d for d in days if d.is_current_month]
    return CalendarResponse(
        year=year,
        month=month,
        days=[CalendarDayResponse.model_validate(d) for d in days],
        total_profit_loss=sum(d.total_profit_loss for d in in_month),
        trade_count=sum(d.trade_count for d in in_month),
    )


@router.get("/{account_id}/calendar/{day}", response_model=CalendarDayResponse)
def trade_calendar_day(
    account_id: int,
    day: date,
    as_of: Optional[date] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Trades closed on one date. 404 when there is nothing to drill into."""
    _, trades = _load(db, user, account_id)
    result = calendar_day(trades, day, today=as_of)
    if not result.is_selectable:
        raise HTTPException(status_code=404, detail="No trades on this day")
    return CalendarDayResponse.model_validate(result)
