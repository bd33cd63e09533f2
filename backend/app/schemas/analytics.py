from datetime import date
from typing import Optional

from pydantic import BaseModel

from app.schemas.trade import TradeResponse


class StatsResponse(BaseModel):
    total_trades: int
    winning_trades: int
    losing_trades: int
    breakeven_trades: int
    win_rate: float
    total_profit: float
    total_loss: float
    net_profit_loss: float
    average_profit: float
    average_loss: float
    profit_factor: float
    best_trade: Optional[TradeResponse] = None
    worst_trade: Optional[TradeResponse] = None
    average_risk_reward: str

    class Config:
        from_attributes = True


class MonthlyPoint(BaseModel):
    month: str
    year: int
    month_number: int
    wins: int
    losses: int
    pnl: float

    class Config:
        from_attributes = True


class DailyPoint(BaseModel):
    day: str
    date: date
    trades: int
    pnl: float

    class Config:
        from_attributes = True


class MarketPoint(BaseModel):
    name: str
    value: int

    class Config:
        from_attributes = True


class TypePoint(BaseModel):
    name: str
    count: int
    pnl: float

    class Config:
        from_attributes = True


class WeekdayPoint(BaseModel):
    day: str
    count: int
    pnl: float
    avg_pnl: float

    class Config:
        from_attributes = True


class EquityPointResponse(BaseModel):
    date: str
    equity: float

    class Config:
        from_attributes = True


class DashboardResponse(BaseModel):
    account_id: int
    balance: float
    currency: str
    stats: StatsResponse
    monthly: list[MonthlyPoint]
    daily: list[DailyPoint]


class AnalyticsResponse(BaseModel):
    account_id: int
    stats: StatsResponse
    monthly: list[MonthlyPoint]
    markets: list[MarketPoint]
    types: list[TypePoint]
    weekdays: list[WeekdayPoint]
    equity_curve: list[EquityPointResponse]


class CalendarDayResponse(BaseModel):
    date: date
    trades: list[TradeResponse]
    total_profit_loss: float
    trade_count: int
    is_current_month: bool
    is_today: bool
    is_selectable: bool

    class Config:
        from_attributes = True


class CalendarResponse(BaseModel):
    year: int
    month: int
    days: list[CalendarDayResponse]
    total_profit_loss: float  # current-month days only
    trade_count: int
