from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from app.models.enums import MarketType, TradeStatus, TradeType


def _naive(value: Optional[datetime]) -> Optional[datetime]:
    # Trade dates are journal wall-clock times; offsets are dropped, not converted
    if value is not None and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


class TradeCreate(BaseModel):
    market: MarketType
    symbol: str
    type: TradeType
    status: TradeStatus
    entry_price: float
    exit_price: float
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    size: float
    risk_reward: Optional[str] = None   # "risk:reward"; malformed values are kept as entered
    profit_loss: float = 0.0
    entry_date: datetime
    exit_date: datetime
    notes: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        use_enum_values = True
        allow_inf_nan = False

    @field_validator("entry_date", "exit_date")
    @classmethod
    def _wall_clock(cls, v):
        return _naive(v)


class TradeUpdate(BaseModel):
    market: Optional[MarketType] = None
    symbol: Optional[str] = None
    type: Optional[TradeType] = None
    status: Optional[TradeStatus] = None
    entry_price: Optional[float] = None
    exit_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    size: Optional[float] = None
    risk_reward: Optional[str] = None
    profit_loss: Optional[float] = None  # omitted or null leaves the balance untouched
    entry_date: Optional[datetime] = None
    exit_date: Optional[datetime] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        use_enum_values = True
        allow_inf_nan = False

    @field_validator("entry_date", "exit_date")
    @classmethod
    def _wall_clock(cls, v):
        return _naive(v)


class TradeResponse(BaseModel):
    id: int
    account_id: int
    user_id: int
    market: MarketType
    symbol: str
    type: TradeType
    status: TradeStatus
    entry_price: float
    exit_price: float
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    size: float
    risk_reward: Optional[str] = None
    profit_loss: float
    entry_date: datetime
    exit_date: datetime
    notes: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TradeListResponse(BaseModel):
    items: list[TradeResponse]
    total: int
