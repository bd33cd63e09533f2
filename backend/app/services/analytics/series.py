"""
Time-bucketed and categorical series derived from a trade snapshot.

Every function here is independent of the others and of input order, except
where noted (market distribution keeps first-seen order). Dates are taken
from ``exit_date`` at day granularity; time-of-day and tzinfo are ignored.
"""
import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from app.models.enums import TradeStatus, TradeType

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@dataclass
class MonthlyBucket:
    month: str        # "Jan 2024"
    year: int
    month_number: int
    wins: int = 0
    losses: int = 0
    pnl: float = 0.0


@dataclass
class DailyBucket:
    day: str          # day of month, "1".."31"
    date: date
    trades: int = 0
    pnl: float = 0.0


@dataclass
class MarketSlice:
    name: str
    value: int = 0


@dataclass
class TypeSlice:
    name: str
    count: int = 0
    pnl: float = 0.0


@dataclass
class WeekdayBucket:
    day: str
    count: int = 0
    pnl: float = 0.0
    avg_pnl: float = 0.0


@dataclass
class EquityPoint:
    date: str         # "yyyy-mm-dd"
    equity: float


def exit_day(trade) -> date:
    return trade.exit_date.date()


def monthly_performance(trades: Sequence) -> list[MonthlyBucket]:
    buckets: dict[tuple[int, int], MonthlyBucket] = {}
    for trade in trades:
        d = exit_day(trade)
        key = (d.year, d.month)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthlyBucket(
                month=f"{MONTH_ABBR[d.month - 1]} {d.year}", year=d.year, month_number=d.month,
            )
        if trade.status == TradeStatus.WIN:
            bucket.wins += 1
        elif trade.status == TradeStatus.LOSS:
            bucket.losses += 1
        bucket.pnl += trade.profit_loss
    # Sort on the (year, month) key, never on the label
    return [buckets[k] for k in sorted(buckets)]


def month_days(year: int, month: int) -> list[date]:
    _, last = calendar.monthrange(year, month)
    return [date(year, month, n) for n in range(1, last + 1)]


def daily_performance(trades: Sequence, today: Optional[date] = None) -> list[DailyBucket]:
    """One entry per day of the month containing ``today``, including idle days."""
    today = today or date.today()
    per_day: dict[date, DailyBucket] = {
        d: DailyBucket(day=str(d.day), date=d) for d in month_days(today.year, today.month)
    }
    for trade in trades:
        bucket = per_day.get(exit_day(trade))
        if bucket is not None:
            bucket.trades += 1
            bucket.pnl += trade.profit_loss
    return list(per_day.values())


def market_distribution(trades: Sequence) -> list[MarketSlice]:
    counts: dict[str, MarketSlice] = {}
    for trade in trades:
        name = getattr(trade.market, "value", trade.market)
        counts.setdefault(name, MarketSlice(name=name)).value += 1
    return list(counts.values())


def type_distribution(trades: Sequence) -> list[TypeSlice]:
    slices = {t.value: TypeSlice(name=t.value) for t in TradeType}
    for trade in trades:
        name = getattr(trade.type, "value", trade.type)
        slot = slices.get(name)
        if slot is None:
            continue
        slot.count += 1
        slot.pnl += trade.profit_loss
    return list(slices.values())


def day_of_week_performance(trades: Sequence) -> list[WeekdayBucket]:
    buckets = {name: WeekdayBucket(day=name) for name in WEEKDAYS}
    for trade in trades:
        # date.weekday() is Monday=0; shift so Sunday leads
        name = WEEKDAYS[(exit_day(trade).weekday() + 1) % 7]
        buckets[name].count += 1
        buckets[name].pnl += trade.profit_loss
    for bucket in buckets.values():
        bucket.avg_pnl = bucket.pnl / bucket.count if bucket.count > 0 else 0
    return list(buckets.values())


def equity_curve(trades: Sequence, initial_balance: float = 0.0) -> list[EquityPoint]:
    """Running balance after each trade in exit order, one point per trade."""
    equity = initial_balance or 0.0
    points = []
    for trade in sorted(trades, key=lambda t: t.exit_date):
        equity += trade.profit_loss
        points.append(EquityPoint(date=exit_day(trade).isoformat(), equity=equity))
    return points
