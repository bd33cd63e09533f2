"""Month grid for the trade calendar: whole weeks, Sunday first."""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Optional, Sequence

from app.services.analytics.series import exit_day


@dataclass
class CalendarDay:
    date: date
    trades: list[Any] = field(default_factory=list)
    total_profit_loss: float = 0.0
    trade_count: int = 0
    is_current_month: bool = False
    is_today: bool = False

    @property
    def is_selectable(self) -> bool:
        return self.trade_count > 0


def week_start(d: date) -> date:
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_end(d: date) -> date:
    return week_start(d) + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    first = date(year, month, 1)
    next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def _by_day(trades: Sequence) -> dict[date, list]:
    grouped: dict[date, list] = {}
    for trade in trades:
        grouped.setdefault(exit_day(trade), []).append(trade)
    return grouped


def _make_day(d: date, day_trades: list, month: int, today: Optional[date]) -> CalendarDay:
    return CalendarDay(
        date=d,
        trades=day_trades,
        total_profit_loss=sum(t.profit_loss for t in day_trades),
        trade_count=len(day_trades),
        is_current_month=d.month == month,
        is_today=d == today,
    )


def build_calendar(
    trades: Sequence,
    year: int,
    month: int,
    today: Optional[date] = None,
) -> list[CalendarDay]:
    first, last = month_bounds(year, month)
    start, end = week_start(first), week_end(last)
    today = today or date.today()
    grouped = _by_day(trades)

    days = []
    d = start
    while d <= end:
        days.append(_make_day(d, grouped.get(d, []), month, today))
        d += timedelta(days=1)
    return days


def calendar_day(trades: Sequence, day: date, today: Optional[date] = None) -> CalendarDay:
    """Drill-down for a single date; ``is_current_month`` is relative to that date's own month."""
    day_trades = [t for t in trades if exit_day(t) == day]
    return _make_day(day, day_trades, day.month, today or date.today())
