import locale
from datetime import date, datetime

import pytest

from app.services.analytics import series


def test_monthly_sorted_by_date_not_label(make_trade):
    trades = [
        make_trade(10, "Win", exit_date=datetime(2024, 1, 5)),
        make_trade(-5, "Loss", exit_date=datetime(2023, 12, 20)),
        make_trade(7, "Win", exit_date=datetime(2023, 2, 1)),
        make_trade(3, "Breakeven", exit_date=datetime(2024, 1, 28)),
    ]
    months = series.monthly_performance(trades)
    assert [m.month for m in months] == ["Feb 2023", "Dec 2023", "Jan 2024"]
    jan = months[-1]
    assert (jan.wins, jan.losses, jan.pnl) == (1, 0, 13)
    assert months[1].losses == 1


def test_month_label_ignores_locale(make_trade):
    saved = locale.setlocale(locale.LC_TIME)
    try:
        locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
    except locale.Error:
        pytest.skip("de_DE locale not installed")
    try:
        months = series.monthly_performance([make_trade(10, exit_date=datetime(2024, 3, 5))])
    finally:
        locale.setlocale(locale.LC_TIME, saved)
    assert months[0].month == "Mar 2024"


def test_daily_performance_covers_whole_month(make_trade):
    trades = [
        make_trade(50, exit_date=datetime(2024, 2, 10, 9, 30)),
        make_trade(-20, "Loss", exit_date=datetime(2024, 2, 10, 17, 0)),
        make_trade(99, exit_date=datetime(2024, 3, 1)),
    ]
    days = series.daily_performance(trades, today=date(2024, 2, 14))
    assert len(days) == 29  # leap year
    assert days[0].day == "1"
    tenth = days[9]
    assert tenth.date == date(2024, 2, 10)
    assert (tenth.trades, tenth.pnl) == (2, 30)
    assert sum(d.trades for d in days) == 2


def test_market_distribution_first_seen_order(make_trade):
    trades = [
        make_trade(1, market="Crypto"),
        make_trade(1, market="Forex"),
        make_trade(1, market="Crypto"),
    ]
    dist = series.market_distribution(trades)
    assert [(m.name, m.value) for m in dist] == [("Crypto", 2), ("Forex", 1)]


def test_type_distribution_always_has_long_and_short(make_trade):
    dist = series.type_distribution([make_trade(40, type="Short"), make_trade(-10, type="Short")])
    assert [(t.name, t.count, t.pnl) for t in dist] == [("Long", 0, 0), ("Short", 2, 30)]


def test_day_of_week_all_seven_present(make_trade):
    trades = [
        make_trade(30, exit_date=datetime(2024, 1, 1)),   # Monday
        make_trade(-10, exit_date=datetime(2024, 1, 8)),  # Monday
        make_trade(5, exit_date=datetime(2024, 1, 7)),    # Sunday
    ]
    days = series.day_of_week_performance(trades)
    assert [d.day for d in days] == series.WEEKDAYS
    sunday, monday = days[0], days[1]
    assert (sunday.count, sunday.pnl, sunday.avg_pnl) == (1, 5, 5)
    assert (monday.count, monday.pnl, monday.avg_pnl) == (2, 20, 10)
    assert days[3].avg_pnl == 0


def test_equity_curve_sorted_running_total(make_trade):
    trades = [
        make_trade(25, exit_date=datetime(2024, 1, 3)),
        make_trade(100, exit_date=datetime(2024, 1, 1)),
        make_trade(-50, exit_date=datetime(2024, 1, 2)),
    ]
    curve = series.equity_curve(trades, initial_balance=1000)
    assert [p.equity for p in curve] == [1100, 1050, 1075]
    assert [p.date for p in curve] == ["2024-01-01", "2024-01-02", "2024-01-03"]


def test_equity_curve_keeps_same_day_points(make_trade):
    trades = [
        make_trade(10, exit_date=datetime(2024, 5, 1, 10)),
        make_trade(20, exit_date=datetime(2024, 5, 1, 14)),
    ]
    curve = series.equity_curve(trades, initial_balance=0)
    assert len(curve) == 2
    assert [p.equity for p in curve] == [10, 30]


def test_series_on_empty_input():
    assert series.monthly_performance([]) == []
    assert series.market_distribution([]) == []
    assert series.equity_curve([], 500) == []
    assert len(series.daily_performance([], today=date(2024, 4, 2))) == 30
