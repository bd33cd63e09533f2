import csv
import io
from datetime import date, datetime

from app.services.export import CSV_COLUMNS, trades_to_csv
from app.services.trade_filters import TradeFilter, filter_trades


def test_search_matches_symbol_or_notes(make_trade):
    trades = [
        make_trade(1, symbol="BTCUSD"),
        make_trade(1, symbol="EURUSD", notes="Breakout on btc news"),
        make_trade(1, symbol="AAPL"),
    ]
    found = filter_trades(trades, TradeFilter(search="btc"))
    assert [t.symbol for t in found] == ["BTCUSD", "EURUSD"]


def test_enum_filters_combine(make_trade):
    trades = [
        make_trade(1, market="Crypto", type="Short", status="Win"),
        make_trade(1, market="Crypto", type="Long", status="Win"),
        make_trade(-1, market="Forex", type="Short", status="Loss"),
    ]
    found = filter_trades(trades, TradeFilter(market="Crypto", type="Short"))
    assert len(found) == 1
    assert filter_trades(trades, TradeFilter(status="Loss"))[0].market == "Forex"


def test_end_date_is_inclusive_through_end_of_day(make_trade):
    trades = [
        make_trade(1, exit_date=datetime(2024, 1, 9, 23, 59)),
        make_trade(2, exit_date=datetime(2024, 1, 10, 23, 59, 59)),
        make_trade(3, exit_date=datetime(2024, 1, 11, 0, 0)),
    ]
    found = filter_trades(trades, TradeFilter(start=date(2024, 1, 10), end=date(2024, 1, 10)))
    assert [t.profit_loss for t in found] == [2]


def test_csv_export_columns_and_blanks(make_trade):
    trades = [make_trade(12.5, risk_reward="1:2", exit_date=datetime(2024, 2, 3, 14, 5))]
    rows = list(csv.DictReader(io.StringIO(trades_to_csv(trades))))
    assert list(rows[0].keys()) == CSV_COLUMNS
    assert rows[0]["Profit/Loss"] == "12.5"
    assert rows[0]["Stop Loss"] == ""
    assert rows[0]["Risk/Reward"] == "1:2"
    assert rows[0]["Exit Date"] == "Feb 3, 2024 14:05"
