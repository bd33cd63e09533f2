"""CSV export of trade lists."""
import csv
import io
from typing import Sequence

CSV_COLUMNS = [
    "Symbol", "Market", "Type", "Entry Price", "Exit Price", "Stop Loss", "Take Profit",
    "Size", "Risk/Reward", "Profit/Loss", "Status", "Entry Date", "Exit Date", "Notes",
]


def _fmt_dt(value) -> str:
    if not value:
        return ""
    return f"{value:%b} {value.day}, {value:%Y %H:%M}"


def _blank(value):
    return "" if value is None else value


def trade_row(trade) -> dict:
    return {
        "Symbol": trade.symbol,
        "Market": trade.market,
        "Type": trade.type,
        "Entry Price": trade.entry_price,
        "Exit Price": trade.exit_price,
        "Stop Loss": _blank(trade.stop_loss),
        "Take Profit": _blank(trade.take_profit),
        "Size": trade.size,
        "Risk/Reward": trade.risk_reward or "",
        "Profit/Loss": trade.profit_loss,
        "Status": trade.status,
        "Entry Date": _fmt_dt(trade.entry_date),
        "Exit Date": _fmt_dt(trade.exit_date),
        "Notes": trade.notes or "",
    }


def trades_to_csv(trades: Sequence) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for trade in trades:
        writer.writerow(trade_row(trade))
    return buf.getvalue()
