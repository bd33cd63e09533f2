"""
Summary statistics over a snapshot of closed trades.
Pure functions: no I/O, no ordering requirement on the input.
"""
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from app.models.enums import TradeStatus


@dataclass
class DashboardStats:
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    breakeven_trades: int = 0
    win_rate: float = 0.0            # percentage, 0..100
    total_profit: float = 0.0
    total_loss: float = 0.0          # absolute value
    net_profit_loss: float = 0.0
    average_profit: float = 0.0
    average_loss: float = 0.0
    profit_factor: float = 0.0
    best_trade: Optional[Any] = None
    worst_trade: Optional[Any] = None
    average_risk_reward: str = "0:0"


def parse_risk_reward(value: Optional[str]) -> Optional[tuple[float, float]]:
    """Split a "risk:reward" string once on ':'; None when either side is not a finite number."""
    if not value or ":" not in value:
        return None
    risk_str, reward_str = value.split(":", 1)
    try:
        risk = float(risk_str)
        reward = float(reward_str)
    except ValueError:
        return None
    if not (math.isfinite(risk) and math.isfinite(reward)):
        return None
    return risk, reward


def average_risk_reward(trades: Sequence) -> str:
    parsed = [rr for rr in (parse_risk_reward(t.risk_reward) for t in trades) if rr is not None]
    if not parsed:
        return "0:0"
    avg_risk = sum(r for r, _ in parsed) / len(parsed)
    avg_reward = sum(w for _, w in parsed) / len(parsed)
    return f"{avg_risk:.1f}:{avg_reward:.1f}"


def _first_extreme(trades: Sequence, better) -> Optional[Any]:
    # Left-to-right reduce: a later trade replaces the current pick only when
    # strictly better, so exact ties keep the first one seen.
    pick = None
    for trade in trades:
        if pick is None or better(trade.profit_loss, pick.profit_loss):
            pick = trade
    return pick


def compute_stats(trades: Sequence) -> DashboardStats:
    """Aggregate win rate, P&L, profit factor, best/worst trade and average R:R."""
    stats = DashboardStats()
    stats.total_trades = len(trades)
    if stats.total_trades == 0:
        return stats

    wins = [t for t in trades if t.status == TradeStatus.WIN]
    losses = [t for t in trades if t.status == TradeStatus.LOSS]

    stats.winning_trades = len(wins)
    stats.losing_trades = len(losses)
    stats.breakeven_trades = stats.total_trades - len(wins) - len(losses)
    stats.win_rate = len(wins) / stats.total_trades * 100

    stats.total_profit = sum(t.profit_loss for t in wins)
    stats.total_loss = abs(sum(t.profit_loss for t in losses))
    stats.net_profit_loss = sum(t.profit_loss for t in trades)

    stats.average_profit = stats.total_profit / len(wins) if wins else 0
    stats.average_loss = stats.total_loss / len(losses) if losses else 0

    if stats.total_loss == 0:
        stats.profit_factor = stats.total_profit if stats.total_profit > 0 else 0
    else:
        stats.profit_factor = stats.total_profit / stats.total_loss

    if stats.total_trades == 1:
        only = trades[0]
        if only.profit_loss > 0:
            stats.best_trade = only
        elif only.profit_loss < 0:
            stats.worst_trade = only
    else:
        stats.best_trade = _first_extreme(wins, lambda a, b: a > b)
        stats.worst_trade = _first_extreme(losses, lambda a, b: a < b)

    stats.average_risk_reward = average_risk_reward(trades)
    return stats
