"""
Balance arithmetic for trade mutations. Pure functions; persistence lives in
the ledger service.
"""
from typing import Iterable, Optional


def after_create(balance: float, profit_loss: Optional[float]) -> float:
    return balance + (profit_loss or 0.0)


def edit_delta(old_profit_loss: Optional[float], new_profit_loss: Optional[float]) -> float:
    """Balance change for an edit. A missing new value means P&L was not edited."""
    if new_profit_loss is None:
        return 0.0
    return new_profit_loss - (old_profit_loss or 0.0)


def after_edit(balance: float, old_profit_loss: Optional[float], new_profit_loss: Optional[float]) -> float:
    return balance + edit_delta(old_profit_loss, new_profit_loss)


def after_delete(balance: float, profit_loss: Optional[float]) -> float:
    return balance - (profit_loss or 0.0)


def recomputed_balance(initial_balance: float, profit_losses: Iterable[Optional[float]]) -> float:
    return (initial_balance or 0.0) + sum(pl or 0.0 for pl in profit_losses)


def counts_toward_balance(trade_id: int, reset_after_trade_id: Optional[int]) -> bool:
    """Trades created before the last balance reset are history, not balance."""
    return reset_after_trade_id is None or trade_id > reset_after_trade_id
