"""
Trade record store: the persistence collaborator behind the ledger and the
analytics endpoints. Every query is scoped to one user.
"""
from typing import Optional, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.account import Account
from app.models.trade import Trade


class TradeRecordStore(Protocol):
    def list_trades(self, account_id: int) -> list[Trade]: ...
    def create_trade(self, trade: Trade) -> Trade: ...
    def update_trade(self, trade_id: int, partial: dict) -> Trade: ...
    def delete_trade(self, trade_id: int) -> None: ...
    def update_account_balance(self, account_id: int, new_balance: float) -> None: ...


class LedgerError(Exception):
    pass


class AccountNotFound(LedgerError):
    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class TradeNotFound(LedgerError):
    def __init__(self, trade_id: int):
        super().__init__(f"Trade {trade_id} not found")
        self.trade_id = trade_id


class SqlTradeStore:
    """SQLAlchemy-backed store. Writes are flushed, never committed here."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def get_account(self, account_id: int) -> Account:
        account = (
            self.db.query(Account)
            .filter(Account.id == account_id, Account.user_id == self.user_id)
            .first()
        )
        if not account:
            raise AccountNotFound(account_id)
        return account

    def get_trade(self, trade_id: int) -> Trade:
        trade = (
            self.db.query(Trade)
            .filter(Trade.id == trade_id, Trade.user_id == self.user_id)
            .first()
        )
        if not trade:
            raise TradeNotFound(trade_id)
        return trade

    def last_trade_id(self, account_id: int) -> int:
        last = (
            self.db.query(func.max(Trade.id))
            .filter(Trade.account_id == account_id, Trade.user_id == self.user_id)
            .scalar()
        )
        return last or 0

    def list_trades(self, account_id: int, newest_first: bool = True) -> list[Trade]:
        order = Trade.exit_date.desc() if newest_first else Trade.exit_date.asc()
        return (
            self.db.query(Trade)
            .filter(Trade.account_id == account_id, Trade.user_id == self.user_id)
            .order_by(order, Trade.id)
            .all()
        )

    def create_trade(self, trade: Trade) -> Trade:
        trade.user_id = self.user_id
        self.db.add(trade)
        self.db.flush()
        return trade

    def update_trade(self, trade_id: int, partial: dict) -> Trade:
        trade = self.get_trade(trade_id)
        for key, value in partial.items():
            setattr(trade, key, value)
        self.db.flush()
        return trade

    def delete_trade(self, trade_id: int) -> None:
        self.db.delete(self.get_trade(trade_id))
        self.db.flush()

    def update_account_balance(self, account_id: int, new_balance: float) -> None:
        self.get_account(account_id).balance = new_balance
        self.db.flush()
