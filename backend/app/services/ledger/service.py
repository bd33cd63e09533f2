"""
Trade ledger: trade mutations and the matching account balance update,
committed together or not at all.
"""
import logging
from contextlib import contextmanager

from sqlalchemy.orm import Session

from app.models.account import Account
from app.models.trade import Trade
from app.services.ledger import balance as bal
from app.services.ledger.store import LedgerError, SqlTradeStore

logger = logging.getLogger(__name__)


class TradeLedger:

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.store = SqlTradeStore(db, user_id)

    @contextmanager
    def _unit_of_work(self, action: str):
        try:
            yield
            self.db.commit()
        except LedgerError as e:
            self.db.rollback()
            logger.warning("Ledger %s rejected: %s", action, e)
            raise
        except Exception:
            self.db.rollback()
            logger.exception("Ledger %s failed, rolled back", action)
            raise

    def add_trade(self, account_id: int, fields: dict) -> Trade:
        with self._unit_of_work("add_trade"):
            account = self.store.get_account(account_id)
            trade = self.store.create_trade(Trade(account_id=account.id, **fields))
            new_balance = bal.after_create(account.balance, trade.profit_loss)
            self.store.update_account_balance(account.id, new_balance)
        self.db.refresh(trade)
        logger.info("Trade %s added to account %s (balance %+.2f)", trade.id, account_id, trade.profit_loss or 0.0)
        return trade

    def edit_trade(self, trade_id: int, changes: dict) -> Trade:
        changes = dict(changes)
        if changes.get("profit_loss", 0.0) is None:
            changes.pop("profit_loss")
        with self._unit_of_work("edit_trade"):
            trade = self.store.get_trade(trade_id)
            old_profit_loss = trade.profit_loss
            account = self.store.get_account(trade.account_id)
            self.store.update_trade(trade_id, changes)
            previous = account.balance
            if bal.counts_toward_balance(trade.id, account.reset_after_trade_id):
                new_balance = bal.after_edit(previous, old_profit_loss, changes.get("profit_loss"))
                if new_balance != previous:
                    self.store.update_account_balance(account.id, new_balance)
            delta = account.balance - previous
        self.db.refresh(trade)
        logger.info("Trade %s edited (balance %+.2f)", trade_id, delta)
        return trade

    def remove_trade(self, trade_id: int) -> None:
        with self._unit_of_work("remove_trade"):
            trade = self.store.get_trade(trade_id)
            account = self.store.get_account(trade.account_id)
            profit_loss = trade.profit_loss
            if not bal.counts_toward_balance(trade.id, account.reset_after_trade_id):
                profit_loss = 0.0
            self.store.delete_trade(trade_id)
            self.store.update_account_balance(account.id, bal.after_delete(account.balance, profit_loss))
        logger.info("Trade %s removed from account %s (balance %+.2f)", trade_id, account.id, -(profit_loss or 0.0))

    def reset_balance(self, account_id: int, new_balance: float) -> Account:
        """Re-anchor both balance and initial balance; trades up to now stop counting toward it."""
        with self._unit_of_work("reset_balance"):
            account = self.store.get_account(account_id)
            account.reset_after_trade_id = self.store.last_trade_id(account_id)
            account.balance = new_balance
            account.initial_balance = new_balance
        self.db.refresh(account)
        logger.info("Account %s balance reset to %.2f", account_id, new_balance)
        return account

    def reconcile(self, account_id: int) -> tuple[Account, float]:
        """Rebuild the balance from initial balance plus trades since the last reset. Returns (account, previous balance)."""
        with self._unit_of_work("reconcile"):
            account = self.store.get_account(account_id)
            previous = account.balance
            trades = [
                t for t in self.store.list_trades(account_id)
                if bal.counts_toward_balance(t.id, account.reset_after_trade_id)
            ]
            account.balance = bal.recomputed_balance(account.initial_balance, (t.profit_loss for t in trades))
        self.db.refresh(account)
        if account.balance != previous:
            logger.warning("Account %s balance drifted: %.2f -> %.2f", account_id, previous, account.balance)
        return account, previous
