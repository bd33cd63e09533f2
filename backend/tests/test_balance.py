from datetime import datetime

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.models.account import Account
from app.models.user import User
from app.services.ledger import balance as bal
from app.services.ledger.service import TradeLedger
from app.services.ledger.store import AccountNotFound, TradeNotFound


def test_pure_balance_updates():
    assert bal.after_create(1000, 75) == 1075
    assert bal.after_delete(1075, 75) == 1000
    assert bal.edit_delta(50, -20) == -70
    assert bal.after_edit(1000, 50, -20) == 930
    assert bal.edit_delta(50, None) == 0
    assert bal.recomputed_balance(1000, [100, -50, None, 25]) == 1075


@pytest.fixture
def owner(db):
    user = User(email="ledger@example.com", password_hash="x")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def ledger_account(db, owner):
    account = Account(user_id=owner.id, name="Ledger", type="Demo", balance=1000, initial_balance=1000)
    db.add(account)
    db.commit()
    return account


@pytest.fixture
def ledger(db, owner):
    return TradeLedger(db, owner.id)


def trade_fields(profit_loss, **kw):
    fields = dict(
        market="Stocks", symbol="AAPL", type="Long", status="Win",
        entry_price=100.0, exit_price=101.0, size=10.0, profit_loss=profit_loss,
        entry_date=datetime(2024, 6, 3, 10), exit_date=datetime(2024, 6, 3, 15),
    )
    fields.update(kw)
    return fields


def test_add_then_delete_restores_balance(db, ledger, ledger_account):
    trade = ledger.add_trade(ledger_account.id, trade_fields(75))
    db.refresh(ledger_account)
    assert ledger_account.balance == 1075

    ledger.remove_trade(trade.id)
    db.refresh(ledger_account)
    assert ledger_account.balance == 1000


def test_edit_applies_difference(db, ledger, ledger_account):
    trade = ledger.add_trade(ledger_account.id, trade_fields(50))
    ledger.edit_trade(trade.id, {"profit_loss": -20, "status": "Loss"})
    db.refresh(ledger_account)
    assert ledger_account.balance == 1000 + 50 - 70


def test_edit_without_profit_loss_leaves_balance(db, ledger, ledger_account):
    trade = ledger.add_trade(ledger_account.id, trade_fields(50))
    edited = ledger.edit_trade(trade.id, {"notes": "moved stop", "profit_loss": None})
    db.refresh(ledger_account)
    assert ledger_account.balance == 1050
    assert edited.profit_loss == 50
    assert edited.notes == "moved stop"


def test_unknown_account_and_trade(ledger):
    with pytest.raises(AccountNotFound):
        ledger.add_trade(999, trade_fields(10))
    with pytest.raises(TradeNotFound):
        ledger.edit_trade(999, {"profit_loss": 1})
    with pytest.raises(TradeNotFound):
        ledger.remove_trade(999)


def test_other_users_account_is_invisible(db, ledger_account):
    stranger = User(email="other@example.com", password_hash="x")
    db.add(stranger)
    db.commit()
    with pytest.raises(AccountNotFound):
        TradeLedger(db, stranger.id).add_trade(ledger_account.id, trade_fields(10))


def test_failed_balance_write_rolls_back_trade(db, ledger, ledger_account, monkeypatch):
    def boom(account_id, new_balance):
        raise SQLAlchemyError("balance write failed")

    monkeypatch.setattr(ledger.store, "update_account_balance", boom)
    with pytest.raises(SQLAlchemyError):
        ledger.add_trade(ledger_account.id, trade_fields(75))

    db.refresh(ledger_account)
    assert ledger_account.balance == 1000
    assert ledger.store.list_trades(ledger_account.id) == []


def test_reset_balance_moves_anchor(db, ledger, ledger_account):
    ledger.add_trade(ledger_account.id, trade_fields(200))
    account = ledger.reset_balance(ledger_account.id, 5000)
    assert account.balance == 5000
    assert account.initial_balance == 5000


def test_reconcile_repairs_drift(db, ledger, ledger_account):
    ledger.add_trade(ledger_account.id, trade_fields(100))
    ledger.add_trade(ledger_account.id, trade_fields(-30, status="Loss"))
    ledger_account.balance = 1
    db.commit()

    account, previous = ledger.reconcile(ledger_account.id)
    assert previous == 1
    assert account.balance == 1070


def test_counts_toward_balance_watermark():
    assert bal.counts_toward_balance(3, None)
    assert not bal.counts_toward_balance(3, 3)
    assert bal.counts_toward_balance(4, 3)


def test_reconcile_after_reset_ignores_earlier_trades(db, ledger, ledger_account):
    ledger.add_trade(ledger_account.id, trade_fields(200))
    ledger.reset_balance(ledger_account.id, 5000)
    ledger.add_trade(ledger_account.id, trade_fields(-40, status="Loss"))

    account, previous = ledger.reconcile(ledger_account.id)
    assert previous == 4960
    assert account.balance == 4960


def test_trades_before_reset_no_longer_move_balance(db, ledger, ledger_account):
    old = ledger.add_trade(ledger_account.id, trade_fields(200))
    ledger.reset_balance(ledger_account.id, 5000)

    ledger.edit_trade(old.id, {"profit_loss": 50})
    db.refresh(ledger_account)
    assert ledger_account.balance == 5000

    ledger.remove_trade(old.id)
    db.refresh(ledger_account)
    assert ledger_account.balance == 5000

    # ids keep climbing past the deleted watermark trade
    new = ledger.add_trade(ledger_account.id, trade_fields(30))
    assert new.id > old.id
    db.refresh(ledger_account)
    assert ledger_account.balance == 5030
    account, _ = ledger.reconcile(ledger_account.id)
    assert account.balance == 5030
