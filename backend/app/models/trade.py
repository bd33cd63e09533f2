from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, Text
from sqlalchemy.orm import relationship

from app.core.database import Base


class Trade(Base):
    __tablename__ = "trades"
    # Ids are never reused, so the balance reset watermark stays valid after deletes
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    market = Column(String(20), nullable=False)    # Forex, Stocks, Crypto, Futures, Options, Other
    symbol = Column(String(30), nullable=False)
    type = Column(String(10), nullable=False)      # Long or Short
    status = Column(String(20), nullable=False)    # Win, Loss, Breakeven
    entry_price = Column(Float, nullable=False)
    exit_price = Column(Float, nullable=False)
    stop_loss = Column(Float)
    take_profit = Column(Float)
    size = Column(Float, nullable=False)
    risk_reward = Column(String(30))               # "risk:reward", free text
    profit_loss = Column(Float, nullable=False, default=0.0)
    entry_date = Column(DateTime, nullable=False)
    exit_date = Column(DateTime, nullable=False, index=True)
    notes = Column(Text)
    image_url = Column(String(500))
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    account = relationship("Account", back_populates="trades")
