from enum import Enum


class AccountType(str, Enum):
    DEMO = "Demo"
    LIVE = "Live"
    PROP_FIRM = "Prop Firm"
    OTHER = "Other"


class MarketType(str, Enum):
    FOREX = "Forex"
    STOCKS = "Stocks"
    CRYPTO = "Crypto"
    FUTURES = "Futures"
    OPTIONS = "Options"
    OTHER = "Other"


class TradeType(str, Enum):
    LONG = "Long"
    SHORT = "Short"


class TradeStatus(str, Enum):
    WIN = "Win"
    LOSS = "Loss"
    BREAKEVEN = "Breakeven"
