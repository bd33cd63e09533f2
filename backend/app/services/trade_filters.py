from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Sequence


@dataclass
class TradeFilter:
    search: Optional[str] = None    # symbol or notes, case-insensitive substring
    market: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    start: Optional[date] = None    # exit date on or after, from midnight
    end: Optional[date] = None      # exit date on or before, through the end of that day

    def matches(self, trade) -> bool:
        if self.search:
            needle = self.search.lower()
            if needle not in (trade.symbol or "").lower() and needle not in (trade.notes or "").lower():
                return False
        if self.market and trade.market != self.market:
            return False
        if self.type and trade.type != self.type:
            return False
        if self.status and trade.status != self.status:
            return False
        if self.start and trade.exit_date < datetime.combine(self.start, time.min):
            return False
        if self.end and trade.exit_date > datetime.combine(self.end, time.max):
            return False
        return True


def filter_trades(trades: Sequence, flt: TradeFilter) -> list:
    return [t for t in trades if flt.matches(t)]
