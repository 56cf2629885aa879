"""
Live instrument prices exposed as rate sources for the path engines.
"""
import threading
import logging
from typing import Dict, List, Optional
import pandas as pd
from fx_paths.core.utils import parse_instrument
from fx_paths.graph.rates import ConvertRate, RateFn
from fx_paths.market.currency_index import CurrencyIndex

logger = logging.getLogger(__name__)


class QuoteBook:
    """
    Thread-safe store of the latest price per instrument.

    Instrument prices are used as implied exchange rates:
      EUR_USD = 1.0800 means 1 EUR = 1.0800 USD

    rate_source() hands out closures that read the book on every call, so a
    converter built once keeps following price updates. Missing or
    unavailable instruments read as 0.0.
    """

    def __init__(self, prices: Optional[Dict[str, float]] = None):
        self._prices: Dict[str, float] = {}
        self._lock = threading.RLock()
        if prices:
            self.update_many(prices)

    def __len__(self) -> int:
        with self._lock:
            return len(self._prices)

    @property
    def instruments(self) -> List[str]:
        with self._lock:
            return list(self._prices.keys())

    def update(self, instrument: str, price: float):
        """Set latest price for instrument (e.g. "EUR_USD")"""
        key = self._key(instrument)
        price = float(price)
        if price < 0:
            raise ValueError(f"Price must be non-negative: {instrument} = {price}")

        with self._lock:
            self._prices[key] = price
        logger.debug(f"Quote {key} = {price:.5f}")

    def update_many(self, prices: Dict[str, float]):
        for instrument, price in prices.items():
            self.update(instrument, price)

    def update_from_candles(self, instrument: str, candles: pd.DataFrame) -> float:
        """
        Take the last close of a candle DataFrame as the current price.

        Expects the OANDA candle layout: DatetimeIndex + 'close' column.
        """
        if 'close' not in candles.columns:
            raise ValueError(f"Missing 'close' column in {instrument} candles")

        closes = candles['close'].dropna()
        if closes.empty:
            logger.warning(f"No closes for {instrument}, marking unavailable")
            self.mark_unavailable(instrument)
            return 0.0

        price = float(closes.iloc[-1])
        self.update(instrument, price)
        return price

    def mark_unavailable(self, instrument: str):
        """Keep instrument in the book but report 0.0 until next update"""
        key = self._key(instrument)
        with self._lock:
            self._prices[key] = 0.0
        logger.info(f"Quote {key} marked unavailable")

    def get(self, instrument: str) -> float:
        key = self._key(instrument)
        with self._lock:
            return self._prices.get(key, 0.0)

    def rate_source(self, instrument: str) -> RateFn:
        """Closure returning the live price of instrument"""
        key = self._key(instrument)

        def _live_rate() -> float:
            return self.get(key)

        _live_rate.__name__ = f"rate_{key}"
        return _live_rate

    def build_rates(self, index: CurrencyIndex) -> List[ConvertRate]:
        """
        One ConvertRate per known instrument, registering currencies in index.

        EUR_USD → ConvertRate(index.add("EUR"), index.add("USD"), live EUR_USD)
        """
        rates = []
        for instrument in self.instruments:
            base_ccy, quote_ccy = parse_instrument(instrument)
            rates.append(ConvertRate(
                from_id=index.add(base_ccy),
                to_id=index.add(quote_ccy),
                rate_fn=self.rate_source(instrument)
            ))
        logger.info(f"Built {len(rates)} rate(s) across {len(index)} currencies")
        return rates

    @staticmethod
    def _key(instrument: str) -> str:
        base_ccy, quote_ccy = parse_instrument(instrument)
        return f"{base_ccy}_{quote_ccy}"
