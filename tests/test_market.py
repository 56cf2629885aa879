"""Currency index, quote book and report helpers."""
import threading
import pandas as pd
import pytest
from fx_paths.core.utils import InvalidCurrencyError, parse_instrument, validate_currency_id
from fx_paths.graph.registry import ConverterRegistry
from fx_paths.market.currency_index import CurrencyIndex
from fx_paths.market.quote_book import QuoteBook
from fx_paths.market.report import conversion_matrix, path_table


@pytest.mark.parametrize("raw,expected", [
    ("EUR_USD", ("EUR", "USD")),
    ("eur/usd", ("EUR", "USD")),
    ("GBP-JPY", ("GBP", "JPY")),
])
def test_parse_instrument(raw, expected):
    assert parse_instrument(raw) == expected


@pytest.mark.parametrize("raw", ["EURUSD", "EUR_US", "EUR_USD_JPY", "12_345"])
def test_parse_instrument_rejects_bad_names(raw):
    with pytest.raises(ValueError):
        parse_instrument(raw)


def test_validate_currency_id_is_value_error():
    assert validate_currency_id(5, 10) == 5
    with pytest.raises(ValueError):
        validate_currency_id(10, 10)
    assert issubclass(InvalidCurrencyError, ValueError)


class TestCurrencyIndex:
    def test_sequential_ids(self):
        index = CurrencyIndex()
        assert index.add("EUR") == 0
        assert index.add("usd") == 1
        assert index.add("EUR") == 0
        assert index.id_of("USD") == 1
        assert index.code_of(0) == "EUR"
        assert "usd" in index
        assert len(index) == 2
        assert index.codes == ["EUR", "USD"]

    def test_unknown_code(self):
        with pytest.raises(ValueError, match="Unknown currency"):
            CurrencyIndex().id_of("CHF")

    def test_invalid_code(self):
        with pytest.raises(ValueError):
            CurrencyIndex().add("EURO")

    def test_capacity_exceeded(self):
        index = CurrencyIndex(capacity=2)
        index.add("EUR")
        index.add("USD")
        with pytest.raises(InvalidCurrencyError):
            index.add("JPY")

    def test_code_of_unassigned_id(self):
        with pytest.raises(InvalidCurrencyError):
            CurrencyIndex().code_of(0)


class TestQuoteBook:
    def test_update_and_get(self):
        book = QuoteBook({"eur/usd": 1.08})
        assert book.get("EUR_USD") == 1.08
        assert book.get("GBP_USD") == 0.0
        assert book.instruments == ["EUR_USD"]

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            QuoteBook().update("EUR_USD", -1.0)

    def test_rate_source_follows_updates(self):
        book = QuoteBook({"EUR_USD": 1.08})
        source = book.rate_source("EUR_USD")
        assert source() == 1.08
        book.update("EUR_USD", 1.10)
        assert source() == 1.10
        book.mark_unavailable("EUR_USD")
        assert source() == 0.0
        assert len(book) == 1

    def test_update_from_candles_uses_last_close(self):
        candles = pd.DataFrame(
            {"open": [1.0, 1.1, 1.2], "close": [1.05, 1.15, None]},
            index=pd.date_range("2024-01-01", periods=3, freq="min", tz="UTC")
        )
        book = QuoteBook()
        assert book.update_from_candles("EUR_USD", candles) == 1.15
        assert book.get("EUR_USD") == 1.15

    def test_update_from_candles_without_closes(self):
        book = QuoteBook({"EUR_USD": 1.08})
        empty = pd.DataFrame({"close": pd.Series([], dtype=float)})
        assert book.update_from_candles("EUR_USD", empty) == 0.0
        assert book.get("EUR_USD") == 0.0

    def test_update_from_candles_requires_close(self):
        with pytest.raises(ValueError):
            QuoteBook().update_from_candles("EUR_USD", pd.DataFrame({"open": [1.0]}))

    def test_build_rates_registers_currencies(self):
        book = QuoteBook({"EUR_USD": 2.0, "USD_JPY": 100.0})
        index = CurrencyIndex()
        rates = book.build_rates(index)
        assert index.codes == ["EUR", "USD", "JPY"]
        assert [(r.from_id, r.to_id) for r in rates] == [(0, 1), (1, 2)]
        assert rates[1].rate_fn() == 100.0

    def test_concurrent_updates(self):
        book = QuoteBook()

        def writer(offset):
            for i in range(200):
                book.update("EUR_USD", offset + i)

        threads = [threading.Thread(target=writer, args=(k * 1000,)) for k in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(book) == 1

    def test_live_conversion_through_book(self, converter_type):
        book = QuoteBook({"EUR_USD": 2.0, "USD_JPY": 100.0})
        index = CurrencyIndex(capacity=8)
        converter = ConverterRegistry.create(converter_type, capacity=8)
        converter.init(book.build_rates(index))

        eur, jpy = index.id_of("EUR"), index.id_of("JPY")
        assert converter.convert(1.0, eur, jpy) == 200.0
        book.update("USD_JPY", 150.0)
        assert converter.convert(1.0, eur, jpy) == 300.0
        book.mark_unavailable("EUR_USD")
        assert converter.convert(1.0, jpy, eur) == 0.0


class TestReport:
    @pytest.fixture
    def built(self, converter_type):
        book = QuoteBook({"EUR_USD": 2.0, "USD_JPY": 100.0, "NZD_AUD": 0.5})
        index = CurrencyIndex(capacity=8)
        converter = ConverterRegistry.create(converter_type, capacity=8)
        converter.init(book.build_rates(index))
        return converter, index

    def test_conversion_matrix(self, built):
        converter, index = built
        matrix = conversion_matrix(converter, index, ["EUR", "USD", "JPY", "AUD"], amount=10.0)
        assert list(matrix.index) == ["EUR", "USD", "JPY", "AUD"]
        assert matrix.loc["EUR", "JPY"] == 2000.0
        assert matrix.loc["JPY", "EUR"] == pytest.approx(0.05)
        assert matrix.loc["EUR", "EUR"] == 10.0
        assert matrix.loc["EUR", "AUD"] == 0.0

    def test_conversion_matrix_defaults_to_all_codes(self, built):
        converter, index = built
        assert conversion_matrix(converter, index).shape == (5, 5)

    def test_path_table(self, built):
        converter, index = built
        table = path_table(converter, index, [("EUR", "JPY"), ("EUR", "AUD")])
        assert table.loc[0, "hops"] == 2
        assert table.loc[0, "route"] == "EUR → USD → JPY"
        assert table.loc[0, "rate"] == 200.0
        assert table.loc[1, "hops"] == -1
        assert table.loc[1, "route"] == ""
        assert table.loc[1, "rate"] == 0.0
