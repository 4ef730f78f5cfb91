from __future__ import annotations

from table_browser.config.model import FormatType
from table_browser.core.compare import collation_key, compare_values, date_key, parse_float, parse_numeric


def test_parse_float_reads_leading_number():
    assert parse_float("12.5kg") == 12.5
    assert parse_float("-3") == -3.0
    assert parse_float(".5") == 0.5
    assert parse_float("1e3") == 1000.0
    assert parse_float("abc") is None
    assert parse_float("") is None
    assert parse_float(None) is None


def test_parse_numeric_ignores_symbols_and_separators():
    assert parse_numeric("USD 1,234.5") == 1234.5
    assert parse_numeric("$999") == 999.0
    assert parse_numeric("n/a") is None


def test_numbers_compare_numerically_not_lexically():
    assert compare_values("10", "9", FormatType.NUMBER) > 0
    assert compare_values("9", "10", FormatType.NUMBER) < 0
    assert compare_values("7", "7.0", FormatType.NUMBER) == 0


def test_currency_strips_symbols():
    assert compare_values("$1,200.50", "$999", FormatType.CURRENCY) > 0
    assert compare_values("$1,200.50", "$999", FormatType.CURRENCY) == 201.5


def test_non_numeric_falls_back_to_text_comparison():
    assert compare_values("abc", "5", FormatType.NUMBER) > 0
    assert compare_values("", "5", FormatType.NUMBER) < 0
    assert compare_values("n/a", "N/A", FormatType.NUMBER) < 0


def test_dates_compare_chronologically():
    assert compare_values("2020-01-02", "2020-01-01", FormatType.DATE) > 0
    assert compare_values("2019-12-31", "2020-01-01", FormatType.DATE) < 0
    assert compare_values("2020-01-01", "2020-01-01", FormatType.DATE) == 0


def test_unparseable_dates_are_the_epoch():
    assert date_key("not a date") == 0
    assert date_key("") == 0
    assert date_key(None) == 0
    assert compare_values("not a date", "1970-01-01", FormatType.DATE) == 0
    assert compare_values("garbage", "2000-01-01", FormatType.DATE) < 0


def test_text_is_the_default_and_does_not_fold_case():
    assert compare_values("apple", "banana") < 0
    assert compare_values("apple", "apple") == 0
    assert compare_values("Apple", "apple", FormatType.TEXT) > 0
    assert compare_values(None, "a") < 0


def test_text_collates_case_insensitively_first():
    words = ["cherry", "Banana", "apple", "éclair", "eclair", "Apple"]
    assert sorted(words, key=collation_key) == ["apple", "Apple", "Banana", "cherry", "eclair", "éclair"]
    assert compare_values("apple", "Banana") < 0
    assert compare_values("Zebra", "ant") > 0


def test_dates_outside_nanosecond_range_do_not_raise():
    for text in ("1500-06-01", "0001-01-01", "1677-09-21", "2262-04-12", "9999-12-31", "Jan 5"):
        assert isinstance(date_key(text), int)

    assert date_key("1500-06-01") <= 0
    assert date_key("9999-12-31") >= 0
    assert compare_values("1500-06-01", "2024-01-05", FormatType.DATE) < 0
    assert compare_values("2024-01-05", "1500-06-01", FormatType.DATE) > 0


def test_date_key_keeps_order_within_range():
    assert date_key("1970-01-01") == 0
    assert date_key("1970-01-01T00:00:01") == 1_000_000
    assert date_key("1969-12-31") < 0
