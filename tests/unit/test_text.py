"""Tests for text cleanup helpers."""

import pytest

from campus_api.extractors.text import (
    clean_whitespace,
    dmy_sort_key,
    find_dmy_date,
    parse_menu_item,
    split_date_token,
    truncate,
)


class TestSplitDateToken:
    """Day numbers glued to month names get one space."""

    @pytest.mark.parametrize("raw,expected", [
        ("28Şubat", "28 Şubat"),
        ("1Mart", "1 Mart"),
        ("28Şubat Cuma", "28 Şubat Cuma"),
        ("28 Şubat", "28 Şubat"),
        ("2026", "2026"),
    ])
    def test_split(self, raw: str, expected: str):
        """Digits glued to a month name get one space."""
        assert split_date_token(raw) == expected


class TestTruncate:
    """Content fields are capped at 250 characters."""

    def test_long_text_gets_ellipsis(self):
        """Text over the limit is cut and gets an ellipsis."""
        result = truncate("a" * 300)
        assert len(result) == 253
        assert result.endswith("...")
        assert result[:250] == "a" * 250

    def test_exact_limit_untouched(self):
        """Text at the limit is unchanged."""
        text = "b" * 250
        assert truncate(text) == text

    def test_short_text_untouched(self):
        """Short text is unchanged."""
        assert truncate("kısa") == "kısa"


class TestParseMenuItem:
    """Menu lines split into name and calories."""

    @pytest.mark.parametrize("raw,name,calories", [
        ("Mercimek Çorbası 120 Kalori", "Mercimek Çorbası", 120),
        ("Pilav 300 kalori", "Pilav", 300),
        ("Tavuk Sote 2 Porsiyon 450 Kalori", "Tavuk Sote 2 Porsiyon", 450),
        ("Ayran", "Ayran", 0),
        ("Salata 90", "Salata 90", 0),
    ])
    def test_parse(self, raw: str, name: str, calories: int):
        """Menu lines split into name and calories."""
        assert parse_menu_item(raw) == (name, calories)


class TestDates:
    """D.M.YYYY extraction and ordering keys."""

    @pytest.mark.parametrize("text,expected", [
        ("Konferans 05.03.2026 Salı", "05.03.2026"),
        ("12/4/2026", "12.4.2026"),
        ("1-10-2025 saat 10:00", "1.10.2025"),
        ("Tarih yok", ""),
    ])
    def test_find_dmy_date(self, text: str, expected: str):
        """The first D.M.YYYY date is found."""
        assert find_dmy_date(text) == expected

    def test_sort_key_orders_by_year_then_month_then_day(self):
        """Dates sort by year, then month, then day."""
        assert dmy_sort_key("12.04.2026") > dmy_sort_key("05.03.2026")
        assert dmy_sort_key("01.01.2027") > dmy_sort_key("31.12.2026")

    @pytest.mark.parametrize("date", ["", "Mart", "12.04", "aa.bb.cccc"])
    def test_sort_key_unparseable(self, date: str):
        """Unparseable dates have no sort key."""
        assert dmy_sort_key(date) is None


def test_clean_whitespace():
    """Whitespace runs collapse to single spaces."""
    assert clean_whitespace("  Çarşı\n\t Kalkış  ") == "Çarşı Kalkış"
    assert clean_whitespace(None) == ""
