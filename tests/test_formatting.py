"""Tests for the formatting helpers."""

from decimal import Decimal

from app.utils.formatting import format_currency, format_data, format_decimal, format_giorno_mese


def test_format_currency_uses_configured_format(app):
    assert format_currency(Decimal('1234.5')) == 'R$ 1234.50'
    assert format_currency(None) == 'R$ 0.00'
    assert format_currency('abc') == 'R$ 0.00'


def test_format_currency_explicit_format():
    assert format_currency(3, fmt='{:.1f} BRL') == '3.0 BRL'


def test_format_decimal():
    assert format_decimal('2.5') == '2.50'
    assert format_decimal(1, decimals=0) == '1'


def test_dates_are_rendered_without_timezone_shift():
    assert format_data('2025-03-01') == '01/03/2025'
    assert format_data('2025-03-01T00:00:00+00:00') == '01/03/2025'
    assert format_giorno_mese('2025-12-31') == '31/12'
    assert format_data('not-a-date') == ''
