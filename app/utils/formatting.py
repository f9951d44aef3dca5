from flask import current_app
from app.services import split_iso_date

FORMATO_VALUTA_DEFAULT = 'R$ {:.2f}'


def format_currency(value, fmt=None):
    """Formatta un valore numerico usando il formato definito in `FORMATO_VALUTA`."""
    if fmt is None:
        fmt = current_app.config.get('FORMATO_VALUTA', FORMATO_VALUTA_DEFAULT) if current_app else FORMATO_VALUTA_DEFAULT

    # normalize value
    try:
        val = 0.0 if value is None else float(value)
    except (TypeError, ValueError):
        val = 0.0

    return fmt.format(val)


def format_decimal(value, decimals=2):
    """Format a numeric value as a plain decimal string with fixed decimals.

    Useful for exports that expect a plain numeric string (e.g. "123.45")
    rather than a localized currency string.
    """
    try:
        v = 0.0 if value is None else float(value)
    except (TypeError, ValueError):
        v = 0.0
    return f"{v:.{int(decimals)}f}"


def format_data(value):
    """'2025-03-15' -> '15/03/2025', senza conversioni di fuso orario; '' se non valida"""
    parti = split_iso_date(value)
    if parti is None:
        return ''
    anno, mese, giorno = parti
    return f'{giorno:02d}/{mese:02d}/{anno:04d}'


def format_giorno_mese(value):
    """'2025-03-15' -> '15/03' (intestazioni dei gruppi per giorno)"""
    parti = split_iso_date(value)
    if parti is None:
        return ''
    return f'{parti[2]:02d}/{parti[1]:02d}'
