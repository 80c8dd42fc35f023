"""Helfer für Geldbeträge (immer Decimal, nie float)"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """
    Normalisiert numerische Werte zu Decimal.

    None wird zu 0; floats werden über ihre String-Darstellung konvertiert,
    damit keine binären Rundungsartefakte übernommen werden.

    Raises:
        ValueError: Wenn der Wert keine Zahl ist
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    # Dezimalkomma aus Formularen ("1500,50")
    if "," in text and "." not in text:
        text = text.replace(",", ".")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Ungültiger Betrag: {value!r}")


def quantize(value: Decimal) -> Decimal:
    """Rundet kaufmännisch auf zwei Nachkommastellen"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def clamp_deposit(deposit: Decimal, total_value: Decimal) -> Decimal:
    """Anzahlung für Berechnungen auf den Gesamtwert begrenzen"""
    return min(to_decimal(deposit), to_decimal(total_value))


def ratio(part: Decimal, whole: Decimal) -> float:
    """Prozentsatz part/whole (nur für Anzeige)"""
    if not whole:
        return 0.0
    return float(to_decimal(part) / to_decimal(whole) * 100)


def format_currency(value: Optional[Decimal], symbol: str = "R$") -> str:
    """
    Formatiert einen Betrag für Verträge und Exporte, z.B. "R$ 1.234,56".

    Returns:
        Leerer String für None
    """
    if value is None:
        return ""
    amount = quantize(value)
    sign = "-" if amount < 0 else ""
    formatted = f"{abs(amount):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{sign}{symbol} {formatted}"
