"""
Datetime Utilities für konsistentes Zeit-Handling

Strategie:
- Timestamps (created_at, updated_at, paid_at): UTC
- Business Dates (Buchungsbeginn, Fälligkeitsdatum): lokale Zeit ohne Zeitzone

Zeiträume für Auswertungen werden immer als geschlossene Intervalle
[Tagesbeginn von start, Tagesende von end] behandelt.
"""
from datetime import datetime, date, time, timedelta, timezone
from typing import Optional, Tuple, Union


def utcnow() -> datetime:
    """
    Gibt die aktuelle UTC-Zeit zurück (timezone-aware).

    Ersetzt datetime.utcnow() (deprecated in Python 3.12).
    """
    return datetime.now(timezone.utc)


def today() -> date:
    """Gibt das aktuelle lokale Datum zurück."""
    return date.today()


def get_utc_timestamp() -> datetime:
    """
    Wrapper für utcnow() zur Verwendung in SQLAlchemy Column defaults.

    Verwendung:
        created_at = Column(DateTime, default=get_utc_timestamp)
    """
    return utcnow()


def start_of_day(value: Union[date, datetime]) -> datetime:
    """Erster Zeitpunkt des Tages (00:00:00)"""
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def end_of_day(value: Union[date, datetime]) -> datetime:
    """Letzter Zeitpunkt des Tages (23:59:59.999999)"""
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.max)


def month_key(value: Union[date, datetime]) -> str:
    """Monatsschlüssel 'YYYY-MM' für Gruppierungen"""
    return value.strftime("%Y-%m")


def add_months(value: date, months: int) -> date:
    """
    Verschiebt ein Datum um n Monate (negativ = zurück).

    Der Tag wird auf den letzten gültigen Tag des Zielmonats begrenzt.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    # Letzter Tag des Zielmonats
    next_month_first = date(year + (month // 12), month % 12 + 1, 1)
    last_day = (next_month_first - timedelta(days=1)).day
    return date(year, month, min(value.day, last_day))


def resolve_period(period: str, reference: Optional[date] = None) -> Tuple[Optional[date], Optional[date]]:
    """
    Übersetzt einen benannten Auswertungszeitraum in (start, end).

    Args:
        period: "month" (laufender Monat), "last3months" (inkl. laufendem Monat),
            "year" (laufendes Jahr) oder "all" (ohne Grenzen)
        reference: Stichtag (default: heute)

    Returns:
        Tuple (start, end); beide None für "all"

    Raises:
        ValueError: Bei unbekanntem Zeitraum
    """
    reference = reference or today()
    month_start = reference.replace(day=1)
    month_end = add_months(month_start, 1) - timedelta(days=1)

    if period == "month":
        return month_start, month_end
    if period == "last3months":
        return add_months(month_start, -2), month_end
    if period == "year":
        return date(reference.year, 1, 1), date(reference.year, 12, 31)
    if period == "all":
        return None, None

    raise ValueError(f"Unbekannter Zeitraum: {period}")


def forecast_window(days: int, reference: Optional[date] = None) -> Tuple[date, date]:
    """Prognosefenster [heute, heute + days]"""
    reference = reference or today()
    return reference, reference + timedelta(days=days)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Business-Zeitpunkt als lokale Zeit ohne Zeitzone.

    Zeitpunkte mit Zeitzone (z.B. '...Z' oder '+02:00') werden in die
    lokale Zeit umgerechnet, naive Werte bleiben unverändert. So lassen
    sich Beginn und Ende immer miteinander vergleichen.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
