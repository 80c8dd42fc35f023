"""Zentrale Validierungs-Funktionen für wiederverwendbare Logik"""
import re
from datetime import date
from typing import Optional


class Validators:
    """Sammlung von wiederverwendbaren Validierungs-Funktionen"""

    # Regex-Pattern als Klassen-Konstanten
    EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    PHONE_PATTERN = r'^\+?[0-9 ()\-/]{6,30}$'

    @staticmethod
    def validate_email(email: Optional[str]) -> Optional[str]:
        """
        Validiert eine E-Mail-Adresse.

        Returns:
            Bereinigte E-Mail (stripped) oder None

        Raises:
            ValueError: Wenn E-Mail ungültig ist
        """
        if email and email.strip():
            if not re.match(Validators.EMAIL_PATTERN, email.strip()):
                raise ValueError("Ungültige E-Mail-Adresse")
            return email.strip()
        return None

    @staticmethod
    def validate_phone(phone: Optional[str]) -> Optional[str]:
        """
        Validiert eine Telefonnummer (Ziffern, Leerzeichen, +()-/).

        Returns:
            Bereinigte Nummer oder None

        Raises:
            ValueError: Wenn die Nummer ungültige Zeichen enthält
        """
        if phone and phone.strip():
            if not re.match(Validators.PHONE_PATTERN, phone.strip()):
                raise ValueError("Ungültige Telefonnummer")
            return phone.strip()
        return None

    @staticmethod
    def validate_required_text(text: str, field_name: str = "Feld") -> str:
        """
        Validiert einen Pflicht-Text (darf nicht leer sein).

        Raises:
            ValueError: Wenn Text leer ist
        """
        if not text or not text.strip():
            raise ValueError(f"{field_name} darf nicht leer sein")
        return text.strip()

    @staticmethod
    def optional_text(text: Optional[str]) -> Optional[str]:
        """Leere Strings aus Formularen zu None"""
        if text is None or not text.strip():
            return None
        return text.strip()

    @staticmethod
    def like_pattern(text: str) -> str:
        """
        Teilstring-Muster für ilike(..., escape="\\").

        % und _ aus der Eingabe werden maskiert und gelten als normale Zeichen.
        """
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped}%"

    @staticmethod
    def validate_range(start: Optional[date], end: Optional[date]) -> None:
        """
        Prüft, dass ein Zeitraum nicht rückwärts läuft.

        Raises:
            ValueError: Wenn end vor start liegt
        """
        if start is not None and end is not None and end < start:
            raise ValueError("Enddatum darf nicht vor dem Startdatum liegen")
