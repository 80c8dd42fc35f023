"""Geschlossene Wertebereiche für Kategorien und Status-Felder"""
import enum

from sqlalchemy import Enum as SAEnum


class EventCategory(str, enum.Enum):
    """Art des Kalendereintrags: Buchung, Besichtigung oder Angebot"""
    EVENT = "event"
    VISIT = "visit"
    PROPOSAL = "proposal"


class EventStatus(str, enum.Enum):
    CONFIRMING = "confirming"
    RESERVED = "reserved"
    AVAILABLE = "available"
    VISIT_SCHEDULED = "visit_scheduled"
    VISIT_DONE = "visit_done"
    VISIT_CANCELLED = "visit_cancelled"
    PROPOSAL_PENDING = "proposal_pending"
    PROPOSAL_SENT = "proposal_sent"
    PROPOSAL_CANCELLED = "proposal_cancelled"


# Erlaubte Status je Kategorie
EVENT_STATUSES_BY_CATEGORY = {
    EventCategory.EVENT: {EventStatus.CONFIRMING, EventStatus.RESERVED, EventStatus.AVAILABLE},
    EventCategory.VISIT: {EventStatus.VISIT_SCHEDULED, EventStatus.VISIT_DONE, EventStatus.VISIT_CANCELLED},
    EventCategory.PROPOSAL: {
        EventStatus.PROPOSAL_PENDING,
        EventStatus.PROPOSAL_SENT,
        EventStatus.PROPOSAL_CANCELLED,
    },
}

DEFAULT_EVENT_STATUS = {
    EventCategory.EVENT: EventStatus.CONFIRMING,
    EventCategory.VISIT: EventStatus.VISIT_SCHEDULED,
    EventCategory.PROPOSAL: EventStatus.PROPOSAL_PENDING,
}


class PaymentStatus(str, enum.Enum):
    """Abgeleiteter Zahlungsstatus einer Buchung"""
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class ContractStatus(str, enum.Enum):
    PENDING = "pending"
    SENT = "sent"
    SIGNED = "signed"


class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, enum.Enum):
    PAID = "paid"
    PENDING = "pending"


class TransactionCategory(str, enum.Enum):
    """
    Geschäftskategorien für manuelle Buchungen.

    Die Werte sind fest und müssen exakt so bleiben (Austausch mit anderen Systemen).
    """
    # Einnahmen
    EVENT_PAYMENT = "event_payment"
    DEPOSIT = "deposit"
    RENTAL = "rental"
    RENTAL_INSTALLMENT = "rental_installment"
    OTHER_INCOME = "other_income"
    # Ausgaben
    SERVICE_COST = "service_cost"
    MAINTENANCE = "maintenance"
    SUPPLIES = "supplies"
    UTILITIES = "utilities"
    PROFESSIONAL_PAYMENT = "professional_payment"
    CLEANING = "cleaning"
    OTHER_EXPENSE = "other_expense"


INCOME_CATEGORIES = frozenset({
    TransactionCategory.EVENT_PAYMENT,
    TransactionCategory.DEPOSIT,
    TransactionCategory.RENTAL,
    TransactionCategory.RENTAL_INSTALLMENT,
    TransactionCategory.OTHER_INCOME,
})

EXPENSE_CATEGORIES = frozenset({
    TransactionCategory.SERVICE_COST,
    TransactionCategory.MAINTENANCE,
    TransactionCategory.SUPPLIES,
    TransactionCategory.UTILITIES,
    TransactionCategory.PROFESSIONAL_PAYMENT,
    TransactionCategory.CLEANING,
    TransactionCategory.OTHER_EXPENSE,
})

# Operative Servicekosten, die in der Prognose gesondert ausgewiesen werden
SERVICE_PENDING_CATEGORIES = frozenset({
    TransactionCategory.SERVICE_COST,
    TransactionCategory.PROFESSIONAL_PAYMENT,
    TransactionCategory.CLEANING,
})

CATEGORIES_BY_TYPE = {
    TransactionType.INCOME: INCOME_CATEGORIES,
    TransactionType.EXPENSE: EXPENSE_CATEGORIES,
}

CATEGORY_LABELS = {
    TransactionCategory.EVENT_PAYMENT: "Zahlung Veranstaltung",
    TransactionCategory.DEPOSIT: "Anzahlung",
    TransactionCategory.RENTAL: "Miete",
    TransactionCategory.RENTAL_INSTALLMENT: "Mietrate",
    TransactionCategory.OTHER_INCOME: "Sonstige Einnahmen",
    TransactionCategory.SERVICE_COST: "Servicekosten",
    TransactionCategory.MAINTENANCE: "Instandhaltung",
    TransactionCategory.SUPPLIES: "Material",
    TransactionCategory.UTILITIES: "Nebenkosten",
    TransactionCategory.PROFESSIONAL_PAYMENT: "Honorar Dienstleister",
    TransactionCategory.CLEANING: "Reinigung",
    TransactionCategory.OTHER_EXPENSE: "Sonstige Ausgaben",
}


class ServiceTaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


OPEN_SERVICE_TASK_STATUSES = (ServiceTaskStatus.PENDING, ServiceTaskStatus.IN_PROGRESS)


def enum_type(enum_cls, length: int = 30) -> SAEnum:
    """
    SQLAlchemy-Spaltentyp für ein str-Enum.

    Speichert den Wert (nicht den Namen) als VARCHAR, damit die Datenbank
    lesbar bleibt und keine nativen Enum-Typen benötigt werden.
    """
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=length,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )
