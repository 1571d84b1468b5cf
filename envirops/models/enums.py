"""Status and currency vocabularies shared by models, forms and services."""
import enum


class Currency(str, enum.Enum):
    """Currency label of a document (no conversion is implied)."""
    PEN = "PEN"
    USD = "USD"


class PaymentMethod(str, enum.Enum):
    """Client payment method."""
    EFECTIVO = "EFECTIVO"
    TRANSFERENCIA = "TRANSFERENCIA"
    CREDITO = "CREDITO"


class EquipmentStatus(str, enum.Enum):
    """Physical condition of an inventory item."""
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


class QuotationStatus(str, enum.Enum):
    """Quotation status enum."""
    DRAFT = "DRAFT"
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class ServiceOrderStatus(str, enum.Enum):
    """Service order status enum."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PurchaseOrderStatus(str, enum.Enum):
    """Purchase order status enum."""
    DRAFT = "DRAFT"
    SENT = "SENT"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    RECEIVED = "RECEIVED"


def enum_values(enum_cls):
    """List the raw values of an enum (used for form choices and filters)."""
    return [member.value for member in enum_cls]
