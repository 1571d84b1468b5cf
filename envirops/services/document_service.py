"""
Document service: quotations, service orders and purchase orders.

The three documents share one shape (parent + owned line items + derived
money fields), so every operation takes a ``DocumentKind`` describing the
tables, numbering prefix and status vocabulary of the document.
"""
import logging
from collections import namedtuple
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from envirops.exceptions import NotFoundError, ConflictError, TransactionError, ValidationError
from envirops.models import (
    Client, User,
    Quotation, QuotationItem,
    ServiceOrder, ServiceOrderItem,
    PurchaseOrder, PurchaseOrderItem,
    QuotationStatus, ServiceOrderStatus, PurchaseOrderStatus,
)
from envirops.models.enums import enum_values
from envirops.services import records
from envirops.services.cache_service import invalidate_dashboard
from envirops.services.numbering import next_number_for
from envirops.services.totals import compute_totals

logger = logging.getLogger(__name__)

ITEM_FIELDS = ('code', 'name', 'description', 'quantity', 'days', 'unit_price')

DocumentKind = namedtuple('DocumentKind', [
    'name',           # URL segment
    'label',          # human label used in messages
    'model',
    'item_model',
    'fk',             # item column pointing at the parent
    'prefix',         # numbering prefix
    'status_enum',
    'fields',         # writable parent fields
    'requires_gestor',
])

QUOTATION = DocumentKind(
    name='quotations',
    label='Cotización',
    model=Quotation,
    item_model=QuotationItem,
    fk='quotation_id',
    prefix='COT',
    status_enum=QuotationStatus,
    fields=(
        'number', 'date', 'client_id', 'currency', 'equipment_release_date',
        'validity_days', 'status', 'notes', 'consider_days', 'return_date',
        'monitoring_location', 'credit_line',
    ),
    requires_gestor=False,
)

_ORDER_FIELDS = (
    'number', 'date', 'client_id', 'description', 'currency', 'payment_terms',
    'gestor_id', 'attendant_name', 'comments', 'status',
)

SERVICE_ORDER = DocumentKind(
    name='service-orders',
    label='Orden de servicio',
    model=ServiceOrder,
    item_model=ServiceOrderItem,
    fk='service_order_id',
    prefix='OS',
    status_enum=ServiceOrderStatus,
    fields=_ORDER_FIELDS,
    requires_gestor=True,
)

PURCHASE_ORDER = DocumentKind(
    name='purchase-orders',
    label='Orden de compra',
    model=PurchaseOrder,
    item_model=PurchaseOrderItem,
    fk='purchase_order_id',
    prefix='OC',
    status_enum=PurchaseOrderStatus,
    fields=_ORDER_FIELDS,
    requires_gestor=True,
)

KINDS = {kind.name: kind for kind in (QUOTATION, SERVICE_ORDER, PURCHASE_ORDER)}


def _duplicate_number_message(number: str) -> str:
    return f'Ya existe un documento con el número {number}'


def _build_item(kind: DocumentKind, parent_id: int, data: Dict[str, Any]):
    """Instantiate one line item for ``parent_id`` from validated data."""
    values = {field: data[field] for field in ITEM_FIELDS if data.get(field) is not None}
    values[kind.fk] = parent_id
    return kind.item_model(**values)


def _apply_totals(document, items: List[Dict[str, Any]]) -> None:
    totals = compute_totals(items)
    document.subtotal = totals.subtotal
    document.tax = totals.tax
    document.total = totals.total


def _check_references(kind: DocumentKind, data: Dict[str, Any], session: Session) -> None:
    """Referenced client (and gestor) must exist and not be soft-deleted."""
    if data.get('client_id') is not None:
        records.get_active(Client, data['client_id'], session, 'Cliente')
    if kind.requires_gestor and data.get('gestor_id') is not None:
        records.get_active(User, data['gestor_id'], session, 'Gestor')


def _load(kind: DocumentKind, doc_id: int, session: Session):
    document = (
        records.active_query(kind.model, session)
        .options(selectinload(kind.model.items))
        .filter(kind.model.id == doc_id)
        .first()
    )
    if document is None:
        raise NotFoundError(f'{kind.label} {doc_id} no encontrada')
    return document


def validate_status(kind: DocumentKind, status: str) -> str:
    """Return ``status`` if it belongs to the document's vocabulary."""
    allowed = enum_values(kind.status_enum)
    if status not in allowed:
        raise ValidationError({'status': [f"Estado inválido. Valores permitidos: {', '.join(allowed)}"]})
    return status


def list_documents(kind: DocumentKind, session: Session,
                   status: Optional[str] = None, q: Optional[str] = None):
    """
    Non-deleted documents, newest first.

    Args:
        status: only documents in this status
        q: case-insensitive match on number or client name
    """
    query = records.active_query(kind.model, session).options(selectinload(kind.model.items))
    if status:
        query = query.filter(kind.model.status == validate_status(kind, status))
    if q:
        pattern = f"%{q.strip()}%"
        query = query.join(Client, kind.model.client_id == Client.id).filter(
            or_(kind.model.number.ilike(pattern), Client.name.ilike(pattern))
        )
    return query.order_by(kind.model.date.desc(), kind.model.id.desc()).all()


def get_document(kind: DocumentKind, doc_id: int, session: Session):
    """Document with its items; NotFoundError when missing or soft-deleted."""
    return _load(kind, doc_id, session)


def next_number(kind: DocumentKind, session: Session, today: Optional[date] = None) -> str:
    return next_number_for(kind.model, kind.prefix, session, today)


def create_document(kind: DocumentKind, data: Dict[str, Any], session: Session):
    """
    Create a document with its items in one transaction.

    Money fields are derived from ``data['items']``; a missing number is
    assigned from the numbering sequence.

    Raises:
        NotFoundError: referenced client or gestor missing
        ConflictError: number already used
        TransactionError: database failure (nothing persisted)
    """
    _check_references(kind, data, session)
    if data.get('status') is not None:
        validate_status(kind, data['status'])

    items = data.get('items') or []
    number = data.get('number') or next_number(kind, session)

    if session.query(kind.model.id).filter(kind.model.number == number).first():
        raise ConflictError(_duplicate_number_message(number))

    try:
        document = kind.model()
        records.apply_fields(document, data, kind.fields)
        document.number = number
        _apply_totals(document, items)
        session.add(document)
        session.flush()

        for item_data in items:
            session.add(_build_item(kind, document.id, item_data))

        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Duplicate number creating {kind.name} {number}: {e.orig}")
        raise ConflictError(_duplicate_number_message(number)) from e
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating {kind.name} {number}: {e}")
        raise TransactionError() from e

    invalidate_dashboard()
    logger.info(f"{kind.label} {number} created (id={document.id}, total={document.total})")
    return _load(kind, document.id, session)


def update_document(kind: DocumentKind, doc_id: int, data: Dict[str, Any], session: Session):
    """
    Apply a partial update and, when ``data`` carries ``items``, replace the
    whole item collection.

    Replacing is delete-all then insert-all inside the same transaction:
    any failure restores the previous items and parent fields.

    Raises:
        NotFoundError: missing or soft-deleted document (nothing is touched)
        ConflictError: number already used by another document
        TransactionError: database failure while writing
    """
    document = _load(kind, doc_id, session)
    _check_references(kind, data, session)
    if data.get('status') is not None:
        validate_status(kind, data['status'])

    new_number = data.get('number')
    if new_number and new_number != document.number:
        taken = session.query(kind.model.id).filter(
            kind.model.number == new_number, kind.model.id != doc_id
        ).first()
        if taken:
            raise ConflictError(_duplicate_number_message(new_number))

    try:
        records.apply_fields(document, data, kind.fields)

        if 'items' in data:
            items = data['items'] or []
            fk_column = getattr(kind.item_model, kind.fk)
            session.query(kind.item_model).filter(fk_column == doc_id).delete()
            # Loaded collection still holds the deleted rows
            session.expire(document, ['items'])
            for item_data in items:
                session.add(_build_item(kind, doc_id, item_data))
            _apply_totals(document, items)

        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Integrity error updating {kind.name} {doc_id}: {e.orig}")
        if new_number:
            raise ConflictError(_duplicate_number_message(new_number)) from e
        raise TransactionError() from e
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating {kind.name} {doc_id}: {e}")
        raise TransactionError() from e

    invalidate_dashboard()
    return _load(kind, doc_id, session)


def delete_document(kind: DocumentKind, doc_id: int, session: Session) -> None:
    """Soft delete; a second call raises NotFoundError."""
    document = _load(kind, doc_id, session)
    document.mark_deleted()
    records.commit(session, f"{kind.name} {doc_id}")
    logger.info(f"{kind.label} {document.number} soft-deleted")


def set_status(kind: DocumentKind, doc_id: int, status: str, session: Session):
    """Set any status of the document's vocabulary (no transition graph)."""
    validate_status(kind, status)
    document = _load(kind, doc_id, session)
    previous = document.status
    document.status = status
    records.commit(session, f"{kind.name} {doc_id}")
    logger.info(f"{kind.label} {document.number}: {previous} -> {status}")
    return document


def respond_quotation(doc_id: int, accepted: bool, session: Session):
    """Accept or reject a quotation; only a SENT quotation can be answered."""
    quotation = _load(QUOTATION, doc_id, session)
    if quotation.status != QuotationStatus.SENT.value:
        raise ConflictError(
            f'Solo se puede responder una cotización enviada (estado actual: {quotation.status})'
        )
    target = QuotationStatus.ACCEPTED if accepted else QuotationStatus.REJECTED
    return set_status(QUOTATION, doc_id, target.value, session)
