"""Quotation model (cotización)."""
from datetime import date, timedelta
from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from envirops.database import Base
from envirops.models.mixins import SoftDeleteMixin
from envirops.utils.formatters import as_float, as_iso


class Quotation(SoftDeleteMixin, Base):
    """
    Quotation (Cotización).

    subtotal / tax / total are stored denormalized and rewritten from the
    item list every time the items are replaced.
    """

    __tablename__ = 'quotation'

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(String(32), nullable=False, unique=True)
    date = Column(Date, nullable=False, default=date.today)
    client_id = Column(Integer, ForeignKey('client.id'), nullable=False)
    currency = Column(String(3), nullable=False, default='PEN')
    equipment_release_date = Column(Date, nullable=True)
    validity_days = Column(Integer, nullable=False, default=15)
    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    tax = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default='DRAFT')
    notes = Column(Text, nullable=True)
    consider_days = Column(Integer, nullable=False, default=1)
    return_date = Column(Date, nullable=True)
    monitoring_location = Column(String(255), nullable=True)
    credit_line = Column(Numeric(14, 2), nullable=True)

    # Relationships
    client = relationship('Client', back_populates='quotations')
    items = relationship(
        'QuotationItem',
        back_populates='quotation',
        cascade='all, delete-orphan',
        order_by='QuotationItem.id'
    )

    @property
    def expires_on(self):
        """Last valid day of the offer."""
        if not self.date:
            return None
        return self.date + timedelta(days=self.validity_days or 0)

    @property
    def is_expired(self):
        """Check if quotation is past its validity (calculated, not stored)."""
        if self.status in ['DRAFT', 'SENT'] and self.expires_on:
            return date.today() > self.expires_on
        return False

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'number': self.number,
            'date': as_iso(self.date),
            'client_id': self.client_id,
            'client': self.client.to_dict() if self.client else None,
            'currency': self.currency,
            'equipment_release_date': as_iso(self.equipment_release_date),
            'validity_days': self.validity_days,
            'expires_on': as_iso(self.expires_on),
            'is_expired': self.is_expired,
            'subtotal': as_float(self.subtotal),
            'tax': as_float(self.tax),
            'total': as_float(self.total),
            'status': self.status,
            'notes': self.notes,
            'consider_days': self.consider_days,
            'return_date': as_iso(self.return_date),
            'monitoring_location': self.monitoring_location,
            'credit_line': as_float(self.credit_line),
            'created_at': as_iso(self.created_at),
            'updated_at': as_iso(self.updated_at),
            'deleted_at': as_iso(self.deleted_at),
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.items]
        return data

    def __repr__(self):
        return f"<Quotation(id={self.id}, number='{self.number}', status='{self.status}', total={self.total})>"
