"""ServiceOrder model (orden de servicio)."""
from datetime import date
from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from envirops.database import Base
from envirops.models.mixins import SoftDeleteMixin
from envirops.utils.formatters import as_float, as_iso


class ServiceOrder(SoftDeleteMixin, Base):
    """Service order executed for a client and managed by a gestor."""

    __tablename__ = 'service_order'

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(String(32), nullable=False, unique=True)
    date = Column(Date, nullable=False, default=date.today)
    client_id = Column(Integer, ForeignKey('client.id'), nullable=False)
    description = Column(Text, nullable=True)
    currency = Column(String(3), nullable=False, default='PEN')
    payment_terms = Column(String(255), nullable=True)
    gestor_id = Column(Integer, ForeignKey('app_user.id'), nullable=False)
    attendant_name = Column(String(200), nullable=True)
    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    tax = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    comments = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default='PENDING')

    # Relationships
    client = relationship('Client', back_populates='service_orders')
    gestor = relationship('User', back_populates='service_orders')
    items = relationship(
        'ServiceOrderItem',
        back_populates='service_order',
        cascade='all, delete-orphan',
        order_by='ServiceOrderItem.id'
    )

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'number': self.number,
            'date': as_iso(self.date),
            'client_id': self.client_id,
            'client': self.client.to_dict() if self.client else None,
            'description': self.description,
            'currency': self.currency,
            'payment_terms': self.payment_terms,
            'gestor_id': self.gestor_id,
            'gestor': self.gestor.to_dict() if self.gestor else None,
            'attendant_name': self.attendant_name,
            'subtotal': as_float(self.subtotal),
            'tax': as_float(self.tax),
            'total': as_float(self.total),
            'comments': self.comments,
            'status': self.status,
            'created_at': as_iso(self.created_at),
            'updated_at': as_iso(self.updated_at),
            'deleted_at': as_iso(self.deleted_at),
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.items]
        return data

    def __repr__(self):
        return f"<ServiceOrder(id={self.id}, number='{self.number}', status='{self.status}', total={self.total})>"
