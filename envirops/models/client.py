"""Client model."""
from sqlalchemy import Column, Integer, String, Text, Numeric, Date
from sqlalchemy.orm import relationship
from envirops.database import Base
from envirops.models.mixins import SoftDeleteMixin
from envirops.utils.formatters import as_float, as_iso


class Client(SoftDeleteMixin, Base):
    """Client (cliente). Referenced by quotations, service orders and purchase orders."""

    __tablename__ = 'client'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    ruc = Column(String(20), nullable=False)
    address = Column(Text, nullable=False)
    email = Column(String(255), nullable=False)
    contact_person = Column(String(200), nullable=True)
    credit_line = Column(Numeric(14, 2), nullable=True)
    payment_method = Column(String(20), nullable=True)  # EFECTIVO, TRANSFERENCIA, CREDITO
    start_date = Column(Date, nullable=True)

    # Relationships
    quotations = relationship('Quotation', back_populates='client')
    service_orders = relationship('ServiceOrder', back_populates='client')
    purchase_orders = relationship('PurchaseOrder', back_populates='client')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'ruc': self.ruc,
            'address': self.address,
            'email': self.email,
            'contact_person': self.contact_person,
            'credit_line': as_float(self.credit_line),
            'payment_method': self.payment_method,
            'start_date': as_iso(self.start_date),
            'created_at': as_iso(self.created_at),
            'updated_at': as_iso(self.updated_at),
            'deleted_at': as_iso(self.deleted_at),
        }

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}', ruc='{self.ruc}')>"
