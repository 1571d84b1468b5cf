"""ServiceOrderItem model for service order lines."""
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from envirops.database import Base
from envirops.services.totals import line_amount, round2
from envirops.utils.formatters import as_float, as_iso


class ServiceOrderItem(Base):
    """Service order line; ``days`` is optional and counts as 1 when missing."""

    __tablename__ = 'service_order_item'

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_order_id = Column(Integer, ForeignKey('service_order.id', ondelete='CASCADE'), nullable=False, index=True)
    code = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Numeric(12, 3), nullable=False)
    days = Column(Integer, nullable=True)
    unit_price = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    service_order = relationship('ServiceOrder', back_populates='items')

    @property
    def line_total(self):
        return round2(line_amount(self))

    def to_dict(self):
        return {
            'id': self.id,
            'service_order_id': self.service_order_id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'quantity': as_float(self.quantity),
            'days': self.days,
            'unit_price': as_float(self.unit_price),
            'line_total': as_float(self.line_total),
            'created_at': as_iso(self.created_at),
        }

    def __repr__(self):
        return f"<ServiceOrderItem(id={self.id}, service_order_id={self.service_order_id}, code='{self.code}')>"
