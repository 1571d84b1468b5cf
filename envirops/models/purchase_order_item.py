"""PurchaseOrderItem model for purchase order lines."""
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from envirops.database import Base
from envirops.services.totals import line_amount, round2
from envirops.utils.formatters import as_float, as_iso


class PurchaseOrderItem(Base):
    """Purchase order line."""

    __tablename__ = 'purchase_order_item'

    id = Column(Integer, primary_key=True, autoincrement=True)
    purchase_order_id = Column(Integer, ForeignKey('purchase_order.id', ondelete='CASCADE'), nullable=False, index=True)
    code = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Numeric(12, 3), nullable=False)
    days = Column(Integer, nullable=True)
    unit_price = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    purchase_order = relationship('PurchaseOrder', back_populates='items')

    @property
    def line_total(self):
        return round2(line_amount(self))

    def to_dict(self):
        return {
            'id': self.id,
            'purchase_order_id': self.purchase_order_id,
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
        return f"<PurchaseOrderItem(id={self.id}, purchase_order_id={self.purchase_order_id}, code='{self.code}')>"
