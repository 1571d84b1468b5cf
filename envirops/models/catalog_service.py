"""CatalogService model - predefined services used to prefill line items."""
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from sqlalchemy.sql import func
from envirops.database import Base
from envirops.utils.formatters import as_float, as_iso


class CatalogService(Base):
    """Service offered by the company (monitoreo de aire, ruido, ...)."""

    __tablename__ = 'catalog_service'

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    unit_price = Column(Numeric(14, 2), nullable=False)
    default_quantity = Column(Numeric(12, 3), nullable=False, default=1)
    default_days = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'unit_price': as_float(self.unit_price),
            'default_quantity': as_float(self.default_quantity),
            'default_days': self.default_days,
            'created_at': as_iso(self.created_at),
        }

    def __repr__(self):
        return f"<CatalogService(id={self.id}, code='{self.code}', price={self.unit_price})>"
