"""User model - internal staff, assigned as gestor on orders."""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from werkzeug.security import generate_password_hash, check_password_hash
from envirops.database import Base
from envirops.models.mixins import SoftDeleteMixin
from envirops.utils.formatters import as_iso


class User(SoftDeleteMixin, Base):
    """Staff user (gestor / account manager)."""

    __tablename__ = 'app_user'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=True)
    position = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    role = Column(String(50), nullable=True)

    # Relationships
    service_orders = relationship('ServiceOrder', back_populates='gestor')
    purchase_orders = relationship('PurchaseOrder', back_populates='gestor')

    def set_password(self, password):
        """Set password hash."""
        self.password_hash = generate_password_hash(password, method='scrypt')

    def check_password(self, password):
        """Check password against hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        # password_hash is never serialized
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'position': self.position,
            'department': self.department,
            'role': self.role,
            'created_at': as_iso(self.created_at),
            'updated_at': as_iso(self.updated_at),
            'deleted_at': as_iso(self.deleted_at),
        }

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
