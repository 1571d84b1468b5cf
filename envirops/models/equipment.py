"""Equipment model for the monitoring inventory."""
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, JSON
from envirops.database import Base
from envirops.models.mixins import SoftDeleteMixin
from envirops.utils.formatters import as_iso


class Equipment(SoftDeleteMixin, Base):
    """
    Equipment (equipo de monitoreo).

    ``components`` is a free-form name -> description map
    (e.g. {"sensor": "PM10", "trípode": "aluminio"}).
    """

    __tablename__ = 'equipment'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    type = Column(String(100), nullable=False)
    code = Column(String(64), nullable=False)
    description = Column(Text, nullable=False)
    components = Column(JSON, nullable=False, default=dict)
    status = Column(String(10), nullable=False, default='GOOD')
    is_calibrated = Column(Boolean, nullable=False, default=False)
    calibration_date = Column(Date, nullable=True)
    serial_number = Column(String(100), nullable=True)
    observations = Column(Text, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'code': self.code,
            'description': self.description,
            'components': dict(self.components or {}),
            'status': self.status,
            'is_calibrated': bool(self.is_calibrated),
            'calibration_date': as_iso(self.calibration_date),
            'serial_number': self.serial_number,
            'observations': self.observations,
            'created_at': as_iso(self.created_at),
            'updated_at': as_iso(self.updated_at),
            'deleted_at': as_iso(self.deleted_at),
        }

    def __repr__(self):
        return f"<Equipment(id={self.id}, code='{self.code}', status='{self.status}')>"
