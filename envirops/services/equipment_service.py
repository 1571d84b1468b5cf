"""Monitoring equipment inventory."""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from envirops.models import Equipment
from envirops.services import records

logger = logging.getLogger(__name__)

EQUIPMENT_FIELDS = (
    'name', 'type', 'code', 'description', 'components', 'status',
    'is_calibrated', 'calibration_date', 'serial_number', 'observations',
)


def create_equipment(data: Dict[str, Any], session: Session) -> Equipment:
    equipment = Equipment()
    records.apply_fields(equipment, data, EQUIPMENT_FIELDS)
    if equipment.components is None:
        equipment.components = {}
    session.add(equipment)
    records.commit(session, f"equipment {data.get('code')}")
    logger.info(f"Equipment created: {equipment.code} ({equipment.status})")
    return equipment


def update_equipment(equipment_id: int, data: Dict[str, Any], session: Session) -> Equipment:
    """Partial update; ``components`` replaces the whole map when given."""
    equipment = records.get_active(Equipment, equipment_id, session, 'Equipo')
    if 'components' in data and data['components'] is None:
        data = dict(data, components={})
    records.apply_fields(equipment, data, EQUIPMENT_FIELDS)
    records.commit(session, f"equipment {equipment_id}")
    return equipment
