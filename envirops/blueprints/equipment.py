"""Equipment inventory API."""
from flask import Blueprint, jsonify, request

from envirops.blueprints import json_body
from envirops.database import get_session
from envirops.exceptions import ValidationError
from envirops.forms import EquipmentForm
from envirops.models import Equipment, EquipmentStatus
from envirops.models.enums import enum_values
from envirops.services import equipment_service, records

equipment_bp = Blueprint('equipment', __name__, url_prefix='/api/equipment')


@equipment_bp.route('', methods=['GET'])
def list_equipment():
    """List equipment, optionally filtered by ``status`` and ``type``."""
    session = get_session()
    query = records.active_query(Equipment, session)

    status = request.args.get('status', '').strip().upper()
    if status:
        if status not in enum_values(EquipmentStatus):
            raise ValidationError({'status': ['Estado inválido']})
        query = query.filter(Equipment.status == status)

    equipment_type = request.args.get('type', '').strip()
    if equipment_type:
        query = query.filter(Equipment.type == equipment_type)

    items = query.order_by(Equipment.created_at.desc(), Equipment.id.desc()).all()
    return jsonify([equipment.to_dict() for equipment in items])


@equipment_bp.route('', methods=['POST'])
def create_equipment():
    data = json_body(EquipmentForm)
    equipment = equipment_service.create_equipment(data, get_session())
    return jsonify(equipment.to_dict()), 201


@equipment_bp.route('/<int:equipment_id>', methods=['GET'])
def get_equipment(equipment_id):
    equipment = records.get_active(Equipment, equipment_id, get_session(), 'Equipo')
    return jsonify(equipment.to_dict())


@equipment_bp.route('/<int:equipment_id>', methods=['PUT'])
def update_equipment(equipment_id):
    data = json_body(EquipmentForm, partial=True)
    equipment = equipment_service.update_equipment(equipment_id, data, get_session())
    return jsonify(equipment.to_dict())


@equipment_bp.route('/<int:equipment_id>', methods=['DELETE'])
def delete_equipment(equipment_id):
    records.soft_delete(Equipment, equipment_id, get_session(), 'Equipo')
    return jsonify({'success': True})
