"""Staff users API."""
from flask import Blueprint, jsonify

from envirops.blueprints import json_body
from envirops.database import get_session
from envirops.forms import UserForm
from envirops.models import User
from envirops.services import records, user_service

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


@users_bp.route('', methods=['GET'])
def list_users():
    session = get_session()
    return jsonify([user.to_dict() for user in records.list_active(User, session)])


@users_bp.route('', methods=['POST'])
def create_user():
    data = json_body(UserForm)
    user = user_service.create_user(data, get_session())
    return jsonify(user.to_dict()), 201


@users_bp.route('/<int:user_id>', methods=['GET'])
def get_user(user_id):
    user = records.get_active(User, user_id, get_session(), 'Usuario')
    return jsonify(user.to_dict())


@users_bp.route('/<int:user_id>', methods=['PUT'])
def update_user(user_id):
    data = json_body(UserForm, partial=True)
    user = user_service.update_user(user_id, data, get_session())
    return jsonify(user.to_dict())


@users_bp.route('/<int:user_id>', methods=['DELETE'])
def delete_user(user_id):
    records.soft_delete(User, user_id, get_session(), 'Usuario')
    return jsonify({'success': True})
