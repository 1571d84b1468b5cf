"""Clients API."""
from flask import Blueprint, jsonify, current_app

from envirops.blueprints import json_body
from envirops.database import get_session
from envirops.forms import ClientForm
from envirops.models import Client
from envirops.services import client_service, records

clients_bp = Blueprint('clients', __name__, url_prefix='/api/clients')


@clients_bp.route('', methods=['GET'])
def list_clients():
    session = get_session()
    return jsonify([client.to_dict() for client in records.list_active(Client, session)])


@clients_bp.route('', methods=['POST'])
def create_client():
    data = json_body(ClientForm)
    client = client_service.create_client(data, get_session())
    return jsonify(client.to_dict()), 201


@clients_bp.route('/<int:client_id>', methods=['GET'])
def get_client(client_id):
    client = records.get_active(Client, client_id, get_session(), 'Cliente')
    return jsonify(client.to_dict())


@clients_bp.route('/<int:client_id>', methods=['PUT'])
def update_client(client_id):
    data = json_body(ClientForm, partial=True)
    client = client_service.update_client(client_id, data, get_session())
    current_app.logger.info(f"Client {client_id} updated ({', '.join(sorted(data)) or 'no fields'})")
    return jsonify(client.to_dict())


@clients_bp.route('/<int:client_id>', methods=['DELETE'])
def delete_client(client_id):
    records.soft_delete(Client, client_id, get_session(), 'Cliente')
    return jsonify({'success': True})
