"""Service catalog API."""
from flask import Blueprint, jsonify

from envirops.blueprints import json_body
from envirops.database import get_session
from envirops.forms import ServiceForm
from envirops.services import catalog_service

services_bp = Blueprint('services', __name__, url_prefix='/api/services')


@services_bp.route('', methods=['GET'])
def list_services():
    return jsonify([service.to_dict() for service in catalog_service.list_services(get_session())])


@services_bp.route('', methods=['POST'])
def create_service():
    data = json_body(ServiceForm)
    service = catalog_service.create_service(data, get_session())
    return jsonify(service.to_dict()), 201
