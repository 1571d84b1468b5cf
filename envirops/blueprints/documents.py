"""
Quotations, service orders and purchase orders API.

The three documents expose the same routes, so their blueprints are built by
``create_document_blueprint``; quotations add the accept / reject actions.
"""
from flask import Blueprint, jsonify, request, current_app, send_file

from envirops.blueprints import json_body
from envirops.database import get_session
from envirops.forms import QuotationForm, ServiceOrderForm, PurchaseOrderForm, StatusForm
from envirops.services import document_service
from envirops.services.document_service import QUOTATION, SERVICE_ORDER, PURCHASE_ORDER
from envirops.services.pdf_service import render_document_pdf


def company_info():
    """Company block printed on every document."""
    config = current_app.config
    return {
        'name': config.get('COMPANY_NAME'),
        'ruc': config.get('COMPANY_RUC'),
        'address': config.get('COMPANY_ADDRESS'),
        'email': config.get('COMPANY_EMAIL'),
        'phone': config.get('COMPANY_PHONE'),
    }


def create_document_blueprint(kind, form_class, endpoint_name):
    """Blueprint with list / create / next-number / read / update / delete / status / pdf routes."""
    bp = Blueprint(endpoint_name, __name__, url_prefix=f'/api/{kind.name}')

    @bp.route('', methods=['GET'])
    def list_documents():
        """List documents; ``status`` and ``q`` (number or client name) filter the result."""
        documents = document_service.list_documents(
            kind, get_session(),
            status=request.args.get('status', '').strip().upper() or None,
            q=request.args.get('q', '').strip() or None,
        )
        return jsonify([document.to_dict() for document in documents])

    @bp.route('', methods=['POST'])
    def create_document():
        data = json_body(form_class)
        if kind is QUOTATION:
            data.setdefault('validity_days', current_app.config.get('QUOTATION_VALID_DAYS', 15))
        document = document_service.create_document(kind, data, get_session())
        return jsonify(document.to_dict()), 201

    @bp.route('/next-number', methods=['GET'])
    def next_number():
        return jsonify({'next_number': document_service.next_number(kind, get_session())})

    @bp.route('/<int:doc_id>', methods=['GET'])
    def get_document(doc_id):
        document = document_service.get_document(kind, doc_id, get_session())
        return jsonify(document.to_dict())

    @bp.route('/<int:doc_id>', methods=['PUT'])
    def update_document(doc_id):
        data = json_body(form_class, partial=True)
        document = document_service.update_document(kind, doc_id, data, get_session())
        items_note = f" ({len(data['items'])} items)" if 'items' in data else ''
        current_app.logger.info(f"{kind.label} {doc_id} updated{items_note}")
        return jsonify(document.to_dict())

    @bp.route('/<int:doc_id>', methods=['DELETE'])
    def delete_document(doc_id):
        document_service.delete_document(kind, doc_id, get_session())
        return jsonify({'success': True})

    @bp.route('/<int:doc_id>/status', methods=['PATCH'])
    def update_status(doc_id):
        data = json_body(StatusForm)
        document = document_service.set_status(kind, doc_id, data['status'].upper(), get_session())
        return jsonify(document.to_dict())

    @bp.route('/<int:doc_id>/pdf', methods=['GET'])
    def document_pdf(doc_id):
        document = document_service.get_document(kind, doc_id, get_session())
        pdf = render_document_pdf(kind.name, document, company_info())
        return send_file(
            pdf,
            mimetype='application/pdf',
            as_attachment=request.args.get('download') == '1',
            download_name=f"{document.number}.pdf",
        )

    return bp


quotations_bp = create_document_blueprint(QUOTATION, QuotationForm, 'quotations')
service_orders_bp = create_document_blueprint(SERVICE_ORDER, ServiceOrderForm, 'service_orders')
purchase_orders_bp = create_document_blueprint(PURCHASE_ORDER, PurchaseOrderForm, 'purchase_orders')


@quotations_bp.route('/<int:doc_id>/accept', methods=['POST'])
def accept_quotation(doc_id):
    quotation = document_service.respond_quotation(doc_id, True, get_session())
    return jsonify(quotation.to_dict())


@quotations_bp.route('/<int:doc_id>/reject', methods=['POST'])
def reject_quotation(doc_id):
    quotation = document_service.respond_quotation(doc_id, False, get_session())
    return jsonify(quotation.to_dict())
