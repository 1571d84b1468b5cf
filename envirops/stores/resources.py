"""Concrete stores for every API resource."""
from typing import Any, Dict

from envirops.forms import (
    ClientForm, EquipmentForm, UserForm,
    QuotationForm, ServiceOrderForm, PurchaseOrderForm,
)
from envirops.services.totals import compute_totals
from envirops.stores.base import ResourceStore


class ClientStore(ResourceStore):
    resource = 'clients'
    form_class = ClientForm


class EquipmentStore(ResourceStore):
    resource = 'equipment'
    form_class = EquipmentForm


class UserStore(ResourceStore):
    resource = 'users'
    form_class = UserForm


class DocumentStore(ResourceStore):
    """Store for documents with line items and a numbering sequence."""

    def _prepare(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        # Totals shown before submission; the API derives its own from the items
        if 'items' in payload:
            totals = compute_totals(payload['items'] or [])
            payload['subtotal'] = float(totals.subtotal)
            payload['tax'] = float(totals.tax)
            payload['total'] = float(totals.total)
        return payload

    def next_number(self) -> str:
        """Next free document number as computed by the API."""
        return self._call('GET', f"{self.base_path}/next-number")['next_number']

    def set_status(self, resource_id: int, status: str) -> Dict[str, Any]:
        data = self._call('PATCH', f"{self.base_path}/{resource_id}/status", {'status': status})
        self._cache[resource_id] = data
        return data


class QuotationStore(DocumentStore):
    resource = 'quotations'
    form_class = QuotationForm

    def accept(self, resource_id: int) -> Dict[str, Any]:
        data = self._call('POST', f"{self.base_path}/{resource_id}/accept")
        self._cache[resource_id] = data
        return data

    def reject(self, resource_id: int) -> Dict[str, Any]:
        data = self._call('POST', f"{self.base_path}/{resource_id}/reject")
        self._cache[resource_id] = data
        return data


class ServiceOrderStore(DocumentStore):
    resource = 'service-orders'
    form_class = ServiceOrderForm


class PurchaseOrderStore(DocumentStore):
    resource = 'purchase-orders'
    form_class = PurchaseOrderForm
