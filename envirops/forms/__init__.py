"""WTForms used to validate JSON request bodies."""
from envirops.forms.payload import flatten_payload, validate_payload
from envirops.forms.master_forms import ClientForm, EquipmentForm, UserForm, ServiceForm
from envirops.forms.document_forms import (
    ItemForm, QuotationForm, ServiceOrderForm, PurchaseOrderForm, StatusForm,
)

__all__ = [
    'flatten_payload', 'validate_payload',
    'ClientForm', 'EquipmentForm', 'UserForm', 'ServiceForm',
    'ItemForm', 'QuotationForm', 'ServiceOrderForm', 'PurchaseOrderForm', 'StatusForm',
]
