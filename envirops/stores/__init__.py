"""API-client stores (client-side cache of server resources)."""
from envirops.stores.transport import HttpTransport, FlaskClientTransport
from envirops.stores.base import ResourceStore
from envirops.stores.resources import (
    ClientStore, EquipmentStore, UserStore,
    DocumentStore, QuotationStore, ServiceOrderStore, PurchaseOrderStore,
)

__all__ = [
    'HttpTransport', 'FlaskClientTransport', 'ResourceStore',
    'ClientStore', 'EquipmentStore', 'UserStore',
    'DocumentStore', 'QuotationStore', 'ServiceOrderStore', 'PurchaseOrderStore',
]
