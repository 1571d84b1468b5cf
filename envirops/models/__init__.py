"""Models package - exports all SQLAlchemy models."""
from envirops.models.enums import (
    Currency, PaymentMethod, EquipmentStatus,
    QuotationStatus, ServiceOrderStatus, PurchaseOrderStatus,
)
from envirops.models.user import User
from envirops.models.client import Client
from envirops.models.equipment import Equipment
from envirops.models.catalog_service import CatalogService
from envirops.models.quotation import Quotation
from envirops.models.quotation_item import QuotationItem
from envirops.models.service_order import ServiceOrder
from envirops.models.service_order_item import ServiceOrderItem
from envirops.models.purchase_order import PurchaseOrder
from envirops.models.purchase_order_item import PurchaseOrderItem

__all__ = [
    # Vocabularies
    'Currency', 'PaymentMethod', 'EquipmentStatus',
    'QuotationStatus', 'ServiceOrderStatus', 'PurchaseOrderStatus',
    # Entities
    'User', 'Client', 'Equipment', 'CatalogService',
    'Quotation', 'QuotationItem',
    'ServiceOrder', 'ServiceOrderItem',
    'PurchaseOrder', 'PurchaseOrderItem',
]
