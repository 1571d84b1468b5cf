"""Service catalog used to prefill document line items."""
import logging
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from envirops.models import CatalogService
from envirops.services import records

logger = logging.getLogger(__name__)

SERVICE_FIELDS = ('code', 'name', 'description', 'unit_price', 'default_quantity', 'default_days')

# Starter catalog loaded by `flask seed-services`
DEFAULT_SERVICES = [
    {'code': 'MCA-001', 'name': 'Monitoreo de calidad de aire',
     'description': 'Medición de PM10, PM2.5 y gases (24 h por estación)', 'unit_price': Decimal('850.00')},
    {'code': 'MRA-001', 'name': 'Monitoreo de ruido ambiental',
     'description': 'Medición de ruido diurno y nocturno por punto', 'unit_price': Decimal('180.00')},
    {'code': 'MEA-001', 'name': 'Monitoreo de emisiones atmosféricas',
     'description': 'Muestreo isocinético en chimenea', 'unit_price': Decimal('2200.00')},
    {'code': 'MAG-001', 'name': 'Monitoreo de calidad de agua',
     'description': 'Toma de muestra y análisis fisicoquímico', 'unit_price': Decimal('420.00')},
    {'code': 'ALQ-001', 'name': 'Alquiler de equipo de monitoreo',
     'description': 'Alquiler diario de equipo calibrado', 'unit_price': Decimal('150.00')},
]


def list_services(session: Session) -> List[CatalogService]:
    return session.query(CatalogService).order_by(CatalogService.code).all()


def create_service(data: Dict[str, Any], session: Session) -> CatalogService:
    service = CatalogService()
    records.apply_fields(service, data, SERVICE_FIELDS)
    session.add(service)
    records.commit(session, f"service {data.get('code')}", f"Ya existe un servicio con el código {data.get('code')}")
    logger.info(f"Catalog service created: {service.code}")
    return service


def seed_services(session: Session) -> int:
    """Insert the starter catalog, skipping codes that already exist. Returns inserted count."""
    existing = {code for (code,) in session.query(CatalogService.code).all()}
    created = 0
    for data in DEFAULT_SERVICES:
        if data['code'] in existing:
            continue
        service = CatalogService()
        records.apply_fields(service, data, SERVICE_FIELDS)
        session.add(service)
        created += 1
    records.commit(session, 'service catalog seed')
    return created
