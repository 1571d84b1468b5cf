"""Client master data."""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from envirops.models import Client
from envirops.services import records

logger = logging.getLogger(__name__)

CLIENT_FIELDS = (
    'name', 'ruc', 'address', 'email', 'contact_person',
    'credit_line', 'payment_method', 'start_date',
)


def create_client(data: Dict[str, Any], session: Session) -> Client:
    client = Client()
    records.apply_fields(client, data, CLIENT_FIELDS)
    session.add(client)
    records.commit(session, f"client {data.get('ruc')}")
    logger.info(f"Client created: {client.name} (RUC {client.ruc})")
    return client


def update_client(client_id: int, data: Dict[str, Any], session: Session) -> Client:
    client = records.get_active(Client, client_id, session, 'Cliente')
    records.apply_fields(client, data, CLIENT_FIELDS)
    records.commit(session, f"client {client_id}")
    return client
