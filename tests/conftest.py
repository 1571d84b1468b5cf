import pytest
import uuid
from datetime import date

from config import TestingConfig
from envirops import create_app
from envirops.database import db_session, get_session, create_all, drop_all


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing (in-memory SQLite, no Redis)."""
    app = create_app(TestingConfig)
    return app


@pytest.fixture(autouse=True)
def _schema(app):
    """Fresh tables for every test."""
    create_all()
    yield
    db_session.remove()
    drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session():
    """Database session for tests that work below the HTTP layer."""
    session = get_session()
    yield session
    session.rollback()
    session.close()


# ---------------------------------------------------------------------------
# Payload factories
# ---------------------------------------------------------------------------

@pytest.fixture
def client_payload():
    """Build a valid client body; keyword arguments override fields."""
    def _build(**overrides):
        suffix = str(uuid.uuid4())[:8]
        payload = {
            'name': f'Minera Andina {suffix}',
            'ruc': '20512345678',
            'address': 'Av. Arequipa 1234, Lima',
            'email': f'contacto-{suffix}@minera.pe',
            'contact_person': 'Ana Torres',
            'payment_method': 'TRANSFERENCIA',
        }
        payload.update(overrides)
        return payload
    return _build


@pytest.fixture
def item_payload():
    """Build a line item body."""
    def _build(quantity=1, unit_price=100, days=1, **overrides):
        suffix = str(uuid.uuid4())[:6]
        payload = {
            'code': f'MCA-{suffix}',
            'name': 'Monitoreo de calidad de aire',
            'description': 'PM10 y PM2.5, 24 horas',
            'quantity': quantity,
            'unit_price': unit_price,
            'days': days,
        }
        payload.update(overrides)
        return payload
    return _build


# ---------------------------------------------------------------------------
# Records created through the API (plain dicts, no detached ORM objects)
# ---------------------------------------------------------------------------

@pytest.fixture
def make_client(client, client_payload):
    def _make(**overrides):
        response = client.post('/api/clients', json=client_payload(**overrides))
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make


@pytest.fixture
def registered_client(make_client):
    """A client (cliente) available for documents."""
    return make_client()


@pytest.fixture
def gestor(client):
    """Staff user assigned to orders."""
    suffix = str(uuid.uuid4())[:8]
    response = client.post('/api/users', json={
        'name': 'Carlos Quispe',
        'email': f'gestor-{suffix}@ambientalpe.com',
        'password': 'secreto123',
        'position': 'Gestor comercial',
        'department': 'Ventas',
        'role': 'gestor',
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def make_quotation(client, registered_client, item_payload):
    def _make(items=None, **overrides):
        payload = {
            'client_id': registered_client['id'],
            'currency': 'PEN',
            'equipment_release_date': date.today().isoformat(),
            'validity_days': 15,
            'items': items if items is not None else [item_payload(quantity=2, unit_price=100, days=3)],
        }
        payload.update(overrides)
        response = client.post('/api/quotations', json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make


@pytest.fixture
def quotation(make_quotation):
    return make_quotation()


@pytest.fixture
def make_order(client, registered_client, gestor, item_payload):
    """Create a service order or purchase order: make_order('service-orders', ...)."""
    def _make(resource='service-orders', items=None, **overrides):
        payload = {
            'client_id': registered_client['id'],
            'gestor_id': gestor['id'],
            'date': date.today().isoformat(),
            'currency': 'PEN',
            'description': 'Monitoreo trimestral',
            'items': items if items is not None else [item_payload(quantity=1, unit_price=500, days=None)],
        }
        payload.update(overrides)
        response = client.post(f'/api/{resource}', json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make


@pytest.fixture
def service_order(make_order):
    return make_order('service-orders')


@pytest.fixture
def purchase_order(make_order):
    return make_order('purchase-orders')
