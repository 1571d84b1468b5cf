"""
Unit tests for the API-client stores using an in-memory transport.
"""

import pytest

from envirops.exceptions import NetworkError, ValidationError
from envirops.stores import ClientStore, QuotationStore, ServiceOrderStore


class FakeTransport:
    """Records requests and answers from a queue of canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, path, json=None, params=None):
        self.calls.append((method, path, json, params))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


CLIENT_BODY = {
    'name': 'Pesquera del Sur',
    'ruc': '20601234567',
    'address': 'Jr. Lima 456, Chimbote',
    'email': 'compras@pesquera.pe',
}


class TestResourceStore:
    """Tests for cache behaviour shared by every store."""

    def test_fetch_all_is_served_from_cache(self):
        transport = FakeTransport([{'id': 1, 'name': 'A'}, {'id': 2, 'name': 'B'}])
        store = ClientStore(transport)

        first = store.fetch_all()
        second = store.fetch_all()

        assert [c['id'] for c in first] == [1, 2]
        assert second == first
        assert len(transport.calls) == 1

    def test_invalidate_forces_refetch(self):
        transport = FakeTransport([{'id': 1}], [{'id': 1}, {'id': 3}])
        store = ClientStore(transport)
        store.fetch_all()

        store.invalidate()
        items = store.fetch_all()

        assert [c['id'] for c in items] == [1, 3]
        assert len(transport.calls) == 2

    def test_get_uses_cache_after_fetch(self):
        transport = FakeTransport([{'id': 7, 'name': 'Cached'}])
        store = ClientStore(transport)
        store.fetch_all()

        assert store.get(7)['name'] == 'Cached'
        assert len(transport.calls) == 1

    def test_create_sends_and_caches_first(self):
        transport = FakeTransport([{'id': 1}], dict(CLIENT_BODY, id=2))
        store = ClientStore(transport)
        store.fetch_all()

        created = store.create(dict(CLIENT_BODY))

        assert created['id'] == 2
        assert transport.calls[-1][:2] == ('POST', '/api/clients')
        assert [c['id'] for c in store.items] == [2, 1]

    def test_update_replaces_cached_entry(self):
        transport = FakeTransport([{'id': 1, 'name': 'Old'}], {'id': 1, 'name': 'New'})
        store = ClientStore(transport)
        store.fetch_all()

        store.update(1, {'name': 'New'})

        assert store.get(1)['name'] == 'New'
        assert transport.calls[-1][:2] == ('PUT', '/api/clients/1')

    def test_delete_removes_from_cache(self):
        transport = FakeTransport([{'id': 1}, {'id': 2}], {'success': True})
        store = ClientStore(transport)
        store.fetch_all()

        assert store.delete(1) is True
        assert [c['id'] for c in store.items] == [2]

    def test_network_error_sets_error_and_propagates(self):
        transport = FakeTransport(NetworkError('Cliente 9 no encontrado', 404))
        store = ClientStore(transport)

        with pytest.raises(NetworkError):
            store.get(9)

        assert store.error == 'Cliente 9 no encontrado'
        assert store.is_loading is False

    def test_local_validation_blocks_request(self):
        transport = FakeTransport()
        store = ClientStore(transport)

        with pytest.raises(ValidationError):
            store.create(dict(CLIENT_BODY, ruc='123'))

        assert transport.calls == []
        assert store.error is not None


class TestDocumentStore:
    """Tests for quotation / order specific behaviour."""

    def test_create_sends_locally_computed_totals(self):
        transport = FakeTransport({'id': 1, 'number': 'COT-2024-001'})
        store = QuotationStore(transport)

        store.create({
            'client_id': 1,
            'equipment_release_date': '2024-03-01',
            'items': [{'code': 'MCA', 'name': 'Aire', 'quantity': 2, 'unit_price': 100, 'days': 3}],
        })

        sent = transport.calls[0][2]
        assert sent['subtotal'] == 600.0
        assert sent['tax'] == 108.0
        assert sent['total'] == 708.0

    def test_update_without_items_sends_no_totals(self):
        transport = FakeTransport({'id': 1})
        store = QuotationStore(transport)

        store.update(1, {'notes': 'Sin cambios de ítems'})

        assert 'total' not in transport.calls[0][2]

    def test_next_number(self):
        transport = FakeTransport({'next_number': 'OS-2024-004'})
        store = ServiceOrderStore(transport)

        assert store.next_number() == 'OS-2024-004'
        assert transport.calls[0][:2] == ('GET', '/api/service-orders/next-number')

    def test_accept_updates_cache(self):
        transport = FakeTransport({'id': 5, 'status': 'ACCEPTED'})
        store = QuotationStore(transport)

        store.accept(5)

        assert store.get(5)['status'] == 'ACCEPTED'
        assert transport.calls[0][:2] == ('POST', '/api/quotations/5/accept')
