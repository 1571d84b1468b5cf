"""
Client-side stores talking to the in-process API.
"""
from datetime import date

import pytest

from envirops.exceptions import NetworkError
from envirops.stores import ClientStore, QuotationStore, ServiceOrderStore, FlaskClientTransport


@pytest.fixture
def transport(client):
    return FlaskClientTransport(client)


def test_client_store_lifecycle(transport, client_payload):
    store = ClientStore(transport)
    assert store.fetch_all() == []

    created = store.create(client_payload(name='Agrícola Virú'))
    assert store.items[0]['id'] == created['id']

    updated = store.update(created['id'], {'contact_person': 'Pedro Salas'})
    assert updated['contact_person'] == 'Pedro Salas'

    store.delete(created['id'])
    assert store.items == []
    assert store.fetch_all(force=True) == []


def test_api_error_is_reported(transport):
    store = ClientStore(transport)

    with pytest.raises(NetworkError) as excinfo:
        store.get(12345)

    assert excinfo.value.response_status == 404
    assert store.error == 'Cliente 12345 no encontrado'


def test_quotation_store_flow(transport, registered_client, item_payload):
    store = QuotationStore(transport)
    expected_number = f'COT-{date.today().year}-001'
    assert store.next_number() == expected_number

    quotation = store.create({
        'client_id': registered_client['id'],
        'equipment_release_date': date.today().isoformat(),
        'items': [item_payload(quantity=2, unit_price=100, days=3)],
    })
    assert quotation['number'] == expected_number
    assert quotation['total'] == 708.0

    store.set_status(quotation['id'], 'SENT')
    accepted = store.accept(quotation['id'])
    assert accepted['status'] == 'ACCEPTED'
    assert store.get(quotation['id'])['status'] == 'ACCEPTED'

    with pytest.raises(NetworkError) as excinfo:
        store.reject(quotation['id'])
    assert excinfo.value.response_status == 409


def test_filtered_fetch_does_not_replace_cache(transport, make_order):
    pending = make_order('service-orders')
    done = make_order('service-orders', status='COMPLETED')
    store = ServiceOrderStore(transport)

    everything = store.fetch_all()
    completed = store.fetch_all(params={'status': 'COMPLETED'})

    assert [o['id'] for o in completed] == [done['id']]
    assert {o['id'] for o in store.items} == {pending['id'], done['id']}
    assert len(everything) == 2
