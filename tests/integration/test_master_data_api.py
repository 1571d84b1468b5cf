"""
Integration tests for clients, equipment, staff users and the service catalog.
"""
import pytest


class TestClientsAPI:

    def test_create_and_get(self, client, client_payload):
        payload = client_payload(credit_line='15000.50', start_date='2024-01-15')

        response = client.post('/api/clients', json=payload)

        assert response.status_code == 201
        created = response.get_json()
        assert created['name'] == payload['name']
        assert created['credit_line'] == 15000.5
        assert created['start_date'] == '2024-01-15'

        fetched = client.get(f"/api/clients/{created['id']}").get_json()
        assert fetched['email'] == payload['email']

    def test_create_invalid(self, client, client_payload):
        response = client.post('/api/clients', json=client_payload(ruc='2051', email='sin-arroba'))

        assert response.status_code == 400
        errors = response.get_json()['errors']
        assert set(errors) == {'ruc', 'email'}

    def test_invalid_payment_method(self, client, client_payload):
        response = client.post('/api/clients', json=client_payload(payment_method='BITCOIN'))
        assert response.status_code == 400

    def test_partial_update(self, client, registered_client):
        response = client.put(f"/api/clients/{registered_client['id']}", json={'contact_person': 'Luis Rojas'})

        assert response.status_code == 200
        data = response.get_json()
        assert data['contact_person'] == 'Luis Rojas'
        assert data['name'] == registered_client['name']

    def test_list_excludes_deleted(self, client, make_client):
        keep = make_client()
        gone = make_client()

        client.delete(f"/api/clients/{gone['id']}")

        ids = [c['id'] for c in client.get('/api/clients').get_json()]
        assert keep['id'] in ids
        assert gone['id'] not in ids
        assert client.get(f"/api/clients/{gone['id']}").status_code == 404
        assert client.delete(f"/api/clients/{gone['id']}").status_code == 404

    def test_missing_client(self, client):
        response = client.get('/api/clients/4242')

        assert response.status_code == 404
        assert response.get_json()['status'] == 'error'


@pytest.fixture
def equipment_payload():
    def _build(**overrides):
        payload = {
            'name': 'Sonómetro clase 1',
            'type': 'Ruido',
            'code': 'SON-01',
            'description': 'Sonómetro integrador',
            'components': {'micrófono': 'prepolarizado', 'calibrador': 'acústico'},
            'serial_number': 'SN-88213',
        }
        payload.update(overrides)
        return payload
    return _build


class TestEquipmentAPI:

    def test_create_with_components(self, client, equipment_payload):
        response = client.post('/api/equipment', json=equipment_payload(is_calibrated=True,
                                                                        calibration_date='2024-02-10'))

        assert response.status_code == 201
        data = response.get_json()
        assert data['components']['calibrador'] == 'acústico'
        assert data['status'] == 'GOOD'
        assert data['is_calibrated'] is True

    def test_components_must_be_an_object(self, client, equipment_payload):
        response = client.post('/api/equipment', json=equipment_payload(components=['a', 'b']))

        assert response.status_code == 400
        assert 'components' in response.get_json()['errors']

    def test_filter_by_status_and_type(self, client, equipment_payload):
        client.post('/api/equipment', json=equipment_payload(status='POOR'))
        client.post('/api/equipment', json=equipment_payload(code='HV-01', type='Calidad de aire'))

        poor = client.get('/api/equipment?status=poor').get_json()
        air = client.get('/api/equipment?type=Calidad de aire').get_json()

        assert [e['status'] for e in poor] == ['POOR']
        assert [e['code'] for e in air] == ['HV-01']
        assert client.get('/api/equipment?status=BROKEN').status_code == 400

    def test_update_and_delete(self, client, equipment_payload):
        created = client.post('/api/equipment', json=equipment_payload()).get_json()

        response = client.put(f"/api/equipment/{created['id']}", json={'status': 'FAIR', 'is_calibrated': False})
        assert response.get_json()['status'] == 'FAIR'
        assert response.get_json()['components'] == created['components']

        assert client.delete(f"/api/equipment/{created['id']}").status_code == 200
        assert client.get(f"/api/equipment/{created['id']}").status_code == 404


class TestUsersAPI:

    def test_password_hash_never_returned(self, client, gestor):
        assert 'password' not in gestor
        assert 'password_hash' not in gestor

        listed = client.get('/api/users').get_json()
        assert all('password_hash' not in user for user in listed)

    def test_email_normalized_and_unique(self, client):
        first = client.post('/api/users', json={'name': 'Ana', 'email': 'Ana@AmbientalPE.com'})
        assert first.status_code == 201
        assert first.get_json()['email'] == 'ana@ambientalpe.com'

        second = client.post('/api/users', json={'name': 'Ana 2', 'email': 'ana@ambientalpe.com'})
        assert second.status_code == 409

    def test_short_password_rejected(self, client):
        response = client.post('/api/users', json={'name': 'Ana', 'email': 'ana@test.pe', 'password': '123'})

        assert response.status_code == 400
        assert 'password' in response.get_json()['errors']

    def test_update_to_taken_email(self, client, gestor):
        other = client.post('/api/users', json={'name': 'Luis', 'email': 'luis@test.pe'}).get_json()

        response = client.put(f"/api/users/{other['id']}", json={'email': gestor['email']})
        assert response.status_code == 409

    def test_delete_user(self, client, gestor):
        assert client.delete(f"/api/users/{gestor['id']}").status_code == 200
        assert client.get(f"/api/users/{gestor['id']}").status_code == 404


class TestServiceCatalogAPI:

    def test_create_and_list(self, client):
        response = client.post('/api/services', json={
            'code': 'MON-TEST', 'name': 'Monitoreo de prueba', 'unit_price': '320.00', 'default_days': 2,
        })

        assert response.status_code == 201
        codes = [s['code'] for s in client.get('/api/services').get_json()]
        assert codes == ['MON-TEST']

    def test_duplicate_code(self, client):
        body = {'code': 'MON-TEST', 'name': 'Monitoreo', 'unit_price': 10}
        client.post('/api/services', json=body)

        assert client.post('/api/services', json=body).status_code == 409

    def test_seed_command(self, app):
        runner = app.test_cli_runner()

        first = runner.invoke(args=['seed-services'])
        second = runner.invoke(args=['seed-services'])

        assert '5 servicios creados' in first.output
        assert '0 servicios creados' in second.output

    def test_create_user_command(self, app, client):
        runner = app.test_cli_runner()

        result = runner.invoke(args=[
            'create-user', '--name', 'Admin', '--email', 'admin@ambientalpe.com', '--password', 'secreto123',
        ])

        assert result.exit_code == 0
        emails = [u['email'] for u in client.get('/api/users').get_json()]
        assert 'admin@ambientalpe.com' in emails

    def test_create_user_command_invalid(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['create-user', '--name', 'X', '--email', 'bad', '--password', 'secreto123'])

        assert result.exit_code == 1
