"""
Integration tests for the dashboard aggregates.
"""
from datetime import date


def _complete(client, order):
    response = client.patch(f"/api/service-orders/{order['id']}/status", json={'status': 'COMPLETED'})
    assert response.status_code == 200


class TestDashboardStats:

    def test_empty_database(self, client):
        response = client.get('/api/dashboard/stats')

        assert response.status_code == 200
        data = response.get_json()
        assert data['currency'] == 'PEN'
        assert data['total_revenue'] == 0.0
        assert data['average_order_value'] == 0.0
        assert data['total_clients'] == 0
        assert data['active_client_percentage'] == 0.0
        assert data['quotation_acceptance_rate'] == 0.0
        assert data['revenue_by_month'] == []
        assert data['equipment_by_status'] == {'GOOD': 0, 'FAIR': 0, 'POOR': 0}

    def test_revenue_and_pending(self, client, make_order, item_payload):
        completed = make_order('service-orders')
        _complete(client, completed)
        make_order('service-orders', currency='USD')

        data = client.get('/api/dashboard/stats').get_json()

        assert data['total_revenue'] == 590.0
        assert data['completed_orders'] == 1
        assert data['open_orders'] == 1
        # 590 USD at 3.7
        assert data['pending_revenue'] == 2183.0
        assert data['average_order_value'] == 590.0
        assert data['service_orders_by_status']['COMPLETED'] == 1
        assert data['service_orders_by_status']['PENDING'] == 1
        assert data['revenue_by_month'] == [
            {'month': date.today().strftime('%Y-%m'), 'revenue': 590.0, 'count': 1}
        ]
        assert data['top_services'][0]['name'] == 'Monitoreo de calidad de aire'
        assert data['top_services'][0]['revenue'] == 500.0

    def test_deleted_orders_are_ignored(self, client, make_order):
        order = make_order('service-orders')
        _complete(client, order)
        client.delete(f"/api/service-orders/{order['id']}")

        data = client.get('/api/dashboard/stats').get_json()

        assert data['total_revenue'] == 0.0
        assert data['completed_orders'] == 0

    def test_quotations_and_clients(self, client, make_client, make_quotation):
        make_client()
        accepted = make_quotation()
        make_quotation()
        client.patch(f"/api/quotations/{accepted['id']}/status", json={'status': 'SENT'})
        client.post(f"/api/quotations/{accepted['id']}/accept")

        data = client.get('/api/dashboard/stats').get_json()

        assert data['quotations_by_status']['ACCEPTED'] == {'count': 1, 'amount': 708.0}
        assert data['quotations_by_status']['DRAFT']['count'] == 1
        assert data['quotation_acceptance_rate'] == 50.0
        assert data['total_clients'] == 2
        assert data['active_clients'] == 1
        assert data['active_client_percentage'] == 50.0

    def test_period_filter(self, client, make_order):
        order = make_order('service-orders', date='2023-01-15')
        _complete(client, order)

        inside = client.get('/api/dashboard/stats?start=2023-01-01&end=2023-01-31').get_json()
        outside = client.get('/api/dashboard/stats?start=2023-02-01&end=2023-02-28').get_json()

        assert inside['total_revenue'] == 590.0
        assert inside['period'] == {'start': '2023-01-01', 'end': '2023-01-31'}
        assert outside['total_revenue'] == 0.0

    def test_invalid_period(self, client):
        assert client.get('/api/dashboard/stats?start=15-01-2024').status_code == 400
        assert client.get('/api/dashboard/stats?start=2024-02-01&end=2024-01-01').status_code == 400
