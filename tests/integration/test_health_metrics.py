"""
Integration tests for health check, metrics and error formatting.
"""


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'healthy'
    assert data['database'] == 'connected'
    assert data['cache'] == 'disabled'


def test_metrics_exposes_document_writes(client, quotation):
    response = client.get('/metrics')

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'envirops_http_requests_total' in body
    assert 'envirops_documents_written_total{document="quotations",operation="create"}' in body


def test_unknown_route_is_json(client):
    response = client.get('/api/nope')

    assert response.status_code == 404
    assert response.get_json()['status'] == 'error'


def test_method_not_allowed_is_json(client):
    response = client.patch('/api/clients')

    assert response.status_code == 405
    assert response.get_json()['status'] == 'error'
