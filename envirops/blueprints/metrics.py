"""
Prometheus metrics blueprint.

Exposes /metrics with HTTP request metrics. Meant for the internal network
or the monitoring system only.
"""
import os
import time

from flask import Blueprint, Response, request, g
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CollectorRegistry, CONTENT_TYPE_LATEST
from prometheus_client import multiprocess, REGISTRY

metrics_bp = Blueprint('metrics', __name__)

# Multi-process mode under Gunicorn
MULTIPROCESS_MODE = os.environ.get('PROMETHEUS_MULTIPROC_DIR') is not None

if MULTIPROCESS_MODE:
    registry = CollectorRegistry()
    multiprocess.MultiProcessCollector(registry)
else:
    registry = REGISTRY

http_requests_total = Counter(
    'envirops_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'http_status'],
    registry=registry if not MULTIPROCESS_MODE else None
)

http_request_duration_seconds = Histogram(
    'envirops_http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    registry=registry if not MULTIPROCESS_MODE else None,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_requests_in_flight = Gauge(
    'envirops_http_requests_in_flight',
    'Number of HTTP requests currently being processed',
    registry=registry if not MULTIPROCESS_MODE else None
)

documents_written_total = Counter(
    'envirops_documents_written_total',
    'Quotations and orders created or updated',
    ['document', 'operation'],
    registry=registry if not MULTIPROCESS_MODE else None
)


def setup_metrics_instrumentation(app):
    """Register before/after request hooks that feed the HTTP metrics."""

    @app.before_request
    def before_request_metrics():
        g._prometheus_metrics_start_time = time.time()
        http_requests_in_flight.inc()

    @app.after_request
    def after_request_metrics(response):
        if not hasattr(g, '_prometheus_metrics_start_time'):
            return response

        duration = time.time() - g._prometheus_metrics_start_time
        endpoint = request.endpoint or 'unknown'

        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(duration)
        http_requests_total.labels(
            method=request.method, endpoint=endpoint, http_status=response.status_code
        ).inc()
        http_requests_in_flight.dec()

        # Successful document writes, e.g. quotations.create_document -> (quotations, create)
        if request.method in ('POST', 'PUT') and response.status_code in (200, 201) and '.' in endpoint:
            blueprint, view = endpoint.split('.', 1)
            if blueprint in ('quotations', 'service_orders', 'purchase_orders'):
                operation = 'create' if request.method == 'POST' and view == 'create_document' else 'update'
                documents_written_total.labels(document=blueprint, operation=operation).inc()

        return response


@metrics_bp.route('/metrics')
def metrics():
    """Prometheus metrics in text format (not authenticated)."""
    return Response(generate_latest(registry), mimetype=CONTENT_TYPE_LATEST)
