"""Dashboard aggregates API."""
from datetime import datetime

from flask import Blueprint, jsonify, request, current_app

from envirops.database import get_session
from envirops.exceptions import ValidationError
from envirops.services.dashboard_service import get_cached_dashboard_stats

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


def _parse_date_arg(name):
    raw = request.args.get(name, '').strip()
    if not raw:
        return None
    try:
        return datetime.strptime(raw, '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError({name: ['Formato de fecha inválido (YYYY-MM-DD)']})


@dashboard_bp.route('/stats', methods=['GET'])
def stats():
    """
    Dashboard figures for an optional period.

    Query params:
        start, end: YYYY-MM-DD (inclusive)
    """
    start = _parse_date_arg('start')
    end = _parse_date_arg('end')
    if start and end and start > end:
        raise ValidationError({'start': ['La fecha de inicio debe ser anterior a la fecha fin']})

    config = current_app.config
    data = get_cached_dashboard_stats(
        get_session(),
        start,
        end,
        usd_rate=config.get('USD_TO_PEN_RATE', '3.7'),
        active_months=config.get('ACTIVE_CLIENT_MONTHS', 3),
        ttl=config.get('CACHE_DASHBOARD_TTL'),
    )
    return jsonify(data)
