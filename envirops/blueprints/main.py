"""Main blueprint with health check endpoints."""
from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from envirops.database import ping
from envirops.services.cache_service import get_cache

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """
    Health check that validates the database connection.

    Returns:
        200: healthy (DB connected)
        503: unhealthy (DB error)
    """
    try:
        ping()
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check failed: {e}")
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
            'error': str(e),
        }), 503

    return jsonify({
        'status': 'healthy',
        'database': 'connected',
        'cache': 'connected' if get_cache().is_available() else 'disabled',
    }), 200
