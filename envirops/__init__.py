"""Flask application factory."""
import logging
import os
import traceback

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from envirops.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = app.config.get('JSON_SORT_KEYS', False)

    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Sentry error tracking (production only)
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Redis cache
    from envirops.services.cache_service import init_cache
    init_cache(app)

    # Prometheus instrumentation
    from envirops.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: trust the reverse proxy headers
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database
    init_db(app)

    # Error Handlers
    from envirops.exceptions import EnviropsError

    @app.errorhandler(EnviropsError)
    def handle_envirops_error(error):
        """Handle application exceptions as JSON."""
        message = f"{error.__class__.__name__} [{error.status_code}] {request.method} {request.path}: {error.message}"
        if error.status_code >= 500:
            app.logger.error(message)
        else:
            app.logger.info(message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """404 / 405 / 400 from routing or request parsing."""
        return jsonify({'status': 'error', 'error': error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception on {request.method} {request.path}: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'error': 'Error interno del servidor'}), 500

    # Register blueprints
    from envirops.blueprints.main import main_bp
    from envirops.blueprints.metrics import metrics_bp
    from envirops.blueprints.clients import clients_bp
    from envirops.blueprints.equipment import equipment_bp
    from envirops.blueprints.users import users_bp
    from envirops.blueprints.services import services_bp
    from envirops.blueprints.documents import quotations_bp, service_orders_bp, purchase_orders_bp
    from envirops.blueprints.dashboard import dashboard_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(metrics_bp)
    app.register_blueprint(clients_bp)
    app.register_blueprint(equipment_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(services_bp)
    app.register_blueprint(quotations_bp)
    app.register_blueprint(service_orders_bp)
    app.register_blueprint(purchase_orders_bp)
    app.register_blueprint(dashboard_bp)

    # CLI commands
    from envirops.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
