# __init__.py
"""
Application factory for the academy administration backend.
"""

import os
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from academy.config import get_config
from academy.exceptions import CandidateSuggestionError
from academy.extensions import init_extensions, db


def setup_logging(app):
    """
    Configure structured logging for the application.

    Args:
        app: Flask application instance
    """
    log_format = logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s'
    )
    level = logging.DEBUG if app.debug else logging.INFO

    handlers = []

    if app.config.get('LOG_TO_FILE', True):
        log_dir = app.config.get('LOG_DIR') or os.path.join(app.root_path, 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'app.log'),
            maxBytes=app.config.get('LOG_MAX_BYTES', 1024 * 1024 * 10),
            backupCount=app.config.get('LOG_BACKUP_COUNT', 5)
        )
        file_handler.setFormatter(log_format)
        file_handler.setLevel(logging.INFO)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_format)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    app.logger.setLevel(level)
    app.logger.handlers.clear()
    for handler in handlers:
        app.logger.addHandler(handler)

    # Service loggers are named per service and share the app handlers
    for name in ('candidate_service', 'candidate_repository', 'software_matcher',
                 'status_annotator', 'orientation_service'):
        service_logger = logging.getLogger(name)
        service_logger.setLevel(level)
        service_logger.handlers.clear()
        for handler in handlers:
            service_logger.addHandler(handler)
        service_logger.propagate = False

    # Forcefully suppress SQLAlchemy logs
    sa_logger = logging.getLogger('sqlalchemy.engine')
    sa_logger.setLevel(logging.WARNING)
    sa_logger.propagate = False


def register_blueprints(app):
    """
    Register all application blueprints.

    Args:
        app: Flask application instance
    """
    try:
        # Import blueprints here to avoid circular imports
        from .controllers.batch import batch_bp
        from .controllers.orientation import orientation_bp

        app.register_blueprint(batch_bp, url_prefix='/batches')
        app.register_blueprint(orientation_bp, url_prefix='/orientation')

        app.logger.info("All blueprints registered successfully")

    except ImportError as e:
        app.logger.error(f"Failed to import blueprint: {str(e)}")
        raise


def register_error_handlers(app):
    """
    Register global error handlers.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(CandidateSuggestionError)
    def handle_suggestion_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({'status': 'error', 'message': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        return jsonify({
            'status': 'error',
            'message': str(e) if app.debug else 'Internal server error'
        }), 500


def register_shell_context(app):
    """
    Register shell context for flask shell command.

    Args:
        app: Flask application instance
    """

    @app.shell_context_processor
    def make_shell_context():
        from academy.models import (
            User, StudentProfile, Batch, Session, Enrollment,
            PaymentTransaction, StudentOrientation
        )
        return {
            'db': db,
            'User': User,
            'StudentProfile': StudentProfile,
            'Batch': Batch,
            'Session': Session,
            'Enrollment': Enrollment,
            'PaymentTransaction': PaymentTransaction,
            'StudentOrientation': StudentOrientation
        }


def register_health_checks(app):
    """
    Register health check endpoints.

    Args:
        app: Flask application instance
    """

    @app.route('/health')
    def health_check():
        """Basic health check endpoint."""
        return jsonify({
            'status': 'ok',
            'timestamp': datetime.now().isoformat(),
            'version': app.config.get('VERSION', '1.0.0')
        })

    @app.route('/health/database')
    def database_health_check():
        """Database health check endpoint."""
        from academy.extensions import check_database_health, get_connection_stats

        healthy, message = check_database_health()
        stats = get_connection_stats()

        return jsonify({
            'status': 'healthy' if healthy else 'unhealthy',
            'message': message,
            'stats': stats,
            'timestamp': datetime.now().isoformat()
        }), 200 if healthy else 503


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name (str): Configuration name ('development', 'production', 'testing')

    Returns:
        Flask: Configured Flask application instance
    """
    load_dotenv()

    app = Flask(__name__)

    config_name = config_name or os.environ.get('FLASK_ENV', 'development')
    config_class = get_config(config_name)
    if hasattr(config_class, 'validate'):
        config_class.validate()
    app.config.from_object(config_class)

    setup_logging(app)
    app.logger.info(f"Starting application with config: {config_name}")

    init_extensions(app)

    # Models must be imported before migrations or create_all see the metadata
    from academy import models  # noqa: F401

    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)
    register_health_checks(app)

    from .cli import register_cli_commands
    register_cli_commands(app)

    app.logger.info("Application factory completed successfully")

    return app
