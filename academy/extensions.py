"""
Flask extensions initialization.
Extensions are created here without an app and bound in the application factory,
which keeps models and services free of circular imports.
"""

import time
import logging
import threading

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import text

db = SQLAlchemy()
migrate = Migrate()

# Connection monitoring
connection_stats = {
    'total_checks': 0,
    'failed_checks': 0,
    'last_check': 0,
    'healthy': True
}
connection_lock = threading.Lock()

logger = logging.getLogger(__name__)


def get_connection_stats():
    """
    Get current database connection statistics.

    Returns:
        dict: Connection statistics
    """
    with connection_lock:
        return connection_stats.copy()


def check_database_health():
    """
    Check if the database connection is healthy.
    This function requires an active Flask application context.

    Returns:
        tuple: (bool, str) indicating health status and message
    """
    try:
        if not current_app:
            return False, "No application context available"

        connection = db.engine.connect()
        try:
            connection.execute(text("SELECT 1")).fetchone()

            with connection_lock:
                connection_stats['total_checks'] += 1
                connection_stats['healthy'] = True
                connection_stats['last_check'] = time.time()

            return True, "Database connection is healthy"
        finally:
            connection.close()

    except Exception as e:
        logger.error(f"Database health check failed: {e}")

        with connection_lock:
            connection_stats['total_checks'] += 1
            connection_stats['failed_checks'] += 1
            connection_stats['healthy'] = False
            connection_stats['last_check'] = time.time()

        return False, f"Database connection failed: {str(e)}"


def init_extensions(app):
    """
    Initialize all extensions with the application.

    Args:
        app: Flask application instance
    """
    db.init_app(app)
    migrate.init_app(app, db)

    app.logger.info("Extensions initialized successfully")
