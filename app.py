# app.py
"""
Main application entry point.
This module creates the Flask application instance and handles application startup.
"""

import os

from academy import create_app


def create_application():
    """
    Create and configure the Flask application.

    Returns:
        Flask: Configured application instance
    """
    config_name = os.environ.get('FLASK_ENV', 'development')
    app = create_app(config_name)

    if config_name == 'production':
        setup_production_features(app)

    return app


def setup_production_features(app):
    """
    Setup production-specific features.

    Args:
        app: Flask application instance
    """
    import logging
    from logging.handlers import SysLogHandler

    syslog_server = app.config.get('SYSLOG_SERVER')
    if syslog_server:
        # Either a socket path such as /dev/log or host[:port]
        if syslog_server.startswith('/'):
            address = syslog_server
        else:
            host, _, port = syslog_server.partition(':')
            address = (host, int(port or 514))
        syslog_handler = SysLogHandler(address=address)
        syslog_handler.setLevel(logging.ERROR)
        app.logger.addHandler(syslog_handler)

    app.logger.info("Production features configured")


# Create the application instance
app = create_application()


# Development server configuration
if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV') == 'development'

    app.logger.info(f"Starting development server on port {port}, debug={debug}")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug,
        threaded=True
    )
