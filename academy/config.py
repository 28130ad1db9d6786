import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Base configuration class with all settings as static attributes."""

    # Core configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'your-secret-key-here'
    DEBUG = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    VERSION = '1.0.0'

    # MySQL connection timeouts
    MYSQL_CONNECT_TIMEOUT = 30
    MYSQL_READ_TIMEOUT = 30
    MYSQL_WRITE_TIMEOUT = 30

    # Database configuration
    base_db_uri = os.environ.get('DATABASE_URL')

    # Fallback to SQLite if no DATABASE_URL is provided
    if not base_db_uri:
        base_db_uri = 'sqlite:///academy.db'
        logger.warning("DATABASE_URL not set, falling back to SQLite")

    if base_db_uri.startswith('mysql'):
        from urllib.parse import urlparse, urlunparse
        parsed = urlparse(base_db_uri)

        # PyMySQL specific parameters only; pool options live in SQLALCHEMY_ENGINE_OPTIONS
        query_params = {
            'charset': 'utf8mb4',
            'connect_timeout': str(MYSQL_CONNECT_TIMEOUT),
            'read_timeout': str(MYSQL_READ_TIMEOUT),
            'write_timeout': str(MYSQL_WRITE_TIMEOUT),
        }

        query_string = '&'.join([f"{k}={v}" for k, v in query_params.items()])
        new_query = f"{parsed.query}&{query_string}" if parsed.query else query_string

        SQLALCHEMY_DATABASE_URI = urlunparse((
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            new_query,
            parsed.fragment
        ))
        SQLALCHEMY_ENGINE_OPTIONS = {
            "pool_recycle": 3600,  # Recycle connections after 1 hour
            "pool_pre_ping": True,
            "pool_size": 10,
            "max_overflow": 20,
        }
    else:
        SQLALCHEMY_DATABASE_URI = base_db_uri
        SQLALCHEMY_ENGINE_OPTIONS = {
            "pool_pre_ping": True,
        }

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_MAX_BYTES = 1024 * 1024 * 10  # 10MB
    LOG_BACKUP_COUNT = 5
    LOG_TO_FILE = True

    # Candidate suggestion settings
    CURRENCY_SYMBOL = '₹'
    CANDIDATE_LOOKUP_WORKERS = int(os.environ.get('CANDIDATE_LOOKUP_WORKERS', 4))

    # Batches in these states never block a student's schedule
    INACTIVE_BATCH_STATUSES = ('ended', 'cancelled')

    # Payment states that still hold money owed by the student
    OUTSTANDING_PAYMENT_STATUSES = ('pending', 'partial', 'overdue')

    # Enrollment states counted as "currently studying" (None = legacy rows without a status)
    ACTIVE_ENROLLMENT_STATUSES = ('active', None)


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = os.environ.get('SQL_DEBUG', 'false').lower() == 'true'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')

    # host:port of a syslog collector for error logs, unset to disable
    SYSLOG_SERVER = os.environ.get('SYSLOG_SERVER')

    @classmethod
    def validate(cls):
        """Fail fast when required production settings are missing."""
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ValueError("DATABASE_URL environment variable must be set in production")


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    LOG_TO_FILE = False

    # In-memory SQLite is per-connection, so lookups must share one thread
    CANDIDATE_LOOKUP_WORKERS = 0


# Configuration dictionary
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(config_name=None):
    """
    Resolve a configuration class.

    Args:
        config_name (str): Name in config_by_name, defaults to FLASK_ENV or 'development'

    Raises:
        ValueError: If the name is not a known configuration
    """
    config_name = config_name or os.environ.get('FLASK_ENV', 'development')
    try:
        return config_by_name[config_name]
    except KeyError:
        raise ValueError(f"Unknown configuration: {config_name}")
