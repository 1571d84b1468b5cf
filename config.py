"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    JSON_SORT_KEYS = False

    # Database - Support multiple environment variable naming conventions
    # Priority: DATABASE_URL > DB_* > POSTGRES_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        # Try DB_* variables (Docker style)
        DB_HOST = os.getenv('DB_HOST') or os.getenv('POSTGRES_HOST', 'localhost')
        DB_PORT = os.getenv('DB_PORT') or os.getenv('POSTGRES_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME') or os.getenv('POSTGRES_DB', 'envirops')
        DB_USER = os.getenv('DB_USER') or os.getenv('POSTGRES_USER', 'envirops')
        DB_PASSWORD = os.getenv('DB_PASSWORD') or os.getenv('POSTGRES_PASSWORD', 'envirops')

        DATABASE_URL = (
            f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'

    # Company information (printed on quotations and orders)
    COMPANY_NAME = os.getenv('COMPANY_NAME', 'Sociedad General Ambiental e Ingenieros SAC')
    COMPANY_RUC = os.getenv('COMPANY_RUC', '20608328786')
    COMPANY_ADDRESS = os.getenv('COMPANY_ADDRESS', 'Jr. San Martin 1582 - PN')
    COMPANY_EMAIL = os.getenv('COMPANY_EMAIL', 'ventas@ambientalpe.com')
    COMPANY_PHONE = os.getenv('COMPANY_PHONE', '')
    QUOTATION_VALID_DAYS = int(os.getenv('QUOTATION_VALID_DAYS', '15'))

    # Dashboard aggregation
    USD_TO_PEN_RATE = os.getenv('USD_TO_PEN_RATE', '3.7')
    ACTIVE_CLIENT_MONTHS = int(os.getenv('ACTIVE_CLIENT_MONTHS', '3'))

    # Redis Cache Configuration
    # Shared cache layer for dashboard aggregates
    REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/0')
    CACHE_ENABLED = os.getenv('CACHE_ENABLED', 'true').lower() == 'true'
    CACHE_DEFAULT_TTL = int(os.getenv('CACHE_DEFAULT_TTL', '60'))  # seconds
    CACHE_DASHBOARD_TTL = int(os.getenv('CACHE_DASHBOARD_TTL', '120'))
    CACHE_KEY_PREFIX = os.getenv('CACHE_KEY_PREFIX', 'envirops')

    # Error tracking
    SENTRY_DSN = os.getenv('SENTRY_DSN')


class TestingConfig(Config):
    """Configuration used by the test-suite (in-memory SQLite, no Redis)."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False
    CACHE_ENABLED = False
    SENTRY_DSN = None
