"""
Configuration settings for Cash Flow Forecast
"""

import os


def _env_float(name, default):
    return float(os.environ.get(name, default))


def _env_int(name, default):
    return int(os.environ.get(name, default))


def _env_bool(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """Base configuration"""
    # App
    APP_NAME = "Cash Flow Forecast"
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///cash_flow_forecast.db'
    )
    # Fix for Render PostgreSQL URLs
    if SQLALCHEMY_DATABASE_URI and SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Rate limiting
    RATELIMIT_DEFAULT = "100 per minute"
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    FORECAST_RATE_LIMIT = os.environ.get('FORECAST_RATE_LIMIT', '10 per hour')

    # Forecasting
    FORECAST_Z_SCORE = _env_float('FORECAST_Z_SCORE', '1.96')              # ~95% two-tailed
    FORECAST_CONFIDENCE_PERCENT = _env_int('FORECAST_CONFIDENCE_PERCENT', '95')
    FORECAST_SMOOTHING_ALPHA = _env_float('FORECAST_SMOOTHING_ALPHA', '0.3')
    FORECAST_MOVING_WINDOW = _env_int('FORECAST_MOVING_WINDOW', '7')
    FORECAST_MOVING_AVERAGE_FIT = _env_float('FORECAST_MOVING_AVERAGE_FIT', '0.70')
    FORECAST_EXPONENTIAL_FIT = _env_float('FORECAST_EXPONENTIAL_FIT', '0.75')
    FORECAST_MIN_HISTORY = _env_int('FORECAST_MIN_HISTORY', '7')
    FORECAST_MAX_HORIZON = _env_int('FORECAST_MAX_HORIZON', '90')
    FORECAST_DEFAULT_HORIZON = _env_int('FORECAST_DEFAULT_HORIZON', '30')
    FORECAST_HISTORY_DAYS = _env_int('FORECAST_HISTORY_DAYS', '60')       # default lookback window
    FORECAST_ANCHOR_TO_HISTORY = _env_bool('FORECAST_ANCHOR_TO_HISTORY', 'false')

    # Transaction classification used by the trend repository
    INCOME_TRANSACTION_TYPES = ('income', 'receivable')
    EXPENSE_TRANSACTION_TYPES = ('expense',)


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///cash_flow_forecast_dev.db'
    )


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # Ensure secret key is set in production
    SECRET_KEY = os.environ.get('SECRET_KEY')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False


# Config mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get config based on environment"""
    env = os.environ.get('FLASK_ENV', 'development')
    config_class = config.get(env, config['default'])
    if config_class is ProductionConfig and not config_class.SECRET_KEY:
        raise ValueError("SECRET_KEY must be set in production")
    return config_class
