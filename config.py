import os
from dotenv import load_dotenv

# Load .env file only in development environment
if os.environ.get('FLASK_ENV') != 'production':
    load_dotenv()


def _env_bool(name, default):
    return os.environ.get(name, str(default)).lower() in ('1', 'true', 'yes')


def _env_optional_int(name):
    value = os.environ.get(name)
    return int(value) if value else None


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'a_very_secret_key_for_dev')
    MONGO_URI = os.environ.get('MONGODB_URI')
    MONGO_DB_NAME = os.environ.get('MONGO_DB_NAME', 'newsparser')
    NEWS_API_KEY = os.environ.get('NEWS_API_KEY')
    NEWS_API_COUNTRY = os.environ.get('NEWS_API_COUNTRY', 'us')
    NEWS_API_PAGE_SIZE = _env_optional_int('NEWS_API_PAGE_SIZE')
    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    FLASK_DEBUG = _env_bool('FLASK_DEBUG', False)
    FETCH_INTERVAL_MINUTES = int(os.environ.get('FETCH_INTERVAL_MINUTES', 20))
    SCHEDULER_ENABLED = _env_bool('SCHEDULER_ENABLED', True)
    INGEST_DEDUPE_WITHIN_BATCH = _env_bool('INGEST_DEDUPE_WITHIN_BATCH', False)

    @classmethod
    def validate(cls):
        if not cls.MONGO_URI:
            raise ValueError("No MONGODB_URI provided in environment variables")
        if not cls.NEWS_API_KEY:
            raise ValueError("No NEWS_API_KEY provided in environment variables")


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    FLASK_ENV = 'production'


class TestingConfig(Config):
    TESTING = True
    MONGO_URI = 'mongodb://localhost:27017'
    MONGO_DB_NAME = 'newsparser_test'
    NEWS_API_KEY = 'test-key'
    SCHEDULER_ENABLED = False


def get_config():
    env = os.environ.get('FLASK_ENV', 'development')
    if env == 'development':
        return DevelopmentConfig
    if env == 'testing':
        return TestingConfig
    return ProductionConfig
