import logging
import os
import secrets
from pathlib import Path
from dotenv import load_dotenv
from werkzeug.security import generate_password_hash

def get_bool_env(key: str) -> bool:
    return os.environ.get(key, '0').lower() in ['true', '1', 'yes']

# If in development mode, load .env variables as fallback
if get_bool_env('DEBUG'):
    load_dotenv(override=False)

    if not os.environ.get('ADMIN_PASSWORD_HASH'):
        password = secrets.token_urlsafe(12)
        os.environ['ADMIN_PASSWORD_HASH'] = generate_password_hash(password)
        logging.warning(f"ADMIN_PASSWORD_HASH not set, generated admin password for this run: {password}")

PACKAGE_DIR = Path(__file__).resolve().parent

class Config:
    DEBUG = get_bool_env('DEBUG')
    TEST = get_bool_env('TEST')
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 4000)
    SITE_TITLE = os.environ.get('SITE_TITLE') or 'Assets'
    UPLOADS_DIR = Path(os.environ.get('UPLOADS_DIR') or 'uploads')
    THUMBNAILS_DIR = Path(os.environ.get('THUMBNAILS_DIR') or 'thumbnails')
    ASSETS_DIR = Path(os.environ.get('ASSETS_DIR') or PACKAGE_DIR / 'assets')
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH')
    SENTRY_DSN = os.environ.get('SENTRY_DSN')
    THUMBNAIL_SIZE = (100, 100)

class DevelopmentConfig(Config):
    DEBUG = True

class TestConfig(Config):
    TEST = True
    ADMIN_USERNAME = 'admin'
    SENTRY_DSN = None
    def __init__(self):
        self.ADMIN_PASSWORD_HASH = generate_password_hash('testpassword')

class ProductionConfig(Config):
    def __init__(self):
        if self.ADMIN_PASSWORD_HASH is None:
            raise ValueError('ADMIN_PASSWORD_HASH must be set in production')

def get_config() -> Config:
    is_test = get_bool_env('TEST')
    is_dev = get_bool_env('DEBUG')
    config_class = TestConfig if is_test else DevelopmentConfig if is_dev else ProductionConfig
    return config_class()
