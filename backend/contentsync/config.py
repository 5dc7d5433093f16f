import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ROLE_CLAIM = os.getenv("JWT_ROLE_CLAIM", "role")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Preview sync
    PREVIEW_POLL_INTERVAL = float(os.getenv("PREVIEW_POLL_INTERVAL", "1.0"))

    # Client adapter (HttpVersionStore)
    CONTENT_API_URL = os.getenv("CONTENT_API_URL", "http://localhost:5000/api/v1")
    CONTENT_API_TIMEOUT = float(os.getenv("CONTENT_API_TIMEOUT", "10.0"))

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///contentsync-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    PREVIEW_POLL_INTERVAL = 0.05

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
