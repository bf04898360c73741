"""
Environment-aware configuration.
Values come from the process environment (and .env, if present).
create_app() freezes the auth-related keys into an AuthSettings instance, so
changing app.config after startup has no effect on token handling.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" is the only platform on which POST /admin/reset is allowed
    PLATFORM = os.getenv("PLATFORM", "prod")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

    # tokens
    JWT_SECRET = os.getenv("JWT_SECRET", "")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chirpy-access")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "3600")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))

    # webhook caller (Polka)
    POLKA_KEY = os.getenv("POLKA_KEY", "")

    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", os.path.join(PROJECT_ROOT, "public"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    PLATFORM = os.getenv("PLATFORM", "dev")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me-0123456789abcdef")


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    DATABASE_URL = "sqlite:///:memory:"
    SQL_ECHO = False
    JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
    POLKA_KEY = "test-polka-key-f271c81ff7084ee5b99a5091b42d486e"


class ProductionConfig(BaseConfig):
    DEBUG = False


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
