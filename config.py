import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoicing.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = data.get("API_RELOAD", False)
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Authenticated user id is injected by the upstream gateway
    AUTH_USER_HEADER = data.get("AUTH_USER_HEADER", "X-User-Id")

    # Invoice defaults
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "EUR")
    DEFAULT_TAX_RATE = data.get("DEFAULT_TAX_RATE", 20)  # Percent
    DEFAULT_PAYMENT_DAYS = data.get("DEFAULT_PAYMENT_DAYS", 30)  # Due date offset
    INVOICE_NUMBER_PREFIX = data.get("INVOICE_NUMBER_PREFIX", "INV")

    # Invoice e-mail delivery
    EMAIL_API_URL = data.get("EMAIL_API_URL", None)  # None = log only
    EMAIL_API_TIMEOUT = data.get("EMAIL_API_TIMEOUT", 10.0)  # Seconds
    EMAIL_FROM_ADDRESS = data.get("EMAIL_FROM_ADDRESS", "noreply@facturation.app")

    # Overdue detection worker
    OVERDUE_CHECK_ENABLED = bool(data.get("OVERDUE_CHECK_ENABLED", True))
    OVERDUE_CHECK_INTERVAL_SECONDS = data.get("OVERDUE_CHECK_INTERVAL_SECONDS", 3600)  # Hourly
