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
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Invoice numbering
    INVOICE_NUMBER_MAX_RETRIES = data.get("INVOICE_NUMBER_MAX_RETRIES", 3)

    # PDF layout character budgets
    PDF_ADDRESS_LINE_CHARS = data.get("PDF_ADDRESS_LINE_CHARS", 45)
    PDF_DESCRIPTION_MAX_CHARS = data.get("PDF_DESCRIPTION_MAX_CHARS", 42)

    # Document storage: "local" or "s3"
    STORAGE_BACKEND = data.get("STORAGE_BACKEND", "local")
    STORAGE_LOCAL_DIR = data.get("STORAGE_LOCAL_DIR", os.path.join(ROOT_PATH, "local_storage"))
    STORAGE_PUBLIC_URL = data.get("STORAGE_PUBLIC_URL", "/api/storage")
    STORAGE_BUCKET_NAME = data.get("STORAGE_BUCKET_NAME", "invoices")
    STORAGE_ENDPOINT_URL = data.get("STORAGE_ENDPOINT_URL", None)
    STORAGE_REGION = data.get("STORAGE_REGION", None)
    STORAGE_ACCESS_KEY_ID = data.get("STORAGE_ACCESS_KEY_ID", None)
    STORAGE_SECRET_ACCESS_KEY = data.get("STORAGE_SECRET_ACCESS_KEY", None)
    STORAGE_URL_EXPIRES_IN = data.get("STORAGE_URL_EXPIRES_IN", 3600)

    # Outgoing email (SMTP). Without SMTP_HOST sending fails unless
    # EMAIL_LOG_ONLY is set, in which case emails are only logged.
    SMTP_HOST = data.get("SMTP_HOST", None)
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USER = data.get("SMTP_USER", None)
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", None)
    SMTP_FROM_EMAIL = data.get("SMTP_FROM_EMAIL", "factures@example.com")
    SMTP_TIMEOUT = data.get("SMTP_TIMEOUT", 30)
    EMAIL_LOG_ONLY = bool(data.get("EMAIL_LOG_ONLY", 0))
