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
    SERVICE_NAME = data.get("SERVICE_NAME", "Plot Ledger Service")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./plot_ledger.db")
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite:///./plot_ledger.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))  # create missing tables on API startup
    DB_ISOLATION_LEVEL = data.get("DB_ISOLATION_LEVEL", None)  # e.g. SERIALIZABLE on PostgreSQL
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Authentication
    JWT_SECRET = data.get("JWT_SECRET", "change-me")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_MINUTES = data.get("JWT_EXPIRES_MINUTES", 60 * 24 * 30)  # 30 days
    MIN_PASSWORD_LENGTH = data.get("MIN_PASSWORD_LENGTH", 6)

    # Uploaded receipts, identification and signature files
    UPLOADS_DIR = data.get("UPLOADS_DIR", os.path.join(ROOT_PATH, "uploads"))

    # Price used per plot when neither plot prices nor a caller price list are usable
    DEFAULT_PLOT_PRICE = data.get("DEFAULT_PLOT_PRICE", 50000)

    # Balance Reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
