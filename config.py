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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./ledger.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Ledger
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "USD")

    # Settlement notifications and reminders
    SETTLEMENT_NOTIFICATION_WEBHOOK = data.get("SETTLEMENT_NOTIFICATION_WEBHOOK", None)
    SETTLEMENT_REMINDER_ENABLED = bool(data.get("SETTLEMENT_REMINDER_ENABLED", True))
    SETTLEMENT_REMINDER_THRESHOLD = data.get("SETTLEMENT_REMINDER_THRESHOLD", 1000)  # Pending amount
    SETTLEMENT_REMINDER_INTERVAL_SECONDS = data.get("SETTLEMENT_REMINDER_INTERVAL_SECONDS", 86400)  # Daily

    # Live subscriptions
    SUBSCRIPTION_POLL_INTERVAL_SECONDS = data.get("SUBSCRIPTION_POLL_INTERVAL_SECONDS", 2.0)

    # Settlement statements
    STATEMENT_COMPANY_NAME = data.get("STATEMENT_COMPANY_NAME", "Project Tracker")
    STATEMENT_COMPANY_ADDRESS = data.get("STATEMENT_COMPANY_ADDRESS", "")
