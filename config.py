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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./advisor_auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Password reset
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    PASSWORD_RESET_EXPIRY_HOURS = float(data.get("PASSWORD_RESET_EXPIRY_HOURS", 1))
    BCRYPT_ROUNDS = max(int(data.get("BCRYPT_ROUNDS", 12)), 12)
    TOKEN_SWEEP_ENABLED = bool(data.get("TOKEN_SWEEP_ENABLED", True))
    TOKEN_SWEEP_INTERVAL_MINUTES = float(data.get("TOKEN_SWEEP_INTERVAL_MINUTES", 5))

    # Per-client limit on the public reset endpoints
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
    PASSWORD_RESET_RATE_LIMIT = data.get("PASSWORD_RESET_RATE_LIMIT", "5/hour")

    # Outbound mail
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_FROM = data.get("SMTP_FROM", "")
    SMTP_TIMEOUT_SECONDS = float(data.get("SMTP_TIMEOUT_SECONDS", 10))
