import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    """Process environment wins over env.yaml"""
    if key in os.environ:
        return os.environ[key]
    return data.get(key, default)


def _get_bool(key, default):
    value = _get(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _get_float(key, default):
    return float(_get(key, default))


def _get_int(key, default):
    return int(_get(key, default))


def _get_list(key, default):
    value = _get(key, default)
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(value)


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./council_admin.db")
    API_PREFIX = _get("API_PREFIX", "/api")
    API_PORT = _get_int("API_PORT", 8000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get_list("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")
    ENVIRONMENT = _get("ENVIRONMENT", "development")

    JWT_SECRET = _get("JWT_SECRET")
    ENCRYPTION_KEY = _get("ENCRYPTION_KEY")

    SITE_URL = _get("SITE_URL", "http://localhost:8000")
    ADMIN_EMAIL = _get("ADMIN_EMAIL")
    NOTIFICATION_EMAIL = _get("NOTIFICATION_EMAIL")

    RECAPTCHA_SECRET_KEY = _get("RECAPTCHA_SECRET_KEY")
    RECAPTCHA_SITE_KEY = _get("RECAPTCHA_SITE_KEY")
    RECAPTCHA_THRESHOLD = _get_float("RECAPTCHA_THRESHOLD", 0.5)
    RECAPTCHA_ENABLED = _get_bool("RECAPTCHA_ENABLED", True)
    RECAPTCHA_FAIL_OPEN = _get_bool("RECAPTCHA_FAIL_OPEN", True)

    GMAIL_CLIENT_ID = _get("GMAIL_CLIENT_ID")
    GMAIL_CLIENT_SECRET = _get("GMAIL_CLIENT_SECRET")
    GMAIL_REFRESH_TOKEN = _get("GMAIL_REFRESH_TOKEN")

    SETTINGS_CACHE_TTL_SECONDS = _get_float("SETTINGS_CACHE_TTL_SECONDS", 60)
