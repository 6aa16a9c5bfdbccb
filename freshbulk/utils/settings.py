# freshbulk/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")  # memory | sql
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./freshbulk.db")

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = _flag("CELERY_TASK_ALWAYS_EAGER", "false")

SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY", "")
SENDGRID_API_URL = os.getenv("SENDGRID_API_URL", "https://api.sendgrid.com/v3/mail/send")
EMAIL_FROM = os.getenv("EMAIL_FROM", "orders@freshbulk.com")
EMAIL_FROM_NAME = os.getenv("EMAIL_FROM_NAME", "FreshBulk Orders")
SUPPORT_EMAIL = os.getenv("SUPPORT_EMAIL", "support@freshbulk.com")

ORDER_NUMBER_PREFIX = os.getenv("ORDER_NUMBER_PREFIX", "FBO-")
SEED_PRODUCTS = _flag("SEED_PRODUCTS", "true")

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@freshbulk.com")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
