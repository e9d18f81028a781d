import os
from pathlib import Path

from .log_config import configure_logging

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("STUDYPLANNER_SECRET_KEY", "dev-insecure-change-me")
DEBUG = _env_bool("STUDYPLANNER_DEBUG", default=True)
ALLOWED_HOSTS = os.environ.get("STUDYPLANNER_ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "flashcards",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "studyplanner.urls"
WSGI_APPLICATION = "studyplanner.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("STUDYPLANNER_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Calendar used for "today" and for review-day boundaries
USE_TZ = True
TIME_ZONE = os.environ.get("STUDYPLANNER_TIME_ZONE", "UTC")
LANGUAGE_CODE = "en-us"
USE_I18N = False

APPEND_SLASH = False

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
}

LOG_LEVEL = os.environ.get("STUDYPLANNER_LOG_LEVEL", "INFO")
LOGGING_CONFIG = None
configure_logging(LOG_LEVEL, json_output=not DEBUG)
