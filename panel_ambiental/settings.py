import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or os.getenv("SECRET_KEY", "dev-secret-key")
DEBUG = os.getenv("DJANGO_DEBUG", os.getenv("DEBUG", "True")).lower() == "true"

ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",")
CSRF_TRUSTED_ORIGINS = os.getenv(
    "CSRF_TRUSTED_ORIGINS",
    "http://localhost,http://127.0.0.1"
).split(",")

# If deploying on Render, automatically allow the Render external host
RENDER_EXTERNAL_URL = os.getenv("RENDER_EXTERNAL_URL")
if RENDER_EXTERNAL_URL:
    _host = RENDER_EXTERNAL_URL.replace("https://", "").replace("http://", "")
    if _host and _host not in ALLOWED_HOSTS:
        ALLOWED_HOSTS.append(_host)
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# -----------------------------
# Remote API (backend CMS)
# -----------------------------
PANEL_BACKEND_URL = os.getenv("PANEL_BACKEND_URL", "http://localhost:3000").rstrip("/")
PANEL_API_TIMEOUT = float(os.getenv("PANEL_API_TIMEOUT", "10"))
PANEL_AUTH_COOKIE = os.getenv("PANEL_AUTH_COOKIE", "payload-token")
# Seconds; empty means a browser-session cookie
_cookie_max_age = os.getenv("PANEL_AUTH_COOKIE_MAX_AGE", "")
PANEL_AUTH_COOKIE_MAX_AGE = int(_cookie_max_age) if _cookie_max_age else None

# -----------------------------
# Installed Apps
# -----------------------------
INSTALLED_APPS = [
    "django.contrib.sessions",
    "django.contrib.staticfiles",

    # our apps
    "core",
    "accounts",
    "users_ui",
    "users_ui.admin_panel",
    "users_ui.editor_ambiente",
    "users_ui.editor_catalogo",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "accounts.middleware.RoleRedirectMiddleware",
]

ROOT_URLCONF = "panel_ambiental.main_urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "panel_ambiental" / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "accounts.context_processors.panel_menu",
                "accounts.context_processors.session_messages",
            ],
        },
    },
]

WSGI_APPLICATION = "panel_ambiental.wsgi.application"

# -----------------------------
# No local database: all records live behind the remote API
# -----------------------------
DATABASES = {}

# Sessions only carry flash messages and the last refused path
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"

LANGUAGE_CODE = "es-pe"
TIME_ZONE = os.getenv("TIME_ZONE", "America/Lima")
USE_I18N = True
USE_TZ = True

# -----------------------------
# Static
# -----------------------------
STATIC_URL = "/static/"
STATICFILES_DIRS = [
    BASE_DIR / "static",
]

STATIC_ROOT = BASE_DIR / "staticfiles"

STORAGES = {
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedStaticFilesStorage",
    }
}

# -----------------------------
# Logging
# -----------------------------
PANEL_LOG_LEVEL = os.getenv("PANEL_LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "panel": {
            "format": "[%(asctime)s] [PANEL] %(levelname)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "panel",
        },
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "accounts": {"handlers": ["console"], "level": PANEL_LOG_LEVEL, "propagate": False},
        "core": {"handlers": ["console"], "level": PANEL_LOG_LEVEL, "propagate": False},
        "users_ui": {"handlers": ["console"], "level": PANEL_LOG_LEVEL, "propagate": False},
        "utils": {"handlers": ["console"], "level": PANEL_LOG_LEVEL, "propagate": False},
    },
}

# Production security hardening (only when not DEBUG)
if not DEBUG:
    SECURE_SSL_REDIRECT = os.getenv("DJANGO_SSL_REDIRECT", "True").lower() == "true"
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    # Optional HSTS controlled via environment, defaults off for flexibility
    SECURE_HSTS_SECONDS = int(os.getenv("DJANGO_HSTS_SECONDS", "0"))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = os.getenv("DJANGO_HSTS_INCLUDE_SUBDOMAINS", "False").lower() == "true"
    SECURE_HSTS_PRELOAD = os.getenv("DJANGO_HSTS_PRELOAD", "False").lower() == "true"
