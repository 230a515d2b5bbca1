"""
PATH: storefront/settings/base.py

BASE SETTINGS (shared by dev + prod)

Storefront runtime:
- Backend REST API location (products, categories, orders, auth, Stripe sessions)
- Data cache lifetimes + revalidation webhook secret
- Cart / favorites cookie lifetimes
- Throttling for the public JSON endpoints
- Sentry (optional): error visibility in production
"""

from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import environ
from corsheaders.defaults import default_headers, default_methods

# -----------------------------------------
# BASE DIRECTORY
# -----------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# -----------------------------------------
# TEST MODE DETECTION
# -----------------------------------------
TESTING = "test" in sys.argv or "pytest" in sys.modules

# -----------------------------------------
# ENV (django-environ)
# -----------------------------------------
env = environ.Env(
    DEBUG=(bool, True),
    SECRET_KEY=(str, ""),
    TIME_ZONE=(str, "Europe/Bucharest"),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1", "testserver"]),
    CORS_ALLOWED_ORIGINS=(list, ["http://localhost:3000"]),
    CSRF_TRUSTED_ORIGINS=(list, ["http://localhost:3000"]),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    CACHE_URL=(str, "locmemcache://storefront"),
    # Backend REST API
    BACKEND_API_BASE_URL=(str, "http://localhost:8000"),
    BACKEND_API_PREFIX=(str, "/api/v1"),
    BACKEND_API_TIMEOUT=(int, 15),
    # Revalidation webhook
    WEBHOOK_SECRET=(str, "dev-webhook-secret"),
    # Data cache lifetimes (seconds)
    CATALOG_CACHE_TTL=(int, 1800),
    CATEGORY_CACHE_TTL=(int, 3600),
    # Cookies
    CART_COOKIE_MAX_AGE_DAYS=(int, 7),
    FAVORITES_COOKIE_MAX_AGE_DAYS=(int, 365),
    # Money
    VAT_RATE=(str, "0.21"),
    STORE_CURRENCY=(str, "RON"),
    # Throttling
    THROTTLE_ANON_RATE=(str, "120/min"),
    THROTTLE_PUBLIC_WRITE_RATE=(str, "60/min"),
    THROTTLE_WEBHOOK_RATE=(str, "600/min"),
    # Sentry (optional; enable by setting SENTRY_DSN)
    SENTRY_DSN=(str, ""),
    SENTRY_ENVIRONMENT=(str, "development"),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.0),
    SENTRY_SEND_PII=(bool, False),
    LOG_LEVEL=(str, "INFO"),
)

# -----------------------------------------
# LOAD .env
# -----------------------------------------
env_file_1 = BASE_DIR / ".env"
env_file_2 = BASE_DIR.parent / ".env"

if env_file_1.exists():
    env.read_env(str(env_file_1))
elif env_file_2.exists():
    env.read_env(str(env_file_2))

# -----------------------------------------
# CORE SECURITY
# -----------------------------------------
SECRET_KEY = (env("SECRET_KEY") or "dev-insecure-change-me").strip()
DEBUG = env.bool("DEBUG")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS")

# -----------------------------------------
# I18N / TZ
# -----------------------------------------
LANGUAGE_CODE = "en"
LANGUAGES = [
    ("en", "English"),
    ("ro", "Română"),
]
TIME_ZONE = (env("TIME_ZONE") or "UTC").strip()
USE_I18N = True
USE_TZ = True

# -----------------------------------------
# INSTALLED APPS
# -----------------------------------------
INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "catalog.apps.CatalogConfig",
    "cart.apps.CartConfig",
    "accounts.apps.AccountsConfig",
    "checkout.apps.CheckoutConfig",
    "pages.apps.PagesConfig",
    "revalidation.apps.RevalidationConfig",
]

# -----------------------------------------
# MIDDLEWARE
# -----------------------------------------
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "storefront.urls"
WSGI_APPLICATION = "storefront.wsgi.application"
APPEND_SLASH = True

# -----------------------------------------
# TEMPLATES
# -----------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [str(BASE_DIR / "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.template.context_processors.i18n",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "catalog.context_processors.storefront",
                "cart.context_processors.cart_summary",
                "accounts.context_processors.shopper",
            ],
        },
    }
]

# -----------------------------------------
# SESSIONS
# -----------------------------------------
# The storefront owns no tables: shopper sessions (backend auth token) live
# in a signed cookie.
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
MESSAGE_STORAGE = "django.contrib.messages.storage.cookie.CookieStorage"

# -----------------------------------------
# REST FRAMEWORK
# -----------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.AllowAny",),
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_THROTTLE_CLASSES": ("rest_framework.throttling.AnonRateThrottle",),
    "DEFAULT_THROTTLE_RATES": {
        "anon": env("THROTTLE_ANON_RATE"),
        "public_write": env("THROTTLE_PUBLIC_WRITE_RATE"),
        "webhook": env("THROTTLE_WEBHOOK_RATE"),
    },
}

# -----------------------------------------
# DATABASE
# -----------------------------------------
# Only django.contrib.auth/contenttypes need one; nothing storefront-specific
# is persisted.
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

# -----------------------------------------
# CACHE (data cache + revalidation versions + throttling)
# -----------------------------------------
CACHES = {
    "default": env.cache("CACHE_URL"),
}

# -----------------------------------------
# BACKEND API
# -----------------------------------------
BACKEND_API = {
    "BASE_URL": (env("BACKEND_API_BASE_URL") or "").strip().rstrip("/"),
    "PREFIX": "/" + (env("BACKEND_API_PREFIX") or "").strip().strip("/"),
    "TIMEOUT": env.int("BACKEND_API_TIMEOUT"),
}

# -----------------------------------------
# REVALIDATION WEBHOOK
# -----------------------------------------
WEBHOOK_SECRET = (env("WEBHOOK_SECRET") or "").strip()

# -----------------------------------------
# DATA CACHE LIFETIMES
# -----------------------------------------
CATALOG_CACHE_TTL = env.int("CATALOG_CACHE_TTL")
CATEGORY_CACHE_TTL = env.int("CATEGORY_CACHE_TTL")

# -----------------------------------------
# CART / FAVORITES COOKIES
# -----------------------------------------
CART_COOKIE_NAME = "cart"
CART_COOKIE_MAX_AGE_DAYS = env.int("CART_COOKIE_MAX_AGE_DAYS")
FAVORITES_COOKIE_NAME = "favorites"
FAVORITES_COOKIE_MAX_AGE_DAYS = env.int("FAVORITES_COOKIE_MAX_AGE_DAYS")

# -----------------------------------------
# MONEY
# -----------------------------------------
VAT_RATE = Decimal((env("VAT_RATE") or "0.21").strip())
STORE_CURRENCY = (env("STORE_CURRENCY") or "RON").strip()

# -----------------------------------------
# SENTRY (optional)
# -----------------------------------------
SENTRY_DSN = (env("SENTRY_DSN") or "").strip()
SENTRY_ENVIRONMENT = (env("SENTRY_ENVIRONMENT") or "development").strip()
SENTRY_TRACES_SAMPLE_RATE = float(env("SENTRY_TRACES_SAMPLE_RATE"))
SENTRY_SEND_PII = env.bool("SENTRY_SEND_PII")

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        integrations=[DjangoIntegration()],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=SENTRY_SEND_PII,
    )

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = (env("LOG_LEVEL") or "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        app: {
            "handlers": ["console"],
            "level": "CRITICAL" if TESTING else LOG_LEVEL,
            "propagate": False,
        }
        for app in ("catalog", "cart", "accounts", "checkout", "pages", "revalidation")
    },
}

# -----------------------------------------
# CORS / CSRF
# -----------------------------------------
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS")
CORS_URLS_REGEX = r"^/api/.*$"
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = list(default_methods)
CORS_ALLOW_HEADERS = list(default_headers) + ["x-webhook-signature"]

CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS")

# -----------------------------------------
# STATIC FILES
# -----------------------------------------
STATIC_URL = "static/"
STATICFILES_DIRS = [str(BASE_DIR / "static")]
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------
# SWAGGER
# -----------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "HORECA Storefront API",
    "DESCRIPTION": "Cart, favorites and cache revalidation endpoints of the storefront",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}
