"""
Base Django settings for LicenseConsole.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-6v2!kq3w9x@r8m#t1z$e7c^a0p)h4n&j5u*d(l+s-f_g=y%b"
)

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "LicenseConsole",
    "core",
    "admins",
    "teams",
    "quotas",
    "licenses",
    "notifications",
    "purchases",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    # Custom middleware
    "core.middleware.metrics.MetricsMiddleware",
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.auth.AdminAuthenticationMiddleware",
]

ROOT_URLCONF = "LicenseConsole.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
            ],
        },
    },
]

WSGI_APPLICATION = "LicenseConsole.wsgi.application"
ASGI_APPLICATION = "LicenseConsole.asgi.application"

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "license_console"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    # Admin access is enforced by AdminAuthenticationMiddleware
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [],
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Console API",
    "DESCRIPTION": (
        "Admin console API for partner programs. "
        "Provides endpoints for assigning licenses, managing teams "
        "and crediting license purchases."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "Licenses", "description": "License assignment and CSV import/export"},
        {"name": "Teams", "description": "Team membership and invitations"},
        {"name": "Purchases", "description": "License purchases"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Links and branding
APP_BASE_URL = os.environ.get("APP_BASE_URL", "https://business.moilapp.com")
DASHBOARD_URL = os.environ.get("DASHBOARD_URL", "/admin/dashboard")
PRODUCT_SLUG = os.environ.get("PRODUCT_SLUG", "buda-hive")

DEFAULT_PARTNER_BRAND = os.environ.get("DEFAULT_PARTNER_BRAND", "buda-hive")
PARTNER_BRANDS = {
    "buda-hive": {
        "ref": "budaHive",
        "program_name": "Buda Hive",
        "full_name": "Buda Hive Entrepreneurship Program",
        "support_email": "support@budaedc.com",
        "primary_color": "#1e40af",
        "license_duration": "1 year",
        "job_posts": 3,
        "domains": ["budaedc.com"],
    },
}

# Email delivery
DEFAULT_FROM_EMAIL = os.environ.get("FROM_EMAIL", "Buda Hive <onboarding@resend.dev>")
EMAIL_SENDER_BACKEND = os.environ.get("EMAIL_SENDER_BACKEND", "resend")
EMAIL_PROVIDER_API_KEY = os.environ.get("RESEND_API", "")
EMAIL_PROVIDER_BASE_URL = os.environ.get("EMAIL_PROVIDER_BASE_URL", "https://api.resend.com")
EMAIL_PROVIDER_TIMEOUT = float(os.environ.get("EMAIL_PROVIDER_TIMEOUT", "10"))

# Payments
PAYMENT_API_BASE_URL = os.environ.get("PAYMENT_API_BASE_URL", "https://moilapp.com/api")
PAYMENT_API_KEY = os.environ.get("PAYMENT_API_KEY", "")
PAYMENT_PROVIDER_TIMEOUT = float(os.environ.get("PAYMENT_PROVIDER_TIMEOUT", "10"))

# Teams
TEAM_ALLOWED_DOMAINS = [
    d.strip().lower()
    for d in os.environ.get("TEAM_ALLOWED_DOMAINS", "budaedc.com,moilapp.com").split(",")
    if d.strip()
]
TEAM_DOMAIN_LABELS = {
    "budaedc.com": "Buda EDC",
    "moilapp.com": "Moil",
}
INVITATION_TTL_DAYS = int(os.environ.get("INVITATION_TTL_DAYS", "7"))

# Quota
ENFORCE_SOLO_ADMIN_QUOTA = os.environ.get("ENFORCE_SOLO_ADMIN_QUOTA", "false").lower() == "true"

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
