"""
Test settings for LicenseConsole.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# Use in-memory SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
# Apps without migrations are created with syncdb by pytest-django
MIGRATION_MODULES = {}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Outbound calls stay in-process
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
EMAIL_SENDER_BACKEND = "django"
PAYMENT_API_KEY = "test-key"

ENFORCE_SOLO_ADMIN_QUOTA = False

# Disable logging during tests
LOGGING_CONFIG = None
