"""
Settings used by the pytest suite.

Runs the compliance sync inline, keeps evidence in memory and swaps in a
fast password hasher.
"""

from .settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

STORAGES = {
    **STORAGES,  # noqa: F405
    "evidence": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
}

COMPLIANCE_SYNC = {
    **COMPLIANCE_SYNC,  # noqa: F405
    "WEBHOOK_URL": "https://sheets.example.test/hook",
    "MODE": "eager",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "root": {"handlers": ["null"], "level": "WARNING"},
}
