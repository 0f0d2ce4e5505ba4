"""Settings for the test suite.

Supplies the values that ``config.settings`` refuses to default and
swaps Redis and the on-disk database for in-memory backends.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-use-only")
os.environ.setdefault("FRETE_API_BASE_URL", "https://freight.test/api")
os.environ.setdefault("FRETE_API_ACCESS_TOKEN", "test-freight-token")

from config.settings import *  # noqa: E402,F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {**REST_FRAMEWORK, "DEFAULT_THROTTLE_CLASSES": []}  # noqa: F405
