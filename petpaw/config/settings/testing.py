# config/settings/testing.py

import logging

from .base import *  # noqa

DEBUG = False
TESTING = True

ALLOWED_HOSTS = ["testserver", "localhost"]

REST_FRAMEWORK.update(  # noqa: F405
    {
        "TEST_REQUEST_DEFAULT_FORMAT": "json",
    }
)

# Use faster password hasher for testing
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "petpaw-tests",
    }
}

CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer",
    }
}

KAFKA_ENABLED = False

ROUTING_BACKEND = "osrm"
GOOGLE_MAPS_API_KEY = ""

# Disable logging during tests
logging.disable(logging.CRITICAL)
