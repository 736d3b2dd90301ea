# config/settings/development.py

from .base import *  # noqa

DEBUG = True

ALLOWED_HOSTS = ["*"]

LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
