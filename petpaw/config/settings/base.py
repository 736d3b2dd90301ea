# config/settings/base.py

from pathlib import Path

import dj_database_url
import environ

env = environ.Env(
    SECRET_KEY=(str, "django-insecure-petpaw-dev-key"),
    DEBUG=(bool, False),
    DJANGO_ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
    DATABASE_URL=(str, ""),
    REDIS_HOST=(str, "localhost"),
    REDIS_PORT=(int, 6379),
    REDIS_DB=(int, 0),
    KAFKA_ENABLED=(bool, False),
    KAFKA_BOOTSTRAP_SERVERS=(str, "localhost:9092"),
    KAFKA_CLIENT_ID=(str, "petpaw-service"),
    KAFKA_GROUP_ID=(str, "petpaw-service"),
    ROUTING_BACKEND=(str, "osrm"),
    OSRM_BASE_URL=(str, "http://router.project-osrm.org/route/v1/driving"),
    GOOGLE_MAPS_API_KEY=(str, ""),
    LOCATION_SIGNIFICANT_CHANGE_METERS=(float, 10.0),
    COURIER_LOCATION_TTL=(int, 300),
    LOCATION_UPDATE_INTERVAL_SECONDS=(int, 120),
    TRACKING_POLL_INTERVAL_SECONDS=(int, 10),
    RIDE_BASE_FARE=(str, "5.00"),
    RIDE_PER_KM_FARE=(str, "1.50"),
    ORDER_DELIVERY_FEE=(str, "3.00"),
    RIDER_EARNINGS_RATE=(str, "0.80"),
)

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

(BASE_DIR / "logs").mkdir(exist_ok=True)

env_file = BASE_DIR / ".env"
if env_file.exists():
    environ.Env.read_env(env_file)

SECRET_KEY = env("SECRET_KEY")

DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("DJANGO_ALLOWED_HOSTS")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third-party apps
    "channels",
    "rest_framework",
    "rest_framework.authtoken",
    # Local apps
    "apps.core",
    "apps.accounts",
    "apps.drivers",
    "apps.riders",
    "apps.rides",
    "apps.catalog",
    "apps.orders",
    "apps.tracking",
    "apps.events",
    "apps.notifications",
    "apps.pets",
    "apps.bookings",
    "apps.tamagotchi",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"


# Database
def get_database_config():
    """DATABASE_URL when set (postgres in deployment), local sqlite otherwise"""
    database_url = env("DATABASE_URL")
    if database_url:
        return {"default": dj_database_url.parse(database_url, conn_max_age=600)}
    return {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


DATABASES = get_database_config()

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "static"
MEDIA_URL = "media/"
MEDIA_ROOT = BASE_DIR / "media"


# Redis: cache and channel layer
REDIS_HOST = env("REDIS_HOST")
REDIS_PORT = env("REDIS_PORT")
REDIS_DB = env("REDIS_DB")

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": f"redis://{REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}",
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
        },
        "KEY_PREFIX": "petpaw",
    }
}

CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels_redis.core.RedisChannelLayer",
        "CONFIG": {
            "hosts": [(REDIS_HOST, REDIS_PORT)],
        },
    }
}


# Kafka
KAFKA_ENABLED = env("KAFKA_ENABLED")
KAFKA_BOOTSTRAP_SERVERS = env("KAFKA_BOOTSTRAP_SERVERS")
KAFKA_CLIENT_ID = env("KAFKA_CLIENT_ID")
KAFKA_GROUP_ID = env("KAFKA_GROUP_ID")


# Routing and tracking
ROUTING_BACKEND = env("ROUTING_BACKEND")
OSRM_BASE_URL = env("OSRM_BASE_URL")
GOOGLE_MAPS_API_KEY = env("GOOGLE_MAPS_API_KEY")
LOCATION_SIGNIFICANT_CHANGE_METERS = env("LOCATION_SIGNIFICANT_CHANGE_METERS")
COURIER_LOCATION_TTL = env("COURIER_LOCATION_TTL")
LOCATION_UPDATE_INTERVAL_SECONDS = env("LOCATION_UPDATE_INTERVAL_SECONDS")
TRACKING_POLL_INTERVAL_SECONDS = env("TRACKING_POLL_INTERVAL_SECONDS")


# Pricing
RIDE_BASE_FARE = env("RIDE_BASE_FARE")
RIDE_PER_KM_FARE = env("RIDE_PER_KM_FARE")
ORDER_DELIVERY_FEE = env("ORDER_DELIVERY_FEE")
RIDER_EARNINGS_RATE = env("RIDER_EARNINGS_RATE")


# Rest Framework Configuration
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "apps.core.authentication.BearerTokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "EXCEPTION_HANDLER": "apps.core.exceptions.exception_handler",
}


# Logging Configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
        "file": {
            "level": "DEBUG",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(BASE_DIR / "logs" / "petpaw.log"),
            "maxBytes": 1024 * 1024 * 5,  # 5 MB
            "backupCount": 5,
            "formatter": "verbose",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": True,
        },
        "apps": {
            "handlers": ["console", "file"],
            "level": "DEBUG" if DEBUG else "INFO",
            "propagate": False,
        },
        "infrastructure": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}
