from .base import *

DEBUG = True
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS += [
    "debug_toolbar",
]

MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")

INTERNAL_IPS = [
    "127.0.0.1",
]

# 로컬에서는 워커 없이도 감사 로그가 남도록
COURSEHUB_AUDIT_ASYNC = os.getenv("COURSEHUB_AUDIT_ASYNC", "0") == "1"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "coursehub": {"handlers": ["console"], "level": "DEBUG"},
        "apps": {"handlers": ["console"], "level": "DEBUG"},
    },
}
