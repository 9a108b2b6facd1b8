# apps/api/config/settings/test.py
# pytest-django 전용: SQLite, Celery eager, 감사 로그 동기 기록

from .base import *

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

COURSEHUB_AUDIT_ASYNC = False

LANGUAGE_CODE = "en-us"
