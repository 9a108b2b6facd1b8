# apps/api/v1/urls.py
from django.urls import path, include

from apps.api.common.views import health_check

urlpatterns = [
    # =========================
    # Health
    # =========================
    path("health/", health_check, name="health"),

    # =========================
    # Domain APIs
    # =========================
    # rooms/, sections/<id>/lessons/, lessons/<id>/, me/timetable/
    path("", include("apps.domains.schedule.urls")),

    # exams/<id>/attempt/
    path("", include("apps.domains.results.urls")),
]
