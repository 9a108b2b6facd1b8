# PATH: apps/domains/results/urls.py

from django.urls import path

# ======================================================
# Student
# ======================================================
from apps.domains.results.views.exam_attempt_view import MyExamAttemptView

urlpatterns = [
    path("exams/<int:exam_id>/attempt/", MyExamAttemptView.as_view(), name="my-exam-attempt"),
]
