"""
results 도메인 → coursehub 응시/제출 Use Case 조립
"""
from __future__ import annotations

from coursehub.adapters.clock import DjangoClock
from coursehub.adapters.db.django.uow import DjangoUnitOfWork
from coursehub.application.use_cases.exams.attempt_lifecycle import ExamAttemptLifecycle
from coursehub.application.use_cases.exams.submission import ExamSubmissionService


def attempt_lifecycle() -> ExamAttemptLifecycle:
    return ExamAttemptLifecycle(DjangoUnitOfWork(), DjangoClock())


def submission_service() -> ExamSubmissionService:
    return ExamSubmissionService(DjangoUnitOfWork(), DjangoClock())
