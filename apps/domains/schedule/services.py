"""
schedule 도메인 → coursehub 코어 Use Case 조립 (Django 어댑터 주입)
"""
from __future__ import annotations

from coursehub.adapters.audit.django_audit import DjangoAuditSink
from coursehub.adapters.db.django.uow import DjangoUnitOfWork
from coursehub.application.use_cases.scheduling.lesson_scheduler import LessonScheduler


def lesson_scheduler() -> LessonScheduler:
    return LessonScheduler(DjangoUnitOfWork(), DjangoAuditSink())


def unit_of_work() -> DjangoUnitOfWork:
    return DjangoUnitOfWork()
