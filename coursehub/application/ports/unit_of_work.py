"""
Unit of Work 포트 — 트랜잭션 경계 (Django 미사용)
"""
from __future__ import annotations

from typing import Protocol

from coursehub.application.ports.repositories import (
    EnrollmentRepository,
    ExamAnswerRepository,
    ExamAttemptRepository,
    ExamRepository,
    LessonRepository,
    RoomRepository,
    ScheduleRepository,
    SectionRepository,
)


class UnitOfWork(Protocol):
    """트랜잭션 단위. __enter__에서 시작, __exit__에서 정상 종료 시 commit, 예외 시 rollback."""

    @property
    def sections(self) -> SectionRepository:
        ...

    @property
    def rooms(self) -> RoomRepository:
        ...

    @property
    def lessons(self) -> LessonRepository:
        ...

    @property
    def schedules(self) -> ScheduleRepository:
        ...

    @property
    def enrollments(self) -> EnrollmentRepository:
        ...

    @property
    def exams(self) -> ExamRepository:
        ...

    @property
    def attempts(self) -> ExamAttemptRepository:
        ...

    @property
    def answers(self) -> ExamAnswerRepository:
        ...

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

