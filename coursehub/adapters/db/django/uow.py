"""
Django Unit of Work — transaction.atomic 래퍼 (lazy import)
"""
from __future__ import annotations


class DjangoUnitOfWork:
    """
    Django transaction.atomic으로 트랜잭션 경계. 메서드 내부에서 Django import.
    repository 는 최초 접근 시 생성.
    """

    def __init__(self) -> None:
        self._atomic = None
        self._sections = None
        self._rooms = None
        self._lessons = None
        self._schedules = None
        self._enrollments = None
        self._exams = None
        self._attempts = None
        self._answers = None

    @property
    def sections(self):
        from coursehub.adapters.db.django.repositories_scheduling import DjangoSectionRepository
        if self._sections is None:
            self._sections = DjangoSectionRepository()
        return self._sections

    @property
    def rooms(self):
        from coursehub.adapters.db.django.repositories_scheduling import DjangoRoomRepository
        if self._rooms is None:
            self._rooms = DjangoRoomRepository()
        return self._rooms

    @property
    def lessons(self):
        from coursehub.adapters.db.django.repositories_scheduling import DjangoLessonRepository
        if self._lessons is None:
            self._lessons = DjangoLessonRepository()
        return self._lessons

    @property
    def schedules(self):
        from coursehub.adapters.db.django.repositories_scheduling import DjangoScheduleRepository
        if self._schedules is None:
            self._schedules = DjangoScheduleRepository()
        return self._schedules

    @property
    def enrollments(self):
        from coursehub.adapters.db.django.repositories_enrollment import DjangoEnrollmentRepository
        if self._enrollments is None:
            self._enrollments = DjangoEnrollmentRepository()
        return self._enrollments

    @property
    def exams(self):
        from coursehub.adapters.db.django.repositories_exams import DjangoExamRepository
        if self._exams is None:
            self._exams = DjangoExamRepository()
        return self._exams

    @property
    def attempts(self):
        from coursehub.adapters.db.django.repositories_exams import DjangoExamAttemptRepository
        if self._attempts is None:
            self._attempts = DjangoExamAttemptRepository()
        return self._attempts

    @property
    def answers(self):
        from coursehub.adapters.db.django.repositories_exams import DjangoExamAnswerRepository
        if self._answers is None:
            self._answers = DjangoExamAnswerRepository()
        return self._answers

    def __enter__(self) -> DjangoUnitOfWork:
        from django.db import transaction
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._atomic is not None:
            self._atomic.__exit__(exc_type, exc_val, exc_tb)
            self._atomic = None
