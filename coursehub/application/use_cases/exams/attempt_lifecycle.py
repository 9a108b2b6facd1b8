"""
시험 응시 수명주기 Use Case — 도메인/포트만 사용 (Django 미사용)

상태 전이·시간 판단은 여기서 결정; 유일성은 저장소 제약이 최종 보장.
남은 시간은 타이머로 깎지 않고 요청 시점의 now - started_at 으로 계산.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from coursehub.application.ports.clock import Clock
from coursehub.application.ports.unit_of_work import UnitOfWork
from coursehub.domain.exams.entities import AttemptStatus, Exam, ExamAttempt
from coursehub.domain.shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass
class AttemptView:
    """조회 시점 기준으로 계산된 응시 상태."""
    attempt: ExamAttempt
    exam: Exam
    time_remaining: int
    is_expired: bool
    now: datetime

    def to_dict(self) -> dict[str, Any]:
        data = self.attempt.to_dict()
        data["time_remaining"] = self.time_remaining
        data["is_expired"] = self.is_expired
        data["duration_minutes"] = self.exam.duration_minutes
        return data


def load_exam(uow: UnitOfWork, exam_id: int) -> Exam:
    exam = uow.exams.get(exam_id)
    if exam is None:
        raise NotFoundError("Exam", exam_id)
    return exam


class ExamAttemptLifecycle:

    def __init__(self, uow: UnitOfWork, clock: Clock) -> None:
        self.uow = uow
        self.clock = clock

    def start(self, exam_id: int, student_id: int) -> ExamAttempt:
        """
        NOT_STARTED → IN_PROGRESS.
        1) 수강(ENROLLED) 확인 2) 개방 구간 [start, end) 확인 3) 기존 응시 없음 4) 생성
        """
        now = self.clock.now()
        with self.uow as uow:
            exam = load_exam(uow, exam_id)

            if not uow.enrollments.is_enrolled(student_id, exam.section_id):
                raise ForbiddenError("Not enrolled in this course", exam_id=exam_id)

            if not exam.is_open(now):
                raise InvalidStateError(
                    "exam not currently available",
                    exam_id=exam_id,
                    start_time=exam.start_time.isoformat(),
                    end_time=exam.end_time.isoformat(),
                )

            existing = uow.attempts.get_by_exam_and_student(exam_id, student_id)
            if existing is not None:
                raise ConflictError("Already attempted this exam", existing_attempt=existing)

            # 동시 요청이 위 확인을 함께 통과해도 유니크 제약에서 ConflictError
            attempt = uow.attempts.create(ExamAttempt.begin(exam, student_id, now))

        logger.info(
            "[exam_attempt_start] exam_id=%s student_id=%s attempt_id=%s time_remaining=%s",
            exam_id,
            student_id,
            attempt.id,
            attempt.time_remaining,
        )
        return attempt

    def get(self, exam_id: int, student_id: int) -> AttemptView:
        now = self.clock.now()
        with self.uow as uow:
            exam = load_exam(uow, exam_id)
            attempt = uow.attempts.get_by_exam_and_student(exam_id, student_id)
            if attempt is None:
                raise NotFoundError("ExamAttempt", message="No active attempt found")

        return AttemptView(
            attempt=attempt,
            exam=exam,
            time_remaining=attempt.time_remaining_at(now, exam.duration_seconds),
            is_expired=attempt.is_expired(now, exam.duration_seconds),
            now=now,
        )

    def state(self, exam_id: int, student_id: int) -> AttemptStatus:
        with self.uow as uow:
            attempt = uow.attempts.get_by_exam_and_student(exam_id, student_id)
        if attempt is None:
            return AttemptStatus.NOT_STARTED
        return attempt.status
