"""
시험 제출 Use Case — 시간 제한 확인 → 자동 채점 → 답안 upsert → 응시 종료

제출은 1회성(write-once). 시간 초과 시 전체 거부 (부분 채점 없음).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from coursehub.application.ports.clock import Clock
from coursehub.application.ports.unit_of_work import UnitOfWork
from coursehub.application.use_cases.exams.attempt_lifecycle import load_exam
from coursehub.domain.exams.entities import ExamAnswer, ExamAttempt, SubmittedAnswer
from coursehub.domain.exams.grading import GradeReport, grade
from coursehub.domain.shared.errors import InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    attempt: ExamAttempt
    score: float
    report: GradeReport
    answers: list[ExamAnswer]


class ExamSubmissionService:

    def __init__(self, uow: UnitOfWork, clock: Clock) -> None:
        self.uow = uow
        self.clock = clock

    def submit(
        self,
        exam_id: int,
        student_id: int,
        answers: Iterable[SubmittedAnswer],
    ) -> SubmissionResult:
        submitted = list(answers)
        now = self.clock.now()

        with self.uow as uow:
            exam = load_exam(uow, exam_id)

            # 같은 학생의 동시 제출은 attempt row lock으로 직렬화
            attempt = uow.attempts.get_for_update(exam_id, student_id)
            if attempt is None:
                raise NotFoundError("ExamAttempt", message="No active attempt found")

            try:
                attempt.ensure_submittable(now, exam.duration_seconds)
            except InvalidStateError:
                logger.info(
                    "[exam_submit] rejected exam_id=%s student_id=%s attempt_id=%s status=%s elapsed=%s",
                    exam_id,
                    student_id,
                    attempt.id,
                    attempt.status.value,
                    attempt.elapsed_seconds(now),
                )
                raise

            report = grade(exam.questions, submitted)

            saved: list[ExamAnswer] = []
            for graded in report.per_question:
                saved.append(
                    uow.answers.upsert(
                        ExamAnswer(
                            attempt_id=int(attempt.id),
                            question_id=graded.question_id,
                            answer=graded.answer,
                            is_correct=graded.is_correct,
                            points=graded.points,
                        )
                    )
                )

            attempt.complete(now, report.score_percent, exam.duration_seconds)
            uow.attempts.save(attempt)

        logger.info(
            "[exam_submit] exam_id=%s student_id=%s attempt_id=%s earned=%s total=%s score=%.2f",
            exam_id,
            student_id,
            attempt.id,
            report.earned_points,
            report.total_points,
            report.score_percent,
        )
        return SubmissionResult(
            attempt=attempt,
            score=report.score_percent,
            report=report,
            answers=saved,
        )
