"""
Exam / ExamAttempt / ExamAnswer Repository — Django ORM 구현 (메서드 내부에서만 apps.domains import)
"""
from __future__ import annotations

import logging
from typing import Optional

from coursehub.domain.exams.entities import (
    AttemptStatus,
    Exam,
    ExamAnswer,
    ExamAttempt,
    Question,
    QuestionType,
)
from coursehub.domain.shared.errors import ConflictError

logger = logging.getLogger(__name__)


def _question_to_entity(m) -> Question:
    return Question(
        id=m.id,
        text=m.text,
        question_type=QuestionType(m.question_type),
        points=int(m.points or 0),
        options=list(m.options or []),
        correct_answer=m.correct_answer,
        order_index=int(m.order_index or 0),
    )


def _attempt_to_entity(m) -> Optional[ExamAttempt]:
    if m is None:
        return None
    return ExamAttempt(
        id=m.id,
        exam_id=m.exam_id,
        student_id=m.student_id,
        started_at=m.started_at,
        time_remaining=int(m.time_remaining or 0),
        status=AttemptStatus(m.status),
        submitted_at=m.submitted_at,
        score=m.score,
    )


def _answer_to_entity(m) -> ExamAnswer:
    return ExamAnswer(
        id=m.id,
        attempt_id=m.attempt_id,
        question_id=m.question_id,
        answer=m.answer,
        is_correct=m.is_correct,
        points=m.points,
    )


class DjangoExamRepository:

    def get(self, exam_id: int) -> Optional[Exam]:
        from apps.domains.exams.models import Exam as ExamModel
        m = ExamModel.objects.filter(id=exam_id).prefetch_related("questions").first()
        if m is None:
            return None
        questions = sorted(m.questions.all(), key=lambda q: (q.order_index, q.id))
        return Exam(
            id=m.id,
            section_id=m.section_id,
            title=m.title,
            start_time=m.start_time,
            end_time=m.end_time,
            duration_minutes=int(m.duration_minutes),
            questions=[_question_to_entity(q) for q in questions],
        )


class DjangoExamAttemptRepository:

    def get_by_exam_and_student(self, exam_id: int, student_id: int) -> Optional[ExamAttempt]:
        from apps.domains.results.models import ExamAttempt as AttemptModel
        m = AttemptModel.objects.filter(exam_id=exam_id, student_id=student_id).first()
        return _attempt_to_entity(m)

    def get_for_update(self, exam_id: int, student_id: int) -> Optional[ExamAttempt]:
        """호출자가 이미 UoW 트랜잭션 내에 있어야 함 (select_for_update 락 유지)."""
        from apps.domains.results.models import ExamAttempt as AttemptModel
        m = (
            AttemptModel.objects.select_for_update()
            .filter(exam_id=exam_id, student_id=student_id)
            .first()
        )
        return _attempt_to_entity(m)

    def create(self, attempt: ExamAttempt) -> ExamAttempt:
        """
        유니크 제약 위반은 savepoint 안에서 잡아 바깥 트랜잭션을 살린 뒤
        기존(승자) 응시를 실어 ConflictError 로 변환.
        """
        from django.db import IntegrityError, transaction
        from apps.domains.results.models import ExamAttempt as AttemptModel

        try:
            with transaction.atomic():
                m = AttemptModel.objects.create(
                    exam_id=attempt.exam_id,
                    student_id=attempt.student_id,
                    started_at=attempt.started_at,
                    time_remaining=attempt.time_remaining,
                    status=attempt.status.value,
                )
        except IntegrityError:
            existing = self.get_by_exam_and_student(attempt.exam_id, attempt.student_id)
            if existing is None:
                raise
            logger.info(
                "[attempt_create] lost race exam_id=%s student_id=%s existing_id=%s",
                attempt.exam_id,
                attempt.student_id,
                existing.id,
            )
            raise ConflictError("Already attempted this exam", existing_attempt=existing)
        return _attempt_to_entity(m)

    def save(self, attempt: ExamAttempt) -> None:
        from apps.domains.results.models import ExamAttempt as AttemptModel
        AttemptModel.objects.filter(id=attempt.id).update(
            status=attempt.status.value,
            submitted_at=attempt.submitted_at,
            score=attempt.score,
            time_remaining=attempt.time_remaining,
        )


class DjangoExamAnswerRepository:

    def upsert(self, answer: ExamAnswer) -> ExamAnswer:
        from apps.domains.results.models import ExamAnswer as AnswerModel
        m, _ = AnswerModel.objects.update_or_create(
            attempt_id=answer.attempt_id,
            question_id=answer.question_id,
            defaults={
                "answer": answer.answer,
                "is_correct": answer.is_correct,
                "points": answer.points,
            },
        )
        return _answer_to_entity(m)

    def list_for_attempt(self, attempt_id: int) -> list[ExamAnswer]:
        from apps.domains.results.models import ExamAnswer as AnswerModel
        qs = AnswerModel.objects.filter(attempt_id=attempt_id).order_by("question__order_index", "question_id")
        return [_answer_to_entity(m) for m in qs]
