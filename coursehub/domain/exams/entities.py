"""
시험 응시 도메인 엔티티 — 순수 파이썬 (Django/ORM 미사용)

상태 전이 규칙은 엔티티 메서드로 표현.
NOT_STARTED → IN_PROGRESS → COMPLETED(최종). 만료(expired) 상태는 없다.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from coursehub.domain.shared.errors import InvalidStateError, ValidationError


class QuestionType(str, Enum):
    """문항 유형 (apps.domains.exams.models ExamQuestion.question_type choices와 동기화)."""
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"

    @property
    def is_auto_gradable(self) -> bool:
        return self in AUTO_GRADABLE_TYPES


AUTO_GRADABLE_TYPES = (QuestionType.MULTIPLE_CHOICE, QuestionType.TRUE_FALSE)


class AttemptStatus(str, Enum):
    """응시 상태. nullable 필드 조합으로 추론하지 않고 명시적으로 저장한다."""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass
class Question:
    id: int
    text: str
    question_type: QuestionType
    points: int = 1
    options: list[str] = field(default_factory=list)
    correct_answer: Optional[str] = None
    order_index: int = 0


@dataclass
class Exam:
    """시험 정의. 개방 구간은 반열림 [start_time, end_time)."""
    id: int
    section_id: int
    title: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    questions: list[Question] = field(default_factory=list)

    @property
    def duration_seconds(self) -> int:
        return int(self.duration_minutes) * 60

    def is_open(self, now: datetime) -> bool:
        return self.start_time <= now < self.end_time


@dataclass
class ExamAttempt:
    """
    학생 1명의 시험 1회 응시. (exam_id, student_id)당 최대 1건.
    COMPLETED 이후에는 어떤 필드도 되돌리지 않는다.
    """
    id: Optional[int]
    exam_id: int
    student_id: int
    started_at: datetime
    time_remaining: int
    status: AttemptStatus = AttemptStatus.IN_PROGRESS
    submitted_at: Optional[datetime] = None
    score: Optional[float] = None

    @classmethod
    def begin(cls, exam: Exam, student_id: int, now: datetime) -> "ExamAttempt":
        """NOT_STARTED → IN_PROGRESS."""
        return cls(
            id=None,
            exam_id=exam.id,
            student_id=student_id,
            started_at=now,
            time_remaining=exam.duration_seconds,
            status=AttemptStatus.IN_PROGRESS,
        )

    @property
    def is_completed(self) -> bool:
        return self.status == AttemptStatus.COMPLETED

    def elapsed_seconds(self, now: datetime) -> int:
        """시작 후 경과 초 (내림). 시계가 뒤로 가도 음수는 0."""
        return max(0, int((now - self.started_at).total_seconds()))

    def time_remaining_at(self, now: datetime, duration_seconds: int) -> int:
        """on-demand 계산. 완료된 응시는 제출 시점 스냅샷을 그대로 반환."""
        if self.is_completed:
            return int(self.time_remaining)
        return max(0, int(duration_seconds) - self.elapsed_seconds(now))

    def is_expired(self, now: datetime, duration_seconds: int) -> bool:
        """제출되지 않았고 제한 시간을 넘김 (상태 전이는 하지 않음)."""
        return not self.is_completed and self.elapsed_seconds(now) > int(duration_seconds)

    def ensure_submittable(self, now: datetime, duration_seconds: int) -> int:
        """
        제출 가능 여부 확인. 경과 초 반환.
        경계 포함: elapsed == duration 은 허용, +1초부터 거부.
        """
        if self.is_completed:
            raise InvalidStateError("already submitted", attempt_id=self.id)
        elapsed = self.elapsed_seconds(now)
        if elapsed > int(duration_seconds):
            raise InvalidStateError(
                "time limit exceeded",
                attempt_id=self.id,
                elapsed_seconds=elapsed,
                limit_seconds=int(duration_seconds),
            )
        return elapsed

    def complete(self, now: datetime, score: float, duration_seconds: int) -> None:
        """IN_PROGRESS → COMPLETED. 규칙 위반 시 InvalidStateError."""
        elapsed = self.ensure_submittable(now, duration_seconds)
        self.status = AttemptStatus.COMPLETED
        self.submitted_at = now
        self.score = float(score)
        self.time_remaining = max(0, int(duration_seconds) - elapsed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "exam_id": self.exam_id,
            "student_id": self.student_id,
            "status": self.status.value,
            "is_completed": self.is_completed,
            "started_at": self.started_at.isoformat(),
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
            "score": self.score,
            "time_remaining": self.time_remaining,
        }


def attempt_state(attempt: Optional[ExamAttempt]) -> AttemptStatus:
    """응시 행이 없으면 NOT_STARTED."""
    if attempt is None:
        return AttemptStatus.NOT_STARTED
    return attempt.status


@dataclass(frozen=True)
class SubmittedAnswer:
    """학생이 제출한 원본 답안."""
    question_id: int
    answer: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SubmittedAnswer":
        qid = raw.get("question_id")
        if qid is None or "answer" not in raw or raw.get("answer") is None:
            raise ValidationError("Each answer needs question_id and answer", field="answers")
        try:
            return cls(question_id=int(qid), answer=str(raw["answer"]))
        except (TypeError, ValueError) as e:
            raise ValidationError("question_id must be an integer", field="answers") from e


@dataclass
class ExamAnswer:
    """
    (attempt_id, question_id)당 1건 upsert.
    수동 채점 유형은 is_correct / points 가 None.
    """
    attempt_id: int
    question_id: int
    answer: str
    is_correct: Optional[bool] = None
    points: Optional[int] = None
    id: Optional[int] = None
