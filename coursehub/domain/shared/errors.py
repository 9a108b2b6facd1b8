"""
도메인 공통 오류 — 순수 파이썬

코어는 이 예외들을 잡아서 삼키지 않는다. HTTP 변환은 apps.api.common.exceptions 담당.
"""
from __future__ import annotations

from typing import Any, Optional


class CourseDomainError(Exception):
    """비즈니스 규칙 결과(일시 장애 아님). 재시도 대상 아님."""

    code = "domain_error"

    def __init__(self, message: str = "", **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        """API 응답용 구조화 데이터."""
        payload: dict[str, Any] = {"detail": self.message, "code": self.code}
        payload.update(self.extra)
        return payload


class ValidationError(CourseDomainError):
    """입력 형식 오류 (start >= end, 필수값 누락 등)."""

    code = "validation_error"


class ForbiddenError(CourseDomainError):
    """역할/소유 관계 부족 (담당 강사 아님, 수강 중 아님)."""

    code = "forbidden"


class NotFoundError(CourseDomainError):
    """참조 엔티티 없음 (lesson, exam, attempt, room)."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: Any = None, message: Optional[str] = None) -> None:
        super().__init__(message or f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(CourseDomainError):
    """
    강의실 이중 예약 / 중복 응시.
    충돌 대상(conflicts 또는 existing_attempt)을 함께 싣는다.
    """

    code = "conflict"

    def __init__(self, message: str, *, conflicts: Optional[list] = None, existing_attempt: Any = None) -> None:
        super().__init__(message)
        self.conflicts = list(conflicts or [])
        self.existing_attempt = existing_attempt

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.conflicts:
            payload["conflicts"] = [c.to_dict() for c in self.conflicts]
        if self.existing_attempt is not None:
            payload["existing_attempt"] = self.existing_attempt.to_dict()
        return payload


class InvalidStateError(CourseDomainError):
    """상태 머신 허용 구간 밖의 전이 (시험 미개방/마감, 이미 제출, 시간 초과)."""

    code = "invalid_state"
