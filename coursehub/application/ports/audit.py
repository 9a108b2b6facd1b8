"""
Audit 포트 — 감사 이벤트 기록 (fire-and-forget)

코어 입장에서 반환값/실패를 해석하지 않는다. 전달 실패 처리는 어댑터 책임.
"""
from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Any, Optional, Protocol


class AuditAction(str, Enum):
    LESSON_CREATED = "LESSON_CREATED"
    LESSON_UPDATED = "LESSON_UPDATED"
    LESSON_DELETED = "LESSON_DELETED"
    LESSON_SCHEDULE_CREATED = "LESSON_SCHEDULE_CREATED"


class AuditSink(Protocol):

    @abstractmethod
    def record(
        self,
        action: str,
        actor_id: Optional[int],
        target_type: str,
        target_id: Any,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        ...


def severity_for_action(action: str) -> str:
    """액션 이름으로 심각도 결정."""
    a = (action or "").upper()
    if any(k in a for k in ("ROLE_CHANGED", "DELETED", "PERMISSION", "SYSTEM_ERROR", "DATA_INCONSISTENCY")):
        return "CRITICAL"
    if any(k in a for k in ("FAILED", "RETRY", "TIMEOUT", "WARNING", "REJECTED")):
        return "WARNING"
    return "INFO"


def category_for_action(action: str) -> str:
    a = (action or "").upper()
    if any(k in a for k in ("LOGIN", "LOGOUT", "AUTH", "PASSWORD")):
        return "SECURITY"
    if any(k in a for k in ("LESSON", "ROOM", "COURSE", "SECTION", "USER_")):
        return "ADMIN_ACTION"
    if "SYSTEM" in a:
        return "SYSTEM"
    return "USER_ACTION"
