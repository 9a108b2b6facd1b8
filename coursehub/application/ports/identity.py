"""
Identity 포트 — 현재 사용자 (인증/세션 발급은 외부 책임)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """apps.core.models.User.role choices와 동기화."""
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    INSTRUCTOR = "INSTRUCTOR"
    STUDENT = "STUDENT"


@dataclass(frozen=True)
class Actor:
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
