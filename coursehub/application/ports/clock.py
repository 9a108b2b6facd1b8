"""
Clock 포트 — 현재 시각 (테스트에서 고정 시계로 대체)
"""
from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """timezone-aware datetime 반환. 시간 만료 판단의 기준은 항상 서버 시계."""

    def now(self) -> datetime:
        ...
