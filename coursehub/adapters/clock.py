"""
Clock 어댑터 — django.utils.timezone 기준 서버 시계
"""
from __future__ import annotations

from datetime import datetime


class DjangoClock:
    """Clock 포트 구현. USE_TZ=True 전제 (aware datetime)."""

    def now(self) -> datetime:
        from django.utils import timezone
        return timezone.now()
