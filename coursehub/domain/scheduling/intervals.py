"""
시간 구간 비교 — 순수 함수 (외부 라이브러리 없음)

모든 구간은 반열림 [start, end). 끝과 시작이 맞닿은 두 구간은 겹치지 않는다.
"HH:MM" 0패딩 24시간 문자열은 사전순 비교가 곧 시간 비교다.
"""
from __future__ import annotations

import re
from typing import TypeVar

from coursehub.domain.shared.errors import ValidationError

T = TypeVar("T", str, int, float)

_HHMM = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def overlaps(a_start: T, a_end: T, b_start: T, b_end: T) -> bool:
    """두 반열림 구간이 겹치면 True. 시작-포함/끝-포함/완전포함 세 경우를 한 부등식으로 처리."""
    return a_start < b_end and b_start < a_end


def contains(outer_start: T, outer_end: T, inner_start: T, inner_end: T) -> bool:
    """outer가 inner를 완전히 덮으면 True (경계 일치 허용)."""
    return outer_start <= inner_start and inner_end <= outer_end


def normalize_hhmm(value: str) -> str:
    """'9:00' → '09:00'. 형식 오류 시 ValidationError."""
    m = _HHMM.match((value or "").strip())
    if not m:
        raise ValidationError(
            "Time must be in HH:MM format (e.g., 09:00)",
            field="time",
            value=value,
        )
    return f"{int(m.group(1)):02d}:{m.group(2)}"


def to_minutes(value: str) -> int:
    """'HH:MM' → 자정 기준 분."""
    hh, mm = normalize_hhmm(value).split(":")
    return int(hh) * 60 + int(mm)
