"""
강의실 이중 예약 탐지 — 포트만 사용 (Django 미사용)
"""
from __future__ import annotations

import logging
from typing import Optional

from coursehub.application.ports.repositories import LessonRepository
from coursehub.domain.scheduling.entities import DayOfWeek, LessonConflict
from coursehub.domain.scheduling.intervals import normalize_hhmm, overlaps
from coursehub.domain.shared.errors import ConflictError

logger = logging.getLogger(__name__)


class RoomConflictChecker:
    """
    같은 room + 같은 요일 Lesson 중 후보 구간과 겹치는 것 전체 반환.
    room_id가 None(미배정)이면 조회 자체를 하지 않는다.
    """

    def __init__(self, lessons: LessonRepository) -> None:
        self._lessons = lessons

    def find_conflicts(
        self,
        room_id: Optional[int],
        day_of_week: DayOfWeek,
        start: str,
        end: str,
        exclude_lesson_id: Optional[int] = None,
    ) -> list[LessonConflict]:
        """start/end 는 "H:MM" 도 허용 (비교 전 "HH:MM" 으로 정규화)."""
        if room_id is None:
            return []
        start, end = normalize_hhmm(start), normalize_hhmm(end)

        candidates = self._lessons.find_by_room_and_day(
            room_id,
            day_of_week,
            exclude_lesson_id=exclude_lesson_id,
        )
        return [
            LessonConflict.from_lesson(lesson)
            for lesson in sorted(candidates, key=lambda x: x.sort_key())
            if lesson.id != exclude_lesson_id
            and overlaps(start, end, lesson.start_time, lesson.end_time)
        ]

    def ensure_available(
        self,
        room_id: Optional[int],
        day_of_week: DayOfWeek,
        start: str,
        end: str,
        exclude_lesson_id: Optional[int] = None,
    ) -> None:
        conflicts = self.find_conflicts(room_id, day_of_week, start, end, exclude_lesson_id)
        if not conflicts:
            return
        logger.info(
            "[room_conflict] room_id=%s day=%s time=%s-%s exclude=%s conflicts=%s",
            room_id,
            day_of_week.value,
            start,
            end,
            exclude_lesson_id,
            [c.lesson_id for c in conflicts],
        )
        raise ConflictError("Room is already booked for this time slot", conflicts=conflicts)
