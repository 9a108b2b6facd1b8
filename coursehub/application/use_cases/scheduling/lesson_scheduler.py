"""
Lesson 생성/수정/삭제 Use Case — 도메인/포트만 사용 (Django 미사용)

검증 순서: 분반 존재 → 권한 → 시간 구간 → 강의실 존재 → 충돌.
충돌 검사와 쓰기는 한 UoW 안에서 강의실 row lock을 잡은 상태로 수행한다.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from coursehub.application.ports.audit import AuditAction, AuditSink
from coursehub.application.ports.identity import Actor
from coursehub.application.ports.unit_of_work import UnitOfWork
from coursehub.application.use_cases.scheduling.room_conflicts import RoomConflictChecker
from coursehub.domain.scheduling.entities import (
    Lesson,
    ScheduleOccurrence,
    Section,
    TimeSlot,
    merge_lesson_changes,
    weekly_dates,
)
from coursehub.domain.shared.errors import ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200

# 이 키가 변경에 포함되면 충돌 재검사
_SLOT_FIELDS = ("room_id", "day_of_week", "start_time", "end_time")


def _clean_title(title: Optional[str]) -> str:
    t = (title or "").strip()
    if not t:
        raise ValidationError("Lesson title is required", field="title")
    if len(t) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Lesson title must be less than {TITLE_MAX_LENGTH} characters", field="title")
    return t


def ensure_can_manage_section(uow: UnitOfWork, actor: Actor, section_id: int) -> Section:
    """관리자 또는 해당 분반 담당 강사만 허용."""
    section = uow.sections.get(section_id)
    if section is None:
        raise NotFoundError("Section", section_id)
    if actor.is_admin or uow.sections.is_instructor_of(section_id, actor.id):
        return section
    raise ForbiddenError("Forbidden: You are not the instructor of this section", section_id=section_id)


class LessonScheduler:

    def __init__(self, uow: UnitOfWork, audit: AuditSink) -> None:
        self.uow = uow
        self.audit = audit

    def _lock_room(self, room_id: int) -> None:
        if self.uow.rooms.lock(room_id) is None:
            raise NotFoundError("Room", room_id)

    def create_lesson(
        self,
        actor: Actor,
        section_id: int,
        title: str,
        day_of_week: Any,
        start_time: str,
        end_time: str,
        room_id: Optional[int] = None,
        description: str = "",
    ) -> Lesson:
        with self.uow as uow:
            section = ensure_can_manage_section(uow, actor, section_id)
            slot = TimeSlot.of(day_of_week, start_time, end_time)
            clean_title = _clean_title(title)

            if room_id is not None:
                self._lock_room(room_id)
                RoomConflictChecker(uow.lessons).ensure_available(
                    room_id, slot.day_of_week, slot.start, slot.end
                )

            lesson = uow.lessons.add(
                Lesson(
                    id=None,
                    section_id=section_id,
                    title=clean_title,
                    slot=slot,
                    room_id=room_id,
                    description=description or "",
                )
            )

            self.audit.record(
                AuditAction.LESSON_CREATED.value,
                actor.id,
                "Lesson",
                lesson.id,
                {
                    "title": lesson.title,
                    "course": section.course_code,
                    "day_of_week": slot.day_of_week.value,
                    "time": slot.label,
                    "room_id": room_id,
                },
            )

        logger.info(
            "[lesson_create] lesson_id=%s section_id=%s room_id=%s slot=%s %s",
            lesson.id,
            section_id,
            room_id,
            slot.day_of_week.value,
            slot.label,
        )
        return lesson

    def update_lesson(self, actor: Actor, lesson_id: int, changes: Mapping[str, Any]) -> Lesson:
        """
        changes의 키 존재 여부가 의미를 가진다.
        room_id 키가 None이면 강의실 해제, 키가 없으면 기존 유지.
        """
        with self.uow as uow:
            existing = uow.lessons.get(lesson_id)
            if existing is None:
                raise NotFoundError("Lesson", lesson_id)
            ensure_can_manage_section(uow, actor, existing.section_id)

            merged = merge_lesson_changes(existing, changes)
            if "title" in changes:
                merged.title = _clean_title(merged.title)

            if merged.room_id is not None and any(k in changes for k in _SLOT_FIELDS):
                self._lock_room(merged.room_id)
                RoomConflictChecker(uow.lessons).ensure_available(
                    merged.room_id,
                    merged.day_of_week,
                    merged.start_time,
                    merged.end_time,
                    exclude_lesson_id=lesson_id,
                )

            lesson = uow.lessons.update(merged)

            self.audit.record(
                AuditAction.LESSON_UPDATED.value,
                actor.id,
                "Lesson",
                lesson.id,
                {"changes": {k: _jsonable(v) for k, v in changes.items()}},
            )

        logger.info("[lesson_update] lesson_id=%s fields=%s", lesson_id, sorted(changes))
        return lesson

    def delete_lesson(self, actor: Actor, lesson_id: int) -> None:
        with self.uow as uow:
            lesson = uow.lessons.get(lesson_id)
            if lesson is None:
                raise NotFoundError("Lesson", lesson_id)
            ensure_can_manage_section(uow, actor, lesson.section_id)

            uow.lessons.delete(lesson_id)

            self.audit.record(
                AuditAction.LESSON_DELETED.value,
                actor.id,
                "Lesson",
                lesson_id,
                {"title": lesson.title, "course": lesson.course_code},
            )

        logger.info("[lesson_delete] lesson_id=%s actor_id=%s", lesson_id, actor.id)

    def get_lesson(self, actor: Actor, lesson_id: int) -> Lesson:
        with self.uow as uow:
            lesson = uow.lessons.get(lesson_id)
            if lesson is None:
                raise NotFoundError("Lesson", lesson_id)
            ensure_can_manage_section(uow, actor, lesson.section_id)
            return lesson

    def list_section_lessons(self, actor: Actor, section_id: int) -> list[Lesson]:
        """요일 → 시작 시각 순."""
        with self.uow as uow:
            ensure_can_manage_section(uow, actor, section_id)
            return sorted(uow.lessons.list_for_section(section_id), key=lambda x: x.sort_key())

    def materialize_schedule(
        self,
        actor: Actor,
        lesson_id: int,
        first_date: date,
        weeks: int,
    ) -> list[ScheduleOccurrence]:
        """
        주 1회 회차를 날짜로 생성 (lesson, date) 멱등.
        반복 규칙 엔진 아님: Lesson당 주 1슬롯만.
        """
        with self.uow as uow:
            lesson = uow.lessons.get(lesson_id)
            if lesson is None:
                raise NotFoundError("Lesson", lesson_id)
            ensure_can_manage_section(uow, actor, lesson.section_id)

            occurrences: list[ScheduleOccurrence] = []
            created_count = 0
            for d in weekly_dates(lesson.day_of_week, first_date, weeks):
                occ, created = uow.schedules.get_or_create(lesson_id, d)
                occurrences.append(occ)
                created_count += int(created)

            if created_count:
                self.audit.record(
                    AuditAction.LESSON_SCHEDULE_CREATED.value,
                    actor.id,
                    "Lesson",
                    lesson_id,
                    {"first_date": first_date.isoformat(), "weeks": weeks, "created": created_count},
                )

        logger.info(
            "[lesson_schedule] lesson_id=%s weeks=%s created=%s",
            lesson_id,
            weeks,
            created_count,
        )
        return occurrences


def _jsonable(value: Any) -> Any:
    if hasattr(value, "value"):
        return value.value
    return value
