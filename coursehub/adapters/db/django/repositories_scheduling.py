"""
Section / Room / Lesson / Schedule Repository — Django ORM 구현 (메서드 내부에서만 apps.domains import)
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from coursehub.domain.scheduling.entities import (
    DayOfWeek,
    Lesson,
    Room,
    ScheduleOccurrence,
    Section,
    TimeSlot,
)


def _section_to_entity(m) -> Optional[Section]:
    if m is None:
        return None
    return Section(
        id=m.id,
        course_id=m.course_id,
        instructor_id=m.instructor_id,
        course_code=m.course.code,
        course_title=m.course.title,
        name=m.name or "",
    )


def _room_to_entity(m) -> Optional[Room]:
    if m is None:
        return None
    return Room(
        id=m.id,
        name=m.name,
        location=m.location or "",
        capacity=int(m.capacity or 0),
    )


def _lesson_to_entity(m) -> Optional[Lesson]:
    """select_related("section__course", "section__instructor", "room") 기준."""
    if m is None:
        return None
    section = m.section
    instructor = section.instructor
    return Lesson(
        id=m.id,
        section_id=m.section_id,
        title=m.title,
        slot=TimeSlot(DayOfWeek(m.day_of_week), m.start_time, m.end_time),
        room_id=m.room_id,
        description=m.description or "",
        course_code=section.course.code,
        course_title=section.course.title,
        room_name=m.room.name if m.room_id else "",
        instructor_name=instructor.display_name if instructor else "",
    )


def _lesson_qs():
    from apps.domains.schedule.models import Lesson as LessonModel
    return LessonModel.objects.select_related(
        "section__course",
        "section__instructor",
        "room",
    )


class DjangoSectionRepository:

    def get(self, section_id: int) -> Optional[Section]:
        from apps.domains.courses.models import Section as SectionModel
        m = SectionModel.objects.select_related("course").filter(id=section_id).first()
        return _section_to_entity(m)

    def is_instructor_of(self, section_id: int, user_id: int) -> bool:
        from apps.domains.courses.models import Section as SectionModel
        return SectionModel.objects.filter(id=section_id, instructor_id=user_id).exists()


class DjangoRoomRepository:

    def get(self, room_id: int) -> Optional[Room]:
        from apps.domains.schedule.models import Room as RoomModel
        return _room_to_entity(RoomModel.objects.filter(id=room_id).first())

    def lock(self, room_id: int) -> Optional[Room]:
        """호출자가 이미 UoW 트랜잭션 내에 있어야 함 (select_for_update 락 유지)."""
        from apps.domains.schedule.models import Room as RoomModel
        m = RoomModel.objects.select_for_update().filter(id=room_id).first()
        return _room_to_entity(m)

    def list_all(self) -> list[Room]:
        from apps.domains.schedule.models import Room as RoomModel
        return [_room_to_entity(m) for m in RoomModel.objects.order_by("name", "id")]


class DjangoLessonRepository:

    def get(self, lesson_id: int) -> Optional[Lesson]:
        return _lesson_to_entity(_lesson_qs().filter(id=lesson_id).first())

    def find_by_room_and_day(
        self,
        room_id: int,
        day_of_week: DayOfWeek,
        exclude_lesson_id: Optional[int] = None,
    ) -> list[Lesson]:
        qs = _lesson_qs().filter(room_id=room_id, day_of_week=DayOfWeek.parse(day_of_week).value)
        if exclude_lesson_id is not None:
            qs = qs.exclude(id=exclude_lesson_id)
        return [_lesson_to_entity(m) for m in qs.order_by("start_time", "id")]

    def list_for_section(self, section_id: int) -> list[Lesson]:
        return [_lesson_to_entity(m) for m in _lesson_qs().filter(section_id=section_id)]

    def list_for_sections(self, section_ids: Iterable[int]) -> list[Lesson]:
        ids = list(section_ids)
        if not ids:
            return []
        return [_lesson_to_entity(m) for m in _lesson_qs().filter(section_id__in=ids)]

    def list_with_rooms(
        self,
        room_id: Optional[int] = None,
        day_of_week: Optional[DayOfWeek] = None,
    ) -> list[Lesson]:
        qs = _lesson_qs().filter(room__isnull=False)
        if room_id is not None:
            qs = qs.filter(room_id=room_id)
        if day_of_week is not None:
            qs = qs.filter(day_of_week=DayOfWeek.parse(day_of_week).value)
        return [_lesson_to_entity(m) for m in qs]

    def add(self, lesson: Lesson) -> Lesson:
        from apps.domains.schedule.models import Lesson as LessonModel
        m = LessonModel.objects.create(
            section_id=lesson.section_id,
            title=lesson.title,
            description=lesson.description,
            day_of_week=lesson.day_of_week.value,
            start_time=lesson.start_time,
            end_time=lesson.end_time,
            room_id=lesson.room_id,
        )
        return self.get(m.id)

    def update(self, lesson: Lesson) -> Lesson:
        from apps.domains.schedule.models import Lesson as LessonModel
        m = LessonModel.objects.get(id=lesson.id)
        m.title = lesson.title
        m.description = lesson.description
        m.day_of_week = lesson.day_of_week.value
        m.start_time = lesson.start_time
        m.end_time = lesson.end_time
        m.room_id = lesson.room_id
        m.save(
            update_fields=[
                "title",
                "description",
                "day_of_week",
                "start_time",
                "end_time",
                "room",
                "updated_at",
            ]
        )
        return self.get(m.id)

    def delete(self, lesson_id: int) -> None:
        from apps.domains.schedule.models import Lesson as LessonModel
        # Schedule 은 FK CASCADE
        LessonModel.objects.filter(id=lesson_id).delete()


class DjangoScheduleRepository:

    def get_or_create(self, lesson_id: int, on_date: date) -> tuple[ScheduleOccurrence, bool]:
        from apps.domains.schedule.models import Schedule
        m, created = Schedule.objects.get_or_create(lesson_id=lesson_id, date=on_date)
        return (
            ScheduleOccurrence(
                lesson_id=m.lesson_id,
                date=m.date,
                is_cancelled=m.is_cancelled,
                id=m.id,
            ),
            created,
        )
