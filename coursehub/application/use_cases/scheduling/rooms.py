"""
강의실 가용 현황 조회
"""
from __future__ import annotations

from typing import Any, Optional

from coursehub.application.ports.unit_of_work import UnitOfWork
from coursehub.domain.scheduling.entities import DayOfWeek


def room_availability(
    uow: UnitOfWork,
    room_id: Optional[int] = None,
    day_of_week: Optional[DayOfWeek] = None,
) -> list[dict[str, Any]]:
    """
    강의실별 → 요일별 Lesson 목록.
    [{"room": {...}, "schedule": {"MONDAY": [...], ...}}, ...]
    """
    with uow:
        rooms = {r.id: r for r in uow.rooms.list_all()}
        lessons = uow.lessons.list_with_rooms(room_id=room_id, day_of_week=day_of_week)

    grouped: dict[int, dict[str, Any]] = {}
    for lesson in sorted(lessons, key=lambda x: (x.room_id or 0, *x.sort_key())):
        room = rooms.get(lesson.room_id)
        if room is None:
            continue
        entry = grouped.setdefault(
            room.id,
            {
                "room": {
                    "id": room.id,
                    "name": room.name,
                    "location": room.location,
                    "capacity": room.capacity,
                },
                "schedule": {},
            },
        )
        entry["schedule"].setdefault(lesson.day_of_week.value, []).append({
            "id": lesson.id,
            "title": lesson.title,
            "start_time": lesson.start_time,
            "end_time": lesson.end_time,
            "course": {"code": lesson.course_code, "title": lesson.course_title},
            "instructor": lesson.instructor_name,
        })

    return sorted(grouped.values(), key=lambda e: e["room"]["name"])
