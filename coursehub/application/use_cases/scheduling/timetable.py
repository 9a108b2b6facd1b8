"""
학생 주간 시간표 — 수강 확정(ENROLLED) 분반의 Lesson
"""
from __future__ import annotations

from coursehub.application.ports.unit_of_work import UnitOfWork
from coursehub.domain.scheduling.entities import Lesson


def student_timetable(uow: UnitOfWork, student_id: int) -> list[Lesson]:
    """요일 → 시작 시각 순."""
    with uow:
        section_ids = uow.enrollments.enrolled_section_ids(student_id)
        if not section_ids:
            return []
        lessons = uow.lessons.list_for_sections(section_ids)
    return sorted(lessons, key=lambda x: x.sort_key())
