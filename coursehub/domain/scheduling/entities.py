"""
시간표 도메인 엔티티 — 순수 파이썬 (Django/ORM 미사용)

Lesson은 TimeSlot 하나를 소유하고, Room은 여러 Lesson이 공유한다(소유 아님).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Any, Mapping, Optional

from coursehub.domain.scheduling.intervals import normalize_hhmm, overlaps
from coursehub.domain.shared.errors import ValidationError


class DayOfWeek(str, Enum):
    """요일 (apps.domains.schedule.models Lesson.day_of_week choices와 동기화)."""
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def index(self) -> int:
        """월=0 ... 일=6 (date.weekday()와 동일)."""
        return list(DayOfWeek).index(self)

    @classmethod
    def parse(cls, value: Any) -> "DayOfWeek":
        """'MONDAY' / 'mon' / DayOfWeek 모두 허용."""
        if isinstance(value, DayOfWeek):
            return value
        raw = str(value or "").strip().upper()
        for day in cls:
            if raw == day.value or (len(raw) == 3 and day.value.startswith(raw)):
                return day
        raise ValidationError("Please select a valid day of the week", field="day_of_week", value=value)


@dataclass(frozen=True)
class TimeSlot:
    """요일 + 반열림 [start, end). 생성 시 start < end 보장."""
    day_of_week: DayOfWeek
    start: str
    end: str

    @classmethod
    def of(cls, day_of_week: Any, start: str, end: str) -> "TimeSlot":
        start_n = normalize_hhmm(start)
        end_n = normalize_hhmm(end)
        if start_n >= end_n:
            raise ValidationError(
                "Start time must be before end time",
                field="end_time",
                start_time=start_n,
                end_time=end_n,
            )
        return cls(DayOfWeek.parse(day_of_week), start_n, end_n)

    def overlaps(self, other: "TimeSlot") -> bool:
        if self.day_of_week != other.day_of_week:
            return False
        return overlaps(self.start, self.end, other.start, other.end)

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class Room:
    id: int
    name: str
    location: str = ""
    capacity: int = 0


@dataclass
class Section:
    """강의 분반. 담당 강사 1명."""
    id: int
    course_id: int
    instructor_id: Optional[int]
    course_code: str = ""
    course_title: str = ""
    name: str = ""


@dataclass
class Lesson:
    """
    Lesson 도메인 엔티티.
    id가 None이면 아직 저장 전.
    """
    id: Optional[int]
    section_id: int
    title: str
    slot: TimeSlot
    room_id: Optional[int] = None
    description: str = ""
    course_code: str = ""
    course_title: str = ""
    room_name: str = ""
    instructor_name: str = ""

    @property
    def day_of_week(self) -> DayOfWeek:
        return self.slot.day_of_week

    @property
    def start_time(self) -> str:
        return self.slot.start

    @property
    def end_time(self) -> str:
        return self.slot.end

    def sort_key(self) -> tuple[int, str, int]:
        return (self.slot.day_of_week.index, self.slot.start, self.id or 0)


# update 요청에서 허용되는 필드
LESSON_MUTABLE_FIELDS = ("title", "description", "day_of_week", "start_time", "end_time", "room_id")


def merge_lesson_changes(lesson: Lesson, changes: Mapping[str, Any]) -> Lesson:
    """
    부분 수정값을 기존 레코드 위에 덮어 '실효 상태'를 만든다.

    - 요청에 없는 키는 기존 값 유지
    - room_id 키가 있고 값이 None이면 강의실 해제
    - start/end 검증은 병합된 값 기준 (요청 필드만 검증하지 않음)
    """
    unknown = set(changes) - set(LESSON_MUTABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown lesson fields: {', '.join(sorted(unknown))}")

    title = changes.get("title", lesson.title)
    if title is None or not str(title).strip():
        raise ValidationError("Lesson title is required", field="title")

    slot = TimeSlot.of(
        changes.get("day_of_week") or lesson.slot.day_of_week,
        changes.get("start_time") or lesson.slot.start,
        changes.get("end_time") or lesson.slot.end,
    )
    room_id = changes["room_id"] if "room_id" in changes else lesson.room_id
    description = changes.get("description", lesson.description)

    return replace(
        lesson,
        title=str(title).strip(),
        description=description or "",
        slot=slot,
        room_id=room_id,
    )


@dataclass(frozen=True)
class LessonConflict:
    """충돌한 기존 Lesson 요약 (사용자 메시지용)."""
    lesson_id: int
    title: str
    course_code: str
    day_of_week: DayOfWeek
    start_time: str
    end_time: str

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "LessonConflict":
        return cls(
            lesson_id=int(lesson.id or 0),
            title=lesson.title,
            course_code=lesson.course_code,
            day_of_week=lesson.day_of_week,
            start_time=lesson.start_time,
            end_time=lesson.end_time,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "lesson_id": self.lesson_id,
            "title": self.title,
            "course_code": self.course_code,
            "day_of_week": self.day_of_week.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }

    def describe(self) -> str:
        return f"{self.course_code} {self.title} ({self.day_of_week.value} {self.start_time}-{self.end_time})"


@dataclass
class ScheduleOccurrence:
    """Lesson의 특정 날짜 회차. Lesson 삭제 시 함께 삭제."""
    lesson_id: int
    date: date
    is_cancelled: bool = False
    id: Optional[int] = None


MAX_SCHEDULE_WEEKS = 52


def weekly_dates(day_of_week: DayOfWeek, first_date: date, weeks: int) -> list[date]:
    """first_date 이후(포함) 첫 해당 요일부터 주 1회씩 weeks개."""
    if weeks < 1 or weeks > MAX_SCHEDULE_WEEKS:
        raise ValidationError(f"weeks must be between 1 and {MAX_SCHEDULE_WEEKS}", field="weeks")
    offset = (day_of_week.index - first_date.weekday()) % 7
    start = first_date + timedelta(days=offset)
    return [start + timedelta(weeks=i) for i in range(weeks)]
