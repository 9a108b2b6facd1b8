"""
Repository 포트 — 영속화 추상화 (Django/ORM 미사용)
"""
from __future__ import annotations

from abc import abstractmethod
from datetime import date
from typing import Iterable, Optional, Protocol

from coursehub.domain.exams.entities import Exam, ExamAnswer, ExamAttempt
from coursehub.domain.scheduling.entities import (
    DayOfWeek,
    Lesson,
    Room,
    ScheduleOccurrence,
    Section,
)


class SectionRepository(Protocol):

    @abstractmethod
    def get(self, section_id: int) -> Optional[Section]:
        """없으면 None."""
        ...

    @abstractmethod
    def is_instructor_of(self, section_id: int, user_id: int) -> bool:
        ...


class RoomRepository(Protocol):

    @abstractmethod
    def get(self, room_id: int) -> Optional[Room]:
        ...

    @abstractmethod
    def lock(self, room_id: int) -> Optional[Room]:
        """room row lock (같은 강의실 예약 쓰기 직렬화). 없으면 None."""
        ...

    @abstractmethod
    def list_all(self) -> list[Room]:
        """이름순."""
        ...


class LessonRepository(Protocol):

    @abstractmethod
    def get(self, lesson_id: int) -> Optional[Lesson]:
        ...

    @abstractmethod
    def find_by_room_and_day(
        self,
        room_id: int,
        day_of_week: DayOfWeek,
        exclude_lesson_id: Optional[int] = None,
    ) -> list[Lesson]:
        """같은 강의실·요일의 Lesson 전체 (시간 필터는 호출자 책임)."""
        ...

    @abstractmethod
    def list_for_section(self, section_id: int) -> list[Lesson]:
        ...

    @abstractmethod
    def list_for_sections(self, section_ids: Iterable[int]) -> list[Lesson]:
        ...

    @abstractmethod
    def list_with_rooms(self, room_id: Optional[int] = None, day_of_week: Optional[DayOfWeek] = None) -> list[Lesson]:
        """강의실이 배정된 Lesson만."""
        ...

    @abstractmethod
    def add(self, lesson: Lesson) -> Lesson:
        """insert 후 id·연관 정보가 채워진 엔티티 반환."""
        ...

    @abstractmethod
    def update(self, lesson: Lesson) -> Lesson:
        ...

    @abstractmethod
    def delete(self, lesson_id: int) -> None:
        """Schedule 회차는 cascade 삭제."""
        ...


class ScheduleRepository(Protocol):

    @abstractmethod
    def get_or_create(self, lesson_id: int, on_date: date) -> tuple[ScheduleOccurrence, bool]:
        """(lesson, date) 멱등 생성."""
        ...


class EnrollmentRepository(Protocol):

    @abstractmethod
    def is_enrolled(self, student_id: int, section_id: int) -> bool:
        """status == ENROLLED 인 경우만 True."""
        ...

    @abstractmethod
    def enrolled_section_ids(self, student_id: int) -> list[int]:
        ...


class ExamRepository(Protocol):

    @abstractmethod
    def get(self, exam_id: int) -> Optional[Exam]:
        """문항(order_index 순) 포함."""
        ...


class ExamAttemptRepository(Protocol):

    @abstractmethod
    def get_by_exam_and_student(self, exam_id: int, student_id: int) -> Optional[ExamAttempt]:
        ...

    @abstractmethod
    def get_for_update(self, exam_id: int, student_id: int) -> Optional[ExamAttempt]:
        """조회 + row lock. 호출자는 UoW 트랜잭션 안에 있어야 함."""
        ...

    @abstractmethod
    def create(self, attempt: ExamAttempt) -> ExamAttempt:
        """
        (exam_id, student_id) 유니크 제약 위반 시 ConflictError(existing_attempt=기존 응시).
        check-then-insert 경쟁에서 진 요청도 여기서 ConflictError가 된다.
        """
        ...

    @abstractmethod
    def save(self, attempt: ExamAttempt) -> None:
        ...


class ExamAnswerRepository(Protocol):

    @abstractmethod
    def upsert(self, answer: ExamAnswer) -> ExamAnswer:
        """(attempt_id, question_id) 기준 insert/update."""
        ...

    @abstractmethod
    def list_for_attempt(self, attempt_id: int) -> list[ExamAnswer]:
        ...
