from coursehub.application.ports.unit_of_work import UnitOfWork
from coursehub.application.ports.clock import Clock
from coursehub.application.ports.audit import AuditAction, AuditSink
from coursehub.application.ports.identity import Actor, Role
from coursehub.application.ports.repositories import (
    EnrollmentRepository,
    ExamAnswerRepository,
    ExamAttemptRepository,
    ExamRepository,
    LessonRepository,
    RoomRepository,
    ScheduleRepository,
    SectionRepository,
)

__all__ = [
    "UnitOfWork",
    "Clock",
    "AuditAction",
    "AuditSink",
    "Actor",
    "Role",
    "EnrollmentRepository",
    "ExamAnswerRepository",
    "ExamAttemptRepository",
    "ExamRepository",
    "LessonRepository",
    "RoomRepository",
    "ScheduleRepository",
    "SectionRepository",
]
