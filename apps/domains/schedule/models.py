from django.db import models
from django.db.models import F, Q

from apps.api.common.models import TimestampModel
from apps.domains.courses.models import Section


DAY_OF_WEEK_CHOICES = [
    ("MONDAY", "월"),
    ("TUESDAY", "화"),
    ("WEDNESDAY", "수"),
    ("THURSDAY", "목"),
    ("FRIDAY", "금"),
    ("SATURDAY", "토"),
    ("SUNDAY", "일"),
]


# ========================================================
# Room
# ========================================================

class Room(TimestampModel):
    """
    강의실 (전역 관리 자원). Lesson 이 공유 참조.
    Lesson 예약 쓰기 시 이 row 에 select_for_update 락을 건다.
    """

    name = models.CharField(max_length=100, unique=True)
    location = models.CharField(max_length=255, blank=True)
    capacity = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


# ========================================================
# Lesson (주간 반복 수업 슬롯)
# ========================================================

class Lesson(TimestampModel):
    """
    분반의 주간 수업 1개.
    start_time / end_time 은 "HH:MM" 0-padding 문자열 → 문자열 비교 = 시간 비교.
    """

    section = models.ForeignKey(
        Section,
        on_delete=models.CASCADE,
        related_name="lessons",
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    day_of_week = models.CharField(max_length=10, choices=DAY_OF_WEEK_CHOICES)
    start_time = models.CharField(max_length=5)
    end_time = models.CharField(max_length=5)

    room = models.ForeignKey(
        Room,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lessons",
    )

    class Meta:
        indexes = [
            models.Index(fields=["room", "day_of_week"], name="lesson_room_day_idx"),
        ]
        constraints = [
            # "HH:MM" 0-padding 이므로 문자열 비교 = 시간 비교
            models.CheckConstraint(
                condition=Q(start_time__lt=F("end_time")),
                name="lesson_start_before_end",
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.day_of_week} {self.start_time}-{self.end_time})"


# ========================================================
# Schedule (Lesson 의 날짜별 회차)
# ========================================================

class Schedule(models.Model):
    lesson = models.ForeignKey(
        Lesson,
        on_delete=models.CASCADE,
        related_name="schedules",
    )
    date = models.DateField()
    is_cancelled = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(
                fields=["lesson", "date"],
                name="unique_schedule_per_lesson_date",
            )
        ]

    def __str__(self):
        return f"{self.lesson.title} @ {self.date}"
