from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel


# ========================================================
# Course
# ========================================================

class Course(TimestampModel):
    code = models.CharField(max_length=20, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} {self.title}"


# ========================================================
# Section (분반)
# ========================================================

class Section(TimestampModel):
    """
    Course 의 분반. 담당 강사는 1명 (없을 수 있음).
    Lesson / Exam / Enrollment 는 모두 Section 단위.
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="sections",
    )
    name = models.CharField(max_length=50, blank=True)

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="taught_sections",
    )

    class Meta:
        ordering = ["course__code", "name", "id"]

    def __str__(self):
        label = self.name or f"#{self.pk}"
        return f"{self.course.code} - {label}"
