from django import forms
from django.contrib import admin

from coursehub.adapters.db.django.uow import DjangoUnitOfWork
from coursehub.application.use_cases.scheduling.room_conflicts import RoomConflictChecker
from coursehub.domain.scheduling.entities import TimeSlot
from coursehub.domain.shared.errors import ValidationError as DomainValidationError

from .models import Lesson, Room, Schedule


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "location", "capacity")
    list_display_links = ("id", "name")
    search_fields = ("name", "location")
    ordering = ("name",)


class LessonAdminForm(forms.ModelForm):
    """
    admin 저장도 API 와 같은 규칙을 거친다.
    - 시간: TimeSlot 으로 "HH:MM" 정규화 + start < end
    - 강의실: Room row lock 후 충돌 검사 (admin changeform 은 atomic 안에서 실행)
    """

    class Meta:
        model = Lesson
        fields = "__all__"

    def clean(self):
        cleaned = super().clean()
        day = cleaned.get("day_of_week")
        start = cleaned.get("start_time")
        end = cleaned.get("end_time")
        if not (day and start and end):
            return cleaned

        try:
            slot = TimeSlot.of(day, start, end)
        except DomainValidationError as e:
            raise forms.ValidationError(e.message)
        cleaned["start_time"] = slot.start
        cleaned["end_time"] = slot.end

        room = cleaned.get("room")
        if room is not None:
            uow = DjangoUnitOfWork()
            uow.rooms.lock(room.pk)
            conflicts = RoomConflictChecker(uow.lessons).find_conflicts(
                room.pk,
                slot.day_of_week,
                slot.start,
                slot.end,
                exclude_lesson_id=self.instance.pk,
            )
            if conflicts:
                raise forms.ValidationError(
                    ["Room is already booked for this time slot"]
                    + [c.describe() for c in conflicts]
                )
        return cleaned


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    form = LessonAdminForm
    list_display = ("id", "section", "title", "day_of_week", "start_time", "end_time", "room")
    list_display_links = ("id", "title")
    list_filter = ("day_of_week", "room")
    search_fields = ("title", "section__course__code")
    ordering = ("day_of_week", "start_time")


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = ("id", "lesson", "date", "is_cancelled")
    list_display_links = ("id", "lesson")
    list_filter = ("is_cancelled",)
    ordering = ("date",)
