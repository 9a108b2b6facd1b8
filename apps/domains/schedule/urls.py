# PATH: apps/domains/schedule/urls.py

from django.urls import path

from apps.domains.schedule.views import (
    LessonDetailView,
    LessonScheduleView,
    MyTimetableView,
    RoomAvailabilityView,
    RoomListView,
    SectionLessonListView,
)

urlpatterns = [
    # =========================
    # Rooms
    # =========================
    path("rooms/", RoomListView.as_view(), name="room-list"),
    path("rooms/availability/", RoomAvailabilityView.as_view(), name="room-availability"),

    # =========================
    # Lessons (강사 / 관리자)
    # =========================
    path("sections/<int:section_id>/lessons/", SectionLessonListView.as_view(), name="section-lessons"),
    path("lessons/<int:lesson_id>/", LessonDetailView.as_view(), name="lesson-detail"),
    path("lessons/<int:lesson_id>/schedules/", LessonScheduleView.as_view(), name="lesson-schedules"),

    # =========================
    # Student
    # =========================
    path("me/timetable/", MyTimetableView.as_view(), name="my-timetable"),
]
