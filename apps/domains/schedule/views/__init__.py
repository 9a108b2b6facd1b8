from .room_views import RoomAvailabilityView, RoomListView
from .lesson_views import LessonDetailView, LessonScheduleView, SectionLessonListView
from .timetable_views import MyTimetableView

__all__ = [
    "RoomListView",
    "RoomAvailabilityView",
    "SectionLessonListView",
    "LessonDetailView",
    "LessonScheduleView",
    "MyTimetableView",
]
