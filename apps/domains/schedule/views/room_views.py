# PATH: apps/domains/schedule/views/room_views.py
"""
강의실 조회

GET /rooms/?name=&location=&min_capacity=
GET /rooms/availability/?room=<id>&day_of_week=MONDAY
"""

from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.domains.schedule.filters import RoomFilter
from apps.domains.schedule.models import Room
from apps.domains.schedule.serializers import RoomSerializer
from apps.domains.schedule.services import unit_of_work
from coursehub.application.use_cases.scheduling.rooms import room_availability
from coursehub.domain.scheduling.entities import DayOfWeek
from coursehub.domain.shared.errors import ValidationError


def _int_param(raw, name: str):
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be an integer", field=name) from e


class RoomListView(ListAPIView):
    """단순 조회 → ORM 직접 + django-filter"""

    permission_classes = [IsAuthenticated]
    serializer_class = RoomSerializer
    filterset_class = RoomFilter
    pagination_class = None

    def get_queryset(self):
        return Room.objects.all().order_by("name", "id")


class RoomAvailabilityView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        room_id = _int_param(request.query_params.get("room"), "room")
        raw_day = request.query_params.get("day_of_week")
        day = DayOfWeek.parse(raw_day) if raw_day else None

        data = room_availability(unit_of_work(), room_id=room_id, day_of_week=day)
        return Response(data)
