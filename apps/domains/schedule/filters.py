# apps/domains/schedule/filters.py

import django_filters

from .models import Room


class RoomFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")

    # 수용 인원 이상
    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")

    class Meta:
        model = Room
        fields = []
