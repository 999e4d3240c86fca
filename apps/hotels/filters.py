"""FilterSet definitions for hotel search and listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Hotel, Room


class HotelFilterSet(django_filters.FilterSet):
    """Search by title fragment and exact location."""

    title = django_filters.CharFilter(field_name="title", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="exact")
    state = django_filters.CharFilter(field_name="state", lookup_expr="exact")
    city = django_filters.CharFilter(field_name="city", lookup_expr="exact")

    class Meta:
        model = Hotel
        fields = ["title", "country", "state", "city"]


class RoomFilterSet(django_filters.FilterSet):
    hotel = django_filters.NumberFilter(field_name="hotel_id", lookup_expr="exact")
    guests = django_filters.NumberFilter(field_name="guest_count", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="room_price", lookup_expr="lte")

    class Meta:
        model = Room
        fields = ["hotel"]
