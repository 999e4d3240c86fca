"""Hotel and room API views."""

from __future__ import annotations

from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.core.permissions import IsOwnerOrReadOnly

from .filters import HotelFilterSet, RoomFilterSet
from .models import Hotel, Room
from .serializers import (
    HotelSerializer,
    HotelWriteSerializer,
    RoomQuoteSerializer,
    RoomSerializer,
    RoomWriteSerializer,
)
from .services import nights_between, quote_total_price


class HotelViewSet(viewsets.ModelViewSet):
    """Public hotel search and detail; hosts manage their own hotels."""

    queryset = Hotel.objects.select_related("owner").prefetch_related("rooms")
    permission_classes = [IsOwnerOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = HotelFilterSet
    ordering_fields = ["added_at", "title"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return HotelWriteSerializer
        return HotelSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        response = super().create(request, *args, **kwargs)
        hotel = self.get_queryset().get(pk=response.data["id"])
        response.data = HotelSerializer(hotel, context=self.get_serializer_context()).data
        return response

    def update(self, request, *args, **kwargs):  # type: ignore
        super().update(request, *args, **kwargs)
        hotel = self.get_queryset().get(pk=kwargs["pk"])
        return Response(HotelSerializer(hotel, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def mine(self, request):
        """Hotels owned by the caller, with their rooms."""
        hotels = self.filter_queryset(self.get_queryset().filter(owner=request.user))
        page = self.paginate_queryset(hotels)
        if page is not None:
            return self.get_paginated_response(HotelSerializer(page, many=True).data)
        return Response(HotelSerializer(hotels, many=True).data)


class RoomViewSet(viewsets.ModelViewSet):
    """Rooms are public to read; only the hotel's host may change them."""

    queryset = Room.objects.select_related("hotel", "hotel__owner")
    permission_classes = [IsOwnerOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = RoomFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return RoomWriteSerializer
        return RoomSerializer

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny], url_path="booked-dates")
    def booked_dates(self, request, pk=None):  # type: ignore
        """Calendar days already taken by paid, still relevant bookings."""
        from apps.bookings.overlap import booked_days
        from apps.bookings.services import active_room_bookings

        room = self.get_object()
        days = booked_days(active_room_bookings(room.id))
        return Response({"room_id": room.id, "booked_dates": [day.isoformat() for day in days]})

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def quote(self, request, pk=None):  # type: ignore
        """Price of a stay, computed the same way the booking flow charges it."""
        room = self.get_object()
        serializer = RoomQuoteSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        total = quote_total_price(room, data["start_date"], data["end_date"], data["breakfast_included"])
        return Response(
            {
                "room_id": room.id,
                "nights": max(nights_between(data["start_date"], data["end_date"]), 1),
                "breakfast_included": data["breakfast_included"],
                "total_price": str(total),
            }
        )
