"""Booking API views."""

from __future__ import annotations

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.core.exceptions import Conflict
from apps.core.permissions import IsOwner
from apps.hotels.models import Hotel
from apps.hotels.services import quote_total_price
from apps.payments.stripe_service import serialize_intent

from .drafts import ReservationDraftStore
from .models import Booking
from .overlap import has_overlap
from .serializers import (
    BookedRangeSerializer,
    BookingSerializer,
    DraftSerializer,
    PaymentIntentRequestSerializer,
)
from .services import (
    BookingConflictError,
    PaymentNotCompletedError,
    active_room_bookings,
    confirm_payment,
    create_or_update_payment_intent,
    delete_booking,
    hotel_bookings,
)


class BookingViewSet(mixins.RetrieveModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """Reservation lifecycle: pay, confirm, list and cancel bookings.

    A booking can be read or deleted by the guest who made it and by the
    host of its hotel.
    """

    queryset = Booking.objects.select_related("room", "hotel", "user", "hotel_owner")
    serializer_class = BookingSerializer
    permission_classes = [IsOwner]

    def perform_destroy(self, instance):  # type: ignore
        delete_booking(instance)

    def _list_response(self, queryset):
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def mine(self, request):
        """Bookings made by the caller, newest first."""
        return self._list_response(self.get_queryset().filter(user=request.user).order_by("-booked_at"))

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def hosted(self, request):
        """Bookings of the caller's hotels, newest first."""
        return self._list_response(self.get_queryset().filter(hotel_owner=request.user).order_by("-booked_at"))

    @action(
        detail=False,
        methods=["post"],
        url_path="payment-intent",
        url_name="payment-intent",
        permission_classes=[permissions.IsAuthenticated],
    )
    def payment_intent(self, request):
        serializer = PaymentIntentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking, intent, created = create_or_update_payment_intent(
                request.user,
                serializer.validated_data["booking"],
                serializer.validated_data.get("payment_intent_id") or None,
            )
        except BookingConflictError as exc:
            raise Conflict(str(exc))

        drafts = ReservationDraftStore(request.session)
        drafts.set_payment_intent_id(intent["id"])
        drafts.set_client_secret(intent["client_secret"])

        return Response(
            {"payment_intent": serialize_intent(intent), "booking_id": booking.pk},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @action(
        detail=False,
        methods=["patch"],
        url_path=r"intent/(?P<payment_intent_id>[^/]+)",
        url_name="confirm-payment",
        permission_classes=[permissions.IsAuthenticated],
    )
    def confirm(self, request, payment_intent_id=None):  # type: ignore
        """Mark the caller's booking paid once the processor accepted the charge."""
        try:
            booking = confirm_payment(payment_intent_id, user=request.user)
        except Booking.DoesNotExist:
            raise NotFound("No booking found for this payment intent.")
        except PaymentNotCompletedError as exc:
            raise Conflict(str(exc))
        except BookingConflictError as exc:
            ReservationDraftStore(request.session).reset()
            raise Conflict(str(exc))

        ReservationDraftStore(request.session).reset()
        return Response(self.get_serializer(booking).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"room/(?P<room_id>\d+)",
        url_name="room",
        permission_classes=[permissions.AllowAny],
    )
    def by_room(self, request, room_id=None):  # type: ignore
        """Date ranges of paid bookings still occupying the room, without guest details."""
        return Response(BookedRangeSerializer(active_room_bookings(room_id), many=True).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"hotel/(?P<hotel_id>\d+)",
        url_name="hotel",
        permission_classes=[IsOwner],
    )
    def by_hotel(self, request, hotel_id=None):  # type: ignore
        """Current bookings of a hotel, for its host."""
        hotel = get_object_or_404(Hotel, pk=hotel_id)
        self.check_object_permissions(request, hotel)
        return Response(self.get_serializer(hotel_bookings(hotel.pk), many=True).data)

    @action(detail=False, methods=["get", "put", "delete"], permission_classes=[permissions.AllowAny])
    def draft(self, request):
        """The reservation attempt kept in the caller's session."""
        drafts = ReservationDraftStore(request.session)
        if request.method == "PUT":
            serializer = DraftSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            draft = dict(serializer.data)
            draft["total_price"] = str(
                quote_total_price(data["room"], data["start_date"], data["end_date"], data["breakfast_included"])
            )
            return Response(drafts.set_draft(draft))
        if request.method == "DELETE":
            drafts.reset()
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(drafts.state)

    @action(
        detail=False,
        methods=["post"],
        url_path="draft/check",
        url_name="draft-check",
        permission_classes=[permissions.AllowAny],
    )
    def check_draft(self, request):
        """Whether the stored draft clashes with the room's paid bookings."""
        draft = ReservationDraftStore(request.session).state["draft"]
        if not draft:
            raise NotFound("There is no reservation draft.")
        overlap = has_overlap(draft["start_date"], draft["end_date"], active_room_bookings(draft["room"]))
        return Response({"overlap": overlap})
