"""Serializers for booking endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.hotels.models import Hotel, Room
from apps.hotels.serializers import DATE_INPUT_FORMATS

from .models import Booking


class BookingPayloadSerializer(serializers.Serializer):
    """Dates and options of a reservation attempt.

    The price is always computed on the server from the room's rates, so a
    ``total_price`` sent by the client is ignored.
    """

    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.select_related("hotel", "hotel__owner"))
    start_date = serializers.DateTimeField(input_formats=DATE_INPUT_FORMATS)
    end_date = serializers.DateTimeField(input_formats=DATE_INPUT_FORMATS)
    breakfast_included = serializers.BooleanField(default=False)

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("The end date must not be before the start date.")
        return attrs


class PaymentIntentRequestSerializer(serializers.Serializer):
    booking = BookingPayloadSerializer()
    payment_intent_id = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)


class DraftSerializer(BookingPayloadSerializer):
    """Reservation draft as kept in the session, including its quoted price."""

    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)


class BookedRoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "title", "image", "room_price", "breakfast_price"]
        read_only_fields = fields


class BookedHotelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ["id", "title", "image", "country", "state", "city"]
        read_only_fields = fields


class BookedRangeSerializer(serializers.ModelSerializer):
    """Only the dates of a booking, safe to show to anyone."""

    class Meta:
        model = Booking
        fields = ["id", "start_date", "end_date"]
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    room = BookedRoomSerializer(read_only=True)
    hotel = BookedHotelSerializer(read_only=True)
    user_id = serializers.ReadOnlyField(source="user.id")
    hotel_owner_id = serializers.ReadOnlyField(source="hotel_owner.id")

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "user_name",
            "user_email",
            "room",
            "hotel",
            "hotel_owner_id",
            "start_date",
            "end_date",
            "breakfast_included",
            "currency",
            "total_price",
            "payment_status",
            "payment_intent_id",
            "booked_at",
        ]
        read_only_fields = fields
