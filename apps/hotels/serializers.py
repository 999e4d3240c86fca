"""Serializers for the hotels domain.

Write serializers list every field a host may set explicitly; anything else
in the request body (owner, ids, timestamps) is ignored, so partial updates
only ever touch whitelisted columns.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import PermissionDenied  # type: ignore

from .models import HOTEL_AMENITIES, ROOM_AMENITIES, Hotel, Room

ROOM_WRITABLE_FIELDS = [
    "title",
    "description",
    "image",
    "bed_count",
    "guest_count",
    "bathroom_count",
    "king_bed",
    "queen_bed",
    "room_price",
    "breakfast_price",
    *ROOM_AMENITIES,
]

# Plain dates are accepted and read as midnight in the current timezone
DATE_INPUT_FORMATS = ["iso-8601", "%Y-%m-%d"]

HOTEL_WRITABLE_FIELDS = [
    "title",
    "description",
    "image",
    "country",
    "state",
    "city",
    "location_description",
    *HOTEL_AMENITIES,
]


def _min_length(value: str, length: int, label: str) -> str:
    if len(value.strip()) < length:
        raise serializers.ValidationError(f"{label} should be at least {length} characters long.")
    return value


class RoomSerializer(serializers.ModelSerializer):
    hotel_id = serializers.ReadOnlyField(source="hotel.id")

    class Meta:
        model = Room
        fields = ["id", "hotel_id", *ROOM_WRITABLE_FIELDS, "added_at", "updated_at"]
        read_only_fields = fields


class RoomWriteSerializer(serializers.ModelSerializer):
    """Create and update rooms. The hotel can only be chosen on creation."""

    class Meta:
        model = Room
        fields = ["id", "hotel", *ROOM_WRITABLE_FIELDS]
        read_only_fields = ["id"]

    def get_fields(self):  # type: ignore
        fields = super().get_fields()
        if self.instance is not None:
            fields["hotel"].read_only = True
        return fields

    def validate_title(self, value: str) -> str:
        return _min_length(value, 3, "The title")

    def validate_description(self, value: str) -> str:
        return _min_length(value, 10, "The description")

    def validate_hotel(self, hotel: Hotel) -> Hotel:
        user = self.context["request"].user
        if hotel.owner_id != user.id and not user.is_staff:
            raise PermissionDenied("You can only add rooms to your own hotels.")
        return hotel


class HotelSerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField(source="owner.id")
    rooms = RoomSerializer(many=True, read_only=True)

    class Meta:
        model = Hotel
        fields = ["id", "owner_id", *HOTEL_WRITABLE_FIELDS, "rooms", "added_at", "updated_at"]
        read_only_fields = fields


class HotelWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ["id", *HOTEL_WRITABLE_FIELDS]
        read_only_fields = ["id"]

    def validate_title(self, value: str) -> str:
        return _min_length(value, 3, "The title")

    def validate_description(self, value: str) -> str:
        return _min_length(value, 10, "The description")

    def create(self, validated_data):  # type: ignore
        return Hotel.objects.create(owner=self.context["request"].user, **validated_data)


class RoomQuoteSerializer(serializers.Serializer):
    start_date = serializers.DateTimeField(input_formats=DATE_INPUT_FORMATS)
    end_date = serializers.DateTimeField(input_formats=DATE_INPUT_FORMATS)
    breakfast_included = serializers.BooleanField(default=False)

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("The end date must not be before the start date.")
        return attrs
