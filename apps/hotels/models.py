"""Hotel domain models.

A host lists hotels; each hotel offers rooms with their own nightly price,
optional breakfast price, capacity and amenities. Pictures live in the
external upload service and are referenced here by URL.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

HOTEL_AMENITIES = (
    "gym",
    "spa",
    "bar",
    "laundry",
    "restaurant",
    "shopping",
    "free_parking",
    "bike_rental",
    "free_wifi",
    "movie_nights",
    "swimming_pool",
    "coffee_shop",
)

ROOM_AMENITIES = (
    "room_service",
    "tv",
    "balcony",
    "free_wifi",
    "city_view",
    "ocean_view",
    "forest_view",
    "mountain_view",
    "air_conditioner",
    "sound_proof",
)


class Hotel(models.Model):
    """A hotel listed by its owner."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="hotels",
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    image = models.URLField(max_length=500)
    country = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, blank=True)
    location_description = models.TextField(blank=True)

    gym = models.BooleanField(default=False)
    spa = models.BooleanField(default=False)
    bar = models.BooleanField(default=False)
    laundry = models.BooleanField(default=False)
    restaurant = models.BooleanField(default=False)
    shopping = models.BooleanField(default=False)
    free_parking = models.BooleanField(default=False)
    bike_rental = models.BooleanField(default=False)
    free_wifi = models.BooleanField(default=False)
    movie_nights = models.BooleanField(default=False)
    swimming_pool = models.BooleanField(default=False)
    coffee_shop = models.BooleanField(default=False)

    added_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel")
        verbose_name_plural = _("Hotels")
        ordering = ["-added_at"]
        indexes = [
            models.Index(fields=["owner"], name="hotel_owner_idx"),
            models.Index(fields=["country", "state", "city"], name="hotel_location_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Room(models.Model):
    """A bookable room of a hotel."""

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="rooms")
    title = models.CharField(max_length=255)
    description = models.TextField()
    image = models.URLField(max_length=500)
    bed_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    guest_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    bathroom_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    king_bed = models.PositiveSmallIntegerField(default=0)
    queen_bed = models.PositiveSmallIntegerField(default=0)
    room_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("1.00"))],
    )
    breakfast_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    room_service = models.BooleanField(default=False)
    tv = models.BooleanField(default=False)
    balcony = models.BooleanField(default=False)
    free_wifi = models.BooleanField(default=False)
    city_view = models.BooleanField(default=False)
    ocean_view = models.BooleanField(default=False)
    forest_view = models.BooleanField(default=False)
    mountain_view = models.BooleanField(default=False)
    air_conditioner = models.BooleanField(default=False)
    sound_proof = models.BooleanField(default=False)

    added_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["added_at"]

    def __str__(self) -> str:
        return f"{self.title} ({self.hotel_id})"
