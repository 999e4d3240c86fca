"""Booking domain models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A guest's reservation of a room, paid through a payment intent.

    A row is written unpaid as soon as the payment intent exists and is
    flipped to paid once the charge goes through. Only paid bookings
    occupy their room.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    user_name = models.CharField(max_length=150)
    user_email = models.EmailField()
    room = models.ForeignKey(
        "hotels.Room",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    hotel_owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="hosted_bookings",
    )
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    breakfast_included = models.BooleanField(default=False)
    currency = models.CharField(max_length=3, default="usd")
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    payment_status = models.BooleanField(_("Paid"), default=False)
    payment_intent_id = models.CharField(max_length=255, unique=True)
    booked_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-booked_at"]
        indexes = [
            models.Index(fields=["room", "payment_status", "end_date"], name="booking_room_active_idx"),
            models.Index(fields=["hotel", "end_date"], name="booking_hotel_end_idx"),
            models.Index(fields=["user"], name="booking_user_idx"),
            models.Index(fields=["hotel_owner"], name="booking_owner_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.room_id} {self.start_date:%Y-%m-%d}-{self.end_date:%Y-%m-%d}"
