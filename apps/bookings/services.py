"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.hotels.services import quote_total_price
from apps.payments import stripe_service
from shared.domain.value_objects import Money

from .models import Booking
from .overlap import has_overlap

logger = logging.getLogger(__name__)


class BookingConflictError(Exception):
    """Raised when a room is already taken for the requested dates."""


class PaymentNotCompletedError(Exception):
    """Raised when the processor has not captured the charge of an intent."""


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _relevance_cutoff():
    return timezone.now() - timedelta(days=1)


def active_room_bookings(room_id):
    """Paid bookings of a room that have not ended before yesterday."""
    return Booking.objects.filter(
        room_id=room_id,
        payment_status=True,
        end_date__gt=_relevance_cutoff(),
    ).order_by("start_date")


def hotel_bookings(hotel_id):
    """Bookings of a hotel that have not ended before yesterday, paid or not."""
    return (
        Booking.objects.filter(hotel_id=hotel_id, end_date__gt=_relevance_cutoff())
        .select_related("room", "hotel")
        .order_by("start_date")
    )


def _booking_fields(user, booking_data: dict) -> dict:
    room = booking_data["room"]
    total = quote_total_price(
        room,
        booking_data["start_date"],
        booking_data["end_date"],
        booking_data.get("breakfast_included", False),
    )
    return {
        "user_name": user.display_name,
        "user_email": user.email,
        "room": room,
        "hotel": room.hotel,
        "hotel_owner": room.hotel.owner,
        "start_date": booking_data["start_date"],
        "end_date": booking_data["end_date"],
        "breakfast_included": booking_data.get("breakfast_included", False),
        "currency": settings.STRIPE_CURRENCY,
        "total_price": total,
    }


def create_or_update_payment_intent(user, booking_data: dict, payment_intent_id: str | None = None):
    """Create (or re-price) the payment intent for a reservation attempt.

    Returns ``(booking, intent, created)``. With a known intent id of the
    caller the intent amount and the booking row are updated in place;
    otherwise a new intent is created and an unpaid booking inserted. If that
    insert fails the new intent is cancelled before the error propagates.
    """
    fields = _booking_fields(user, booking_data)
    amount = Money(fields["total_price"], fields["currency"]).minor_units

    existing = None
    if payment_intent_id:
        existing = Booking.objects.filter(user=user, payment_intent_id=payment_intent_id).first()

    if existing is not None and existing.payment_status:
        raise BookingConflictError("This booking is already paid and can no longer be changed.")

    if existing is not None:
        stripe_service.retrieve_intent(payment_intent_id)
        intent = stripe_service.update_intent(payment_intent_id, amount)
        for name, value in fields.items():
            setattr(existing, name, value)
        existing.save()
        logger.info("Booking %s re-priced to %s cents", existing.pk, amount)
        return existing, intent, False

    intent = stripe_service.create_intent(amount, fields["currency"])
    try:
        with transaction.atomic():
            booking = Booking.objects.create(user=user, payment_intent_id=intent["id"], **fields)
    except DatabaseError:
        logger.exception("Could not store booking for intent %s, cancelling it", intent["id"])
        stripe_service.cancel_intent(intent["id"])
        raise
    logger.info("Booking %s created for intent %s", booking.pk, intent["id"])
    return booking, intent, True


def confirm_payment(payment_intent_id: str, user=None) -> Booking:
    """Mark the booking of ``payment_intent_id`` as paid.

    The processor must report the charge as succeeded, otherwise
    ``PaymentNotCompletedError`` is raised and the booking is left alone.
    The room's paid bookings are then locked and checked; when the dates
    have been taken meanwhile, the charge is refunded, the unpaid booking is
    removed and ``BookingConflictError`` is raised. With ``user`` given, only
    that user's booking is considered.
    """
    bookings = Booking.objects.filter(payment_intent_id=payment_intent_id)
    if user is not None:
        bookings = bookings.filter(user=user)

    booking = bookings.get()
    if booking.payment_status:
        return booking

    intent = stripe_service.retrieve_intent(payment_intent_id)
    if intent["status"] != "succeeded":
        logger.warning("Intent %s not paid yet (status %s)", payment_intent_id, intent["status"])
        raise PaymentNotCompletedError("The payment has not been completed.")

    with transaction.atomic():
        booking = _lock_queryset_if_possible(bookings).get()
        if booking.payment_status:
            return booking

        paid = _lock_queryset_if_possible(active_room_bookings(booking.room_id).exclude(pk=booking.pk))
        clash = has_overlap(booking.start_date, booking.end_date, list(paid), include_containment=True)
        if not clash:
            booking.payment_status = True
            booking.save(update_fields=["payment_status"])
            logger.info("Booking %s paid with intent %s", booking.pk, payment_intent_id)
            return booking

        booking.delete()

    logger.warning("Room %s already taken, refunding intent %s", booking.room_id, payment_intent_id)
    stripe_service.refund_intent(payment_intent_id)
    raise BookingConflictError("The room is no longer available for the selected dates.")


def delete_booking(booking: Booking) -> None:
    booking_id = booking.pk
    booking.delete()
    logger.info("Booking %s deleted", booking_id)
