"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "hotel",
        "user_email",
        "payment_status",
        "start_date",
        "end_date",
        "total_price",
        "booked_at",
    )
    list_filter = ("payment_status", "breakfast_included", "currency")
    search_fields = ("user_email", "user_name", "payment_intent_id", "hotel__title")
    readonly_fields = ("payment_intent_id", "booked_at")
    date_hierarchy = "start_date"
