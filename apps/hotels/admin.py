"""Admin registrations for hotels domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Hotel, Room


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("title", "room_price", "breakfast_price", "guest_count", "bed_count")


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("title", "owner", "country", "state", "city", "added_at")
    list_filter = ("country", "state")
    search_fields = ("title", "city", "owner__email")
    readonly_fields = ("added_at", "updated_at")
    inlines = [RoomInline]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("title", "hotel", "room_price", "breakfast_price", "guest_count")
    search_fields = ("title", "hotel__title")
    readonly_fields = ("added_at", "updated_at")
