"""Ownership policy shared by every mutating endpoint."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def owner_ids(obj) -> set:
    """Ids of the users allowed to mutate ``obj``.

    Hotels are owned by their host; rooms by the host of their hotel;
    bookings by both the guest who booked and the host of the hotel.
    """
    ids = set()
    for attr in ("owner_id", "user_id", "hotel_owner_id"):
        value = getattr(obj, attr, None)
        if value is not None:
            ids.add(value)
    hotel = getattr(obj, "hotel", None)
    if hotel is not None and getattr(hotel, "owner_id", None) is not None:
        ids.add(hotel.owner_id)
    return ids


class IsOwnerOrReadOnly(permissions.BasePermission):
    """Anyone may read; only an owner (or staff) may change or delete."""

    message = "You do not own this resource."

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return True
        return user.id in owner_ids(obj)


class IsOwner(IsOwnerOrReadOnly):
    """Like IsOwnerOrReadOnly, but reads are restricted as well."""

    def has_permission(self, request, view):  # type: ignore
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):  # type: ignore
        user = request.user
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return True
        return user.id in owner_ids(obj)
