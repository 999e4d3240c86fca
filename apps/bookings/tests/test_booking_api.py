"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.hotels.models import Hotel, Room
from apps.payments.stripe_service import PaymentGatewayError
from apps.users.models import User


def _intent(intent_id: str, amount: int, status_: str = "requires_payment_method") -> dict:
    return {
        "id": intent_id,
        "client_secret": f"{intent_id}_secret",
        "amount": amount,
        "currency": "usd",
        "status": status_,
    }


class BookingAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(
            email="guest@example.com",
            password="GuestPass123",
            first_name="Greta",
        )
        self.host = User.objects.create_user(email="host@example.com", password="HostPass123")
        self.stranger = User.objects.create_user(email="stranger@example.com", password="StrangerPass123")
        self.hotel = Hotel.objects.create(
            owner=self.host,
            title="Seaside Inn",
            description="A quiet hotel right by the sea.",
            image="https://utfs.io/f/hotel-key-1",
            country="PT",
        )
        self.room = Room.objects.create(
            hotel=self.hotel,
            title="Double room",
            description="Double room with a sea view.",
            image="https://utfs.io/f/room-key-1",
            room_price=Decimal("100.00"),
            breakfast_price=Decimal("20.00"),
        )
        self.today = timezone.localtime().replace(hour=12, minute=0, second=0, microsecond=0)

    def _booking(self, start_offset: int, nights: int, paid: bool, intent_id: str, user=None) -> Booking:
        user = user or self.guest
        return Booking.objects.create(
            user=user,
            user_name=user.display_name,
            user_email=user.email,
            room=self.room,
            hotel=self.hotel,
            hotel_owner=self.host,
            start_date=self.today + timedelta(days=start_offset),
            end_date=self.today + timedelta(days=start_offset + nights),
            total_price=Decimal("100.00") * nights,
            payment_status=paid,
            payment_intent_id=intent_id,
        )

    def _booking_payload(self, start_offset: int, nights: int, breakfast: bool = False) -> dict:
        start = (self.today + timedelta(days=start_offset)).date()
        return {
            "room": self.room.id,
            "start_date": start.isoformat(),
            "end_date": (start + timedelta(days=nights)).isoformat(),
            "breakfast_included": breakfast,
            "total_price": "1.00",
        }


class PaymentIntentTests(BookingAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.url = reverse("booking-payment-intent")
        self.client.force_authenticate(self.guest)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.url, {"booking": self._booking_payload(3, 2)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @patch("apps.bookings.services.stripe_service.create_intent")
    def test_new_intent_inserts_unpaid_booking(self, create_mock) -> None:
        create_mock.return_value = _intent("pi_new", 48000)

        response = self.client.post(
            self.url,
            {"booking": self._booking_payload(3, 4, breakfast=True)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["payment_intent"]["id"], "pi_new")
        self.assertEqual(response.data["payment_intent"]["client_secret"], "pi_new_secret")
        create_mock.assert_called_once_with(48000, "usd")

        booking = Booking.objects.get(payment_intent_id="pi_new")
        self.assertFalse(booking.payment_status)
        self.assertEqual(booking.total_price, Decimal("480.00"))
        self.assertEqual(booking.user_name, "Greta")
        self.assertEqual(booking.user_email, "guest@example.com")
        self.assertEqual(booking.hotel_owner, self.host)

        draft = self.client.get(reverse("booking-draft")).data
        self.assertEqual(draft["payment_intent_id"], "pi_new")
        self.assertEqual(draft["client_secret"], "pi_new_secret")

    @patch("apps.bookings.services.stripe_service.update_intent")
    @patch("apps.bookings.services.stripe_service.retrieve_intent")
    def test_known_intent_updates_booking_in_place(self, retrieve_mock, update_mock) -> None:
        booking = self._booking(3, 2, paid=False, intent_id="pi_existing")
        retrieve_mock.return_value = _intent("pi_existing", 20000)
        update_mock.return_value = _intent("pi_existing", 30000)

        response = self.client.post(
            self.url,
            {"booking": self._booking_payload(3, 3), "payment_intent_id": "pi_existing"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        update_mock.assert_called_once_with("pi_existing", 30000)
        self.assertEqual(Booking.objects.count(), 1)
        booking.refresh_from_db()
        self.assertEqual(booking.total_price, Decimal("300.00"))

    @patch("apps.bookings.services.stripe_service.update_intent")
    @patch("apps.bookings.services.stripe_service.create_intent")
    def test_paid_booking_cannot_be_repriced(self, create_mock, update_mock) -> None:
        booking = self._booking(3, 2, paid=True, intent_id="pi_done")

        response = self.client.post(
            self.url,
            {"booking": self._booking_payload(3, 5), "payment_intent_id": "pi_done"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        update_mock.assert_not_called()
        create_mock.assert_not_called()
        booking.refresh_from_db()
        self.assertEqual(booking.total_price, Decimal("200.00"))

    @patch("apps.bookings.services.stripe_service.create_intent")
    def test_foreign_intent_id_creates_new_booking(self, create_mock) -> None:
        self._booking(3, 2, paid=False, intent_id="pi_other", user=self.stranger)
        create_mock.return_value = _intent("pi_fresh", 20000)

        response = self.client.post(
            self.url,
            {"booking": self._booking_payload(3, 2), "payment_intent_id": "pi_other"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Booking.objects.get(payment_intent_id="pi_other").user, self.stranger)
        self.assertEqual(Booking.objects.get(payment_intent_id="pi_fresh").user, self.guest)

    @patch("apps.bookings.services.stripe_service.cancel_intent")
    @patch("apps.bookings.services.stripe_service.create_intent")
    def test_failed_insert_cancels_new_intent(self, create_mock, cancel_mock) -> None:
        create_mock.return_value = _intent("pi_orphan", 20000)

        with patch("apps.bookings.services.Booking.objects.create", side_effect=DatabaseError("disk full")):
            response = self.client.post(self.url, {"booking": self._booking_payload(3, 2)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"detail": "Something went wrong. Please try again."})
        cancel_mock.assert_called_once_with("pi_orphan")

    @patch("apps.bookings.services.stripe_service.create_intent")
    def test_processor_failure_is_reported_generically(self, create_mock) -> None:
        create_mock.side_effect = PaymentGatewayError("Stripe create failed")

        response = self.client.post(self.url, {"booking": self._booking_payload(3, 2)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertNotIn("Stripe", response.data["detail"])
        self.assertFalse(Booking.objects.exists())

    def test_reversed_dates_are_rejected(self) -> None:
        payload = self._booking_payload(5, 2)
        payload["start_date"], payload["end_date"] = payload["end_date"], payload["start_date"]

        response = self.client.post(self.url, {"booking": payload}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ConfirmPaymentTests(BookingAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client.force_authenticate(self.guest)
        retrieve_patcher = patch("apps.bookings.services.stripe_service.retrieve_intent")
        self.retrieve_mock = retrieve_patcher.start()
        self.retrieve_mock.side_effect = lambda intent_id: _intent(intent_id, 20000, "succeeded")
        self.addCleanup(retrieve_patcher.stop)

    def _url(self, intent_id: str) -> str:
        return reverse("booking-confirm-payment", args=[intent_id])

    def test_confirm_flips_exactly_that_booking(self) -> None:
        target = self._booking(3, 2, paid=False, intent_id="pi_a")
        other = self._booking(30, 2, paid=False, intent_id="pi_b")

        response = self.client.patch(self._url("pi_a"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        target.refresh_from_db()
        other.refresh_from_db()
        self.assertTrue(target.payment_status)
        self.assertFalse(other.payment_status)

    def test_confirm_resets_draft(self) -> None:
        self._booking(3, 2, paid=False, intent_id="pi_a")
        session = self.client.session
        session["book_room"] = {"draft": None, "payment_intent_id": "pi_a", "client_secret": "s"}
        session.save()

        self.client.patch(self._url("pi_a"))

        self.assertIsNone(self.client.get(reverse("booking-draft")).data["payment_intent_id"])

    def test_unknown_intent_is_not_found(self) -> None:
        response = self.client.patch(self._url("pi_missing"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.retrieve_mock.assert_not_called()

    @patch("apps.bookings.services.stripe_service.refund_intent")
    def test_unpaid_intent_leaves_booking_untouched(self, refund_mock) -> None:
        self.retrieve_mock.side_effect = lambda intent_id: _intent(intent_id, 20000, "requires_payment_method")
        booking = self._booking(3, 2, paid=False, intent_id="pi_unpaid")

        response = self.client.patch(self._url("pi_unpaid"))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.retrieve_mock.assert_called_once_with("pi_unpaid")
        refund_mock.assert_not_called()
        booking.refresh_from_db()
        self.assertFalse(booking.payment_status)

    @patch("apps.bookings.services.stripe_service.refund_intent")
    def test_unpaid_intent_does_not_refund_on_clash(self, refund_mock) -> None:
        self.retrieve_mock.side_effect = lambda intent_id: _intent(intent_id, 20000, "processing")
        self._booking(3, 4, paid=True, intent_id="pi_paid", user=self.stranger)
        self._booking(5, 2, paid=False, intent_id="pi_late")

        response = self.client.patch(self._url("pi_late"))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        refund_mock.assert_not_called()
        self.assertTrue(Booking.objects.filter(payment_intent_id="pi_late").exists())

    def test_someone_elses_intent_is_not_found(self) -> None:
        self._booking(3, 2, paid=False, intent_id="pi_other", user=self.stranger)

        response = self.client.patch(self._url("pi_other"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Booking.objects.get(payment_intent_id="pi_other").payment_status)

    @patch("apps.bookings.services.stripe_service.refund_intent")
    def test_clash_refunds_and_removes_booking(self, refund_mock) -> None:
        self._booking(3, 4, paid=True, intent_id="pi_paid", user=self.stranger)
        self._booking(5, 2, paid=False, intent_id="pi_late")

        response = self.client.patch(self._url("pi_late"))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        refund_mock.assert_called_once_with("pi_late")
        self.assertFalse(Booking.objects.filter(payment_intent_id="pi_late").exists())
        self.assertTrue(Booking.objects.filter(payment_intent_id="pi_paid").exists())

    @patch("apps.bookings.services.stripe_service.refund_intent")
    def test_surrounding_stay_is_a_clash_at_confirmation(self, refund_mock) -> None:
        self._booking(5, 1, paid=True, intent_id="pi_paid", user=self.stranger)
        self._booking(3, 6, paid=False, intent_id="pi_wide")

        response = self.client.patch(self._url("pi_wide"))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        refund_mock.assert_called_once_with("pi_wide")

    def test_unpaid_bookings_do_not_block(self) -> None:
        self._booking(3, 4, paid=False, intent_id="pi_pending", user=self.stranger)
        self._booking(4, 2, paid=False, intent_id="pi_mine")

        response = self.client.patch(self._url("pi_mine"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)


class BookingDeleteTests(BookingAPITestCase):
    def test_guest_deletes_booking_second_call_is_not_found(self) -> None:
        booking = self._booking(3, 2, paid=True, intent_id="pi_a")
        self.client.force_authenticate(self.guest)
        url = reverse("booking-detail", args=[booking.id])

        first = self.client.delete(url)
        second = self.client.delete(url)

        self.assertEqual(first.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(second.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Booking.objects.exists())

    def test_hotel_owner_may_delete(self) -> None:
        booking = self._booking(3, 2, paid=True, intent_id="pi_a")
        self.client.force_authenticate(self.host)

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_stranger_is_forbidden(self) -> None:
        booking = self._booking(3, 2, paid=True, intent_id="pi_a")
        self.client.force_authenticate(self.stranger)

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Booking.objects.filter(pk=booking.id).exists())

    def test_anonymous_is_unauthorized(self) -> None:
        booking = self._booking(3, 2, paid=True, intent_id="pi_a")

        response = self.client.delete(reverse("booking-detail", args=[booking.id]))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class BookingListTests(BookingAPITestCase):
    @staticmethod
    def _results(response) -> list:
        return response.data["results"] if isinstance(response.data, dict) else response.data

    def test_mine_lists_callers_bookings_newest_first(self) -> None:
        older = self._booking(3, 2, paid=True, intent_id="pi_old")
        newer = self._booking(10, 2, paid=False, intent_id="pi_new")
        Booking.objects.filter(pk=older.pk).update(booked_at=timezone.now() - timedelta(days=2))
        self._booking(20, 2, paid=True, intent_id="pi_stranger", user=self.stranger)
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("booking-mine"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        results = self._results(response)
        self.assertEqual([item["id"] for item in results], [newer.id, older.id])
        self.assertEqual(results[0]["room"]["id"], self.room.id)
        self.assertEqual(results[0]["hotel"]["title"], "Seaside Inn")

    def test_hosted_lists_bookings_of_callers_hotels(self) -> None:
        booking = self._booking(3, 2, paid=True, intent_id="pi_a")
        self.client.force_authenticate(self.host)

        response = self.client.get(reverse("booking-hosted"))

        self.assertEqual([item["id"] for item in self._results(response)], [booking.id])

        self.client.force_authenticate(self.guest)
        self.assertEqual(self._results(self.client.get(reverse("booking-hosted"))), [])

    def test_mine_requires_authentication(self) -> None:
        response = self.client.get(reverse("booking-mine"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_room_listing_only_paid_and_not_ended(self) -> None:
        current = self._booking(2, 2, paid=True, intent_id="pi_current")
        ending = self._booking(-3, 3, paid=True, intent_id="pi_ending_today")
        self._booking(-10, 2, paid=True, intent_id="pi_past")
        self._booking(5, 2, paid=False, intent_id="pi_unpaid")

        response = self.client.get(reverse("booking-room", args=[self.room.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual({item["id"] for item in response.data}, {current.id, ending.id})

    def test_room_listing_hides_guest_details(self) -> None:
        self._booking(2, 2, paid=True, intent_id="pi_secret_123")

        response = self.client.get(reverse("booking-room", args=[self.room.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(set(response.data[0]), {"id", "start_date", "end_date"})
        self.assertNotIn("guest@example.com", str(response.content))
        self.assertNotIn("pi_secret_123", str(response.content))

    def test_hotel_listing_includes_unpaid(self) -> None:
        paid = self._booking(2, 2, paid=True, intent_id="pi_paid")
        unpaid = self._booking(5, 2, paid=False, intent_id="pi_unpaid")
        self._booking(-10, 2, paid=True, intent_id="pi_past")
        self.client.force_authenticate(self.host)

        response = self.client.get(reverse("booking-hotel", args=[self.hotel.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual({item["id"] for item in response.data}, {paid.id, unpaid.id})

    def test_hotel_listing_requires_authentication(self) -> None:
        self._booking(5, 2, paid=False, intent_id="pi_unpaid_456")

        response = self.client.get(reverse("booking-hotel", args=[self.hotel.id]))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotIn("pi_unpaid_456", str(response.content))

    def test_hotel_listing_is_for_the_host_only(self) -> None:
        self._booking(5, 2, paid=False, intent_id="pi_unpaid_456")
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("booking-hotel", args=[self.hotel.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_hotel_listing_of_unknown_hotel_is_not_found(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.get(reverse("booking-hotel", args=[self.hotel.id + 100]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class DraftTests(BookingAPITestCase):
    def test_put_stores_draft_with_server_price(self) -> None:
        payload = self._booking_payload(3, 2, breakfast=True)

        response = self.client.put(reverse("booking-draft"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["draft"]["room"], self.room.id)
        self.assertEqual(Decimal(response.data["draft"]["total_price"]), Decimal("240.00"))
        self.assertEqual(self.client.get(reverse("booking-draft")).data, response.data)

    def test_delete_resets_draft(self) -> None:
        self.client.put(reverse("booking-draft"), self._booking_payload(3, 2), format="json")

        response = self.client.delete(reverse("booking-draft"))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertIsNone(self.client.get(reverse("booking-draft")).data["draft"])

    def test_check_reports_overlap_with_paid_bookings(self) -> None:
        self._booking(3, 4, paid=True, intent_id="pi_paid", user=self.stranger)
        self.client.put(reverse("booking-draft"), self._booking_payload(6, 2), format="json")

        response = self.client.post(reverse("booking-draft-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"overlap": True})

    def test_check_without_clash(self) -> None:
        self._booking(3, 2, paid=True, intent_id="pi_paid", user=self.stranger)
        self.client.put(reverse("booking-draft"), self._booking_payload(10, 2), format="json")

        response = self.client.post(reverse("booking-draft-check"))

        self.assertEqual(response.data, {"overlap": False})

    def test_check_without_draft_is_not_found(self) -> None:
        response = self.client.post(reverse("booking-draft-check"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
