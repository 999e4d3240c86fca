from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hotels", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_name", models.CharField(max_length=150)),
                ("user_email", models.EmailField(max_length=254)),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField()),
                ("breakfast_included", models.BooleanField(default=False)),
                ("currency", models.CharField(default="usd", max_length=3)),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("payment_status", models.BooleanField(default=False, verbose_name="Paid")),
                ("payment_intent_id", models.CharField(max_length=255, unique=True)),
                ("booked_at", models.DateTimeField(auto_now_add=True)),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="hotels.hotel",
                    ),
                ),
                (
                    "hotel_owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hosted_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="hotels.room",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-booked_at"],
                "indexes": [
                    models.Index(fields=["room", "payment_status", "end_date"], name="booking_room_active_idx"),
                    models.Index(fields=["hotel", "end_date"], name="booking_hotel_end_idx"),
                    models.Index(fields=["user"], name="booking_user_idx"),
                    models.Index(fields=["hotel_owner"], name="booking_owner_idx"),
                ],
            },
        ),
    ]
