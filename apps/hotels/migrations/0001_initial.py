from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Hotel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("image", models.URLField(max_length=500)),
                ("country", models.CharField(max_length=100)),
                ("state", models.CharField(blank=True, max_length=100)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("location_description", models.TextField(blank=True)),
                ("gym", models.BooleanField(default=False)),
                ("spa", models.BooleanField(default=False)),
                ("bar", models.BooleanField(default=False)),
                ("laundry", models.BooleanField(default=False)),
                ("restaurant", models.BooleanField(default=False)),
                ("shopping", models.BooleanField(default=False)),
                ("free_parking", models.BooleanField(default=False)),
                ("bike_rental", models.BooleanField(default=False)),
                ("free_wifi", models.BooleanField(default=False)),
                ("movie_nights", models.BooleanField(default=False)),
                ("swimming_pool", models.BooleanField(default=False)),
                ("coffee_shop", models.BooleanField(default=False)),
                ("added_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hotels",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Hotel",
                "verbose_name_plural": "Hotels",
                "ordering": ["-added_at"],
                "indexes": [
                    models.Index(fields=["owner"], name="hotel_owner_idx"),
                    models.Index(fields=["country", "state", "city"], name="hotel_location_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("image", models.URLField(max_length=500)),
                (
                    "bed_count",
                    models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                (
                    "guest_count",
                    models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                (
                    "bathroom_count",
                    models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("king_bed", models.PositiveSmallIntegerField(default=0)),
                ("queen_bed", models.PositiveSmallIntegerField(default=0)),
                (
                    "room_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("1.00"))],
                    ),
                ),
                (
                    "breakfast_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("room_service", models.BooleanField(default=False)),
                ("tv", models.BooleanField(default=False)),
                ("balcony", models.BooleanField(default=False)),
                ("free_wifi", models.BooleanField(default=False)),
                ("city_view", models.BooleanField(default=False)),
                ("ocean_view", models.BooleanField(default=False)),
                ("forest_view", models.BooleanField(default=False)),
                ("mountain_view", models.BooleanField(default=False)),
                ("air_conditioner", models.BooleanField(default=False)),
                ("sound_proof", models.BooleanField(default=False)),
                ("added_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rooms",
                        to="hotels.hotel",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["added_at"],
            },
        ),
    ]
