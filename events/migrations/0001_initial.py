import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("booker_id", models.CharField(max_length=128)),
                ("is_free", models.BooleanField(default=False)),
                ("start_at", models.DateTimeField()),
                ("end_at", models.DateTimeField(blank=True, null=True)),
                ("start_time", models.CharField(blank=True, default="", max_length=5)),
                ("end_time", models.CharField(blank=True, default="", max_length=5)),
                ("capacity_enabled", models.BooleanField(default=False)),
                ("capacity_max", models.PositiveIntegerField(default=0)),
                ("tickets_sold", models.PositiveIntegerField(default=0)),
                ("sale_window_enabled", models.BooleanField(default=False)),
                ("sale_stop_at", models.DateTimeField(blank=True, null=True)),
                ("total_revenue", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["-created_at"], name="events_even_created_0f2a1c_idx")],
            },
        ),
        migrations.CreateModel(
            name="TicketTier",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("policy", models.CharField(max_length=100)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("position", models.PositiveIntegerField(default=0)),
                ("stock_max", models.PositiveIntegerField(blank=True, null=True)),
                ("stock_sold", models.PositiveIntegerField(default=0)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tiers",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "policy"],
                "constraints": [
                    models.UniqueConstraint(fields=("event", "policy"), name="unique_tier_policy_per_event"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Ticket",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reference", models.CharField(max_length=64, unique=True)),
                ("owner_id", models.CharField(max_length=128)),
                ("tier_policy", models.CharField(max_length=100)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("total_paid", models.DecimalField(decimal_places=2, max_digits=10)),
                ("purchased_at", models.DateTimeField()),
                ("verified", models.BooleanField(default=False)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tickets",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["-purchased_at"],
                "indexes": [
                    models.Index(fields=["owner_id", "-purchased_at"], name="events_tick_owner_i_5b7e3d_idx"),
                ],
            },
        ),
    ]
