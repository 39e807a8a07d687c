import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="event",
            name="start_time",
            field=models.CharField(
                blank=True,
                default="",
                max_length=5,
                validators=[
                    django.core.validators.RegexValidator(
                        "^([01]\\d|2[0-3]):[0-5]\\d$", "Enter a 24-hour time as HH:MM."
                    )
                ],
            ),
        ),
        migrations.AlterField(
            model_name="event",
            name="end_time",
            field=models.CharField(
                blank=True,
                default="",
                max_length=5,
                validators=[
                    django.core.validators.RegexValidator(
                        "^([01]\\d|2[0-3]):[0-5]\\d$", "Enter a 24-hour time as HH:MM."
                    )
                ],
            ),
        ),
        migrations.AddField(
            model_name="ticket",
            name="discount_code",
            field=models.CharField(blank=True, default="", max_length=50),
        ),
        migrations.CreateModel(
            name="Discount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=50)),
                (
                    "kind",
                    models.CharField(
                        choices=[("percentage", "Percentage"), ("flat", "Flat amount")], max_length=20
                    ),
                ),
                ("value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("max_uses", models.PositiveIntegerField()),
                ("used_count", models.PositiveIntegerField(default=0)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="discounts",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["code"],
                "constraints": [
                    models.UniqueConstraint(fields=("event", "code"), name="unique_discount_code_per_event")
                ],
            },
        ),
    ]
