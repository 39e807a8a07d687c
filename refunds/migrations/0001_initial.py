import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RefundRequest",
            fields=[
                ("id", models.UUIDField(editable=False, primary_key=True, serialize=False)),
                ("ticket_reference", models.CharField(max_length=64)),
                ("event_id", models.UUIDField()),
                ("owner_id", models.CharField(max_length=128)),
                ("refundable_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("changed_mind", "I changed my mind"),
                            ("need_money", "I need the money back"),
                            ("suspected_scam", "The event is likely a scam"),
                            ("wrong_ticket", "I purchased the wrong ticket"),
                            ("dislike_organizer", "I don't like the organizer"),
                            ("other", "Other"),
                        ],
                        max_length=32,
                    ),
                ),
                ("custom_reason", models.TextField(blank=True, default="")),
                ("note", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("requested", "Requested"),
                            ("processing", "Processing"),
                            ("refunded", "Refunded"),
                            ("denied", "Denied"),
                        ],
                        default="requested",
                        max_length=16,
                    ),
                ),
                ("status_reason", models.TextField(blank=True, default="")),
                ("requested_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
                (
                    "ticket",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="refund_requests",
                        to="events.ticket",
                    ),
                ),
            ],
            options={
                "ordering": ["-requested_at"],
                "indexes": [
                    models.Index(fields=["owner_id", "-requested_at"], name="refunds_ref_owner_i_9c41d2_idx"),
                    models.Index(fields=["status"], name="refunds_ref_status_3e8b70_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ["requested", "processing"])),
                        fields=("ticket",),
                        name="unique_open_refund_per_ticket",
                    ),
                ],
            },
        ),
    ]
