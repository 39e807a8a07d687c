"""Django ORM models for refund requests."""

from django.db import models


class RefundRequest(models.Model):
    """Persistence model for refund requests.

    At most one requested/processing row may exist per ticket.
    """

    class Status(models.TextChoices):
        REQUESTED = "requested", "Requested"
        PROCESSING = "processing", "Processing"
        REFUNDED = "refunded", "Refunded"
        DENIED = "denied", "Denied"

    class Reason(models.TextChoices):
        CHANGED_MIND = "changed_mind", "I changed my mind"
        NEED_MONEY = "need_money", "I need the money back"
        SUSPECTED_SCAM = "suspected_scam", "The event is likely a scam"
        WRONG_TICKET = "wrong_ticket", "I purchased the wrong ticket"
        DISLIKE_ORGANIZER = "dislike_organizer", "I don't like the organizer"
        OTHER = "other", "Other"

    id = models.UUIDField(primary_key=True, editable=False)
    ticket = models.ForeignKey(
        "events.Ticket", on_delete=models.PROTECT, related_name="refund_requests"
    )
    ticket_reference = models.CharField(max_length=64)
    event_id = models.UUIDField()
    owner_id = models.CharField(max_length=128)
    refundable_amount = models.DecimalField(max_digits=10, decimal_places=2)
    reason = models.CharField(max_length=32, choices=Reason.choices)
    custom_reason = models.TextField(blank=True, default="")
    note = models.TextField(blank=True, default="")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.REQUESTED)
    status_reason = models.TextField(blank=True, default="")
    requested_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-requested_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["ticket"],
                condition=models.Q(status__in=["requested", "processing"]),
                name="unique_open_refund_per_ticket",
            ),
            models.UniqueConstraint(
                fields=["ticket"],
                condition=models.Q(status="refunded"),
                name="unique_refunded_per_ticket",
            ),
        ]
        indexes = [
            models.Index(fields=["owner_id", "-requested_at"], name="refunds_ref_owner_i_9c41d2_idx"),
            models.Index(fields=["status"], name="refunds_ref_status_3e8b70_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.ticket_reference} - {self.status}"
