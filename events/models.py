"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.core.validators import RegexValidator
from django.db import models

clock_time_validator = RegexValidator(r"^([01]\d|2[0-3]):[0-5]\d$", "Enter a 24-hour time as HH:MM.")


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    booker_id = models.CharField(max_length=128)
    is_free = models.BooleanField(default=False)
    start_at = models.DateTimeField()
    end_at = models.DateTimeField(blank=True, null=True)
    start_time = models.CharField(
        max_length=5, blank=True, default="", validators=[clock_time_validator]
    )
    end_time = models.CharField(
        max_length=5, blank=True, default="", validators=[clock_time_validator]
    )
    capacity_enabled = models.BooleanField(default=False)
    capacity_max = models.PositiveIntegerField(default=0)
    tickets_sold = models.PositiveIntegerField(default=0)
    sale_window_enabled = models.BooleanField(default=False)
    sale_stop_at = models.DateTimeField(blank=True, null=True)
    total_revenue = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="events_even_created_0f2a1c_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class TicketTier(models.Model):
    """Persistence model for ticket tiers.

    stock_max of NULL means the tier has no independent limit.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="tiers")
    policy = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    position = models.PositiveIntegerField(default=0)
    stock_max = models.PositiveIntegerField(blank=True, null=True)
    stock_sold = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "policy"]
        constraints = [
            models.UniqueConstraint(fields=["event", "policy"], name="unique_tier_policy_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.policy} - {self.price}"


class Ticket(models.Model):
    """Persistence model for issued tickets."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reference = models.CharField(max_length=64, unique=True)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="tickets")
    owner_id = models.CharField(max_length=128)
    tier_policy = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    total_paid = models.DecimalField(max_digits=10, decimal_places=2)
    purchased_at = models.DateTimeField()
    verified = models.BooleanField(default=False)
    discount_code = models.CharField(max_length=50, blank=True, default="")

    class Meta:
        ordering = ["-purchased_at"]
        indexes = [
            models.Index(fields=["owner_id", "-purchased_at"], name="events_tick_owner_i_5b7e3d_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.tier_policy} - {self.reference}"


class Discount(models.Model):
    """Persistence model for event discount codes."""

    class Kind(models.TextChoices):
        PERCENTAGE = "percentage", "Percentage"
        FLAT = "flat", "Flat amount"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="discounts")
    code = models.CharField(max_length=50)
    kind = models.CharField(max_length=20, choices=Kind.choices)
    value = models.DecimalField(max_digits=10, decimal_places=2)
    max_uses = models.PositiveIntegerField()
    used_count = models.PositiveIntegerField(default=0)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["code"]
        constraints = [
            models.UniqueConstraint(fields=["event", "code"], name="unique_discount_code_per_event"),
        ]

    def __str__(self) -> str:
        return self.code
