"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers


class MoneyField(serializers.Field):
    def to_representation(self, value):
        return str(value)


class TierStockSerializer(serializers.Serializer):
    max = serializers.IntegerField()
    sold = serializers.IntegerField()
    remaining = serializers.IntegerField()


class TicketTierSerializer(serializers.Serializer):
    """Serializer for TicketTier domain model."""

    policy = serializers.CharField()
    price = MoneyField()
    stock = TierStockSerializer(allow_null=True)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    booker_id = serializers.CharField()
    is_free = serializers.BooleanField()
    start_at = serializers.DateTimeField()
    end_at = serializers.DateTimeField(allow_null=True)
    start_time = serializers.CharField(allow_null=True)
    end_time = serializers.CharField(allow_null=True)
    capacity_enabled = serializers.BooleanField(source="capacity.enabled", default=False)
    capacity_max = serializers.IntegerField(source="capacity.max", default=0)
    sale_stop_at = serializers.SerializerMethodField()
    tiers = TicketTierSerializer(many=True)

    def get_sale_stop_at(self, event):
        window = event.sale_window
        if window is None or not window.enabled or window.stop_at is None:
            return None
        return serializers.DateTimeField().to_representation(window.stop_at)


class EventStatusSerializer(serializers.Serializer):
    """Serializer for EventStatus facts."""

    is_today = serializers.BooleanField()
    is_passed = serializers.BooleanField()
    is_sold_out = serializers.BooleanField()
    is_sale_ended = serializers.BooleanField()
    label = serializers.CharField()


class PurchaseDecisionSerializer(serializers.Serializer):
    allowed = serializers.BooleanField()
    block_reason = serializers.SerializerMethodField()

    def get_block_reason(self, decision):
        return decision.block_reason.value if decision.block_reason else None


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.CharField()
    reference = serializers.CharField()
    event_id = serializers.CharField()
    owner_id = serializers.CharField()
    tier_policy = serializers.CharField()
    price = MoneyField()
    total_paid = MoneyField()
    purchased_at = serializers.DateTimeField()
    verified = serializers.BooleanField()
    discount_code = serializers.CharField(allow_null=True)


class PriceQuoteSerializer(serializers.Serializer):
    """Serializer for a ticket price quote."""

    list_price = MoneyField()
    discount_amount = MoneyField()
    price = MoneyField()
    platform_fee = MoneyField()
    total_paid = MoneyField()
    discount_code = serializers.CharField(allow_null=True)


class PurchaseCheckInputSerializer(serializers.Serializer):
    tier = serializers.CharField(max_length=100)


class PurchaseInputSerializer(serializers.Serializer):
    tier = serializers.CharField(max_length=100)
    reference = serializers.CharField(max_length=64)
    discount_code = serializers.CharField(max_length=50, required=False, allow_blank=True)


class DiscountCheckInputSerializer(serializers.Serializer):
    tier = serializers.CharField(max_length=100)
    code = serializers.CharField(max_length=50)
