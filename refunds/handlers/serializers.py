"""Serializers for refund requests and eligibility verdicts."""

from rest_framework import serializers

from refunds.domain import RefundReason


class RefundRequestSerializer(serializers.Serializer):
    """Serializer for RefundRequest domain model."""

    id = serializers.CharField()
    ticket_id = serializers.CharField()
    ticket_reference = serializers.CharField()
    event_id = serializers.CharField()
    refundable_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    reason = serializers.CharField(source="reason.value")
    reason_label = serializers.CharField(source="display_reason")
    custom_reason = serializers.CharField(allow_null=True)
    note = serializers.CharField(allow_null=True)
    status = serializers.CharField(source="status.value")
    status_reason = serializers.CharField(allow_null=True)
    requested_at = serializers.DateTimeField()


class EligibilitySerializer(serializers.Serializer):
    verdict = serializers.CharField(source="verdict.value")
    eligible = serializers.BooleanField(source="is_eligible")
    days_since_purchase = serializers.IntegerField()
    boundary = serializers.DateTimeField(allow_null=True)


class RefundCreateInputSerializer(serializers.Serializer):
    ticket_id = serializers.CharField()
    reason = serializers.ChoiceField(choices=[r.value for r in RefundReason])
    custom_reason = serializers.CharField(required=False, allow_blank=True, default="")
    note = serializers.CharField(required=False, allow_blank=True, default="")
    agreed_to_policy = serializers.BooleanField()

    def validate_agreed_to_policy(self, value: bool) -> bool:
        if not value:
            raise serializers.ValidationError("Please agree to the refund policy")
        return value


class RefundDenyInputSerializer(serializers.Serializer):
    reason = serializers.CharField()
