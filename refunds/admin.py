from django.contrib import admin, messages
from django.contrib.admin import helpers
from django.template.response import TemplateResponse

from events.domain.errors import DomainError
from refunds.handlers.deps import get_refund_service
from refunds.models import RefundRequest


@admin.register(RefundRequest)
class RefundRequestAdmin(admin.ModelAdmin):
    list_display = ["ticket_reference", "owner_id", "refundable_amount", "reason", "status", "requested_at"]
    list_filter = ["status", "reason"]
    search_fields = ["ticket_reference", "owner_id"]
    readonly_fields = [
        "id", "ticket", "ticket_reference", "event_id", "owner_id", "refundable_amount",
        "reason", "custom_reason", "note", "status", "status_reason", "requested_at", "updated_at",
    ]
    actions = ["mark_processing", "approve", "deny"]

    def has_add_permission(self, request):
        return False

    def _apply(self, request, queryset, operation, verb):
        service = get_refund_service()
        done = 0
        for row in queryset:
            try:
                operation(service, str(row.pk))
            except DomainError as exc:
                self.message_user(request, f"{row.ticket_reference}: {exc.message}", messages.ERROR)
            else:
                done += 1
        if done:
            self.message_user(request, f"{done} refund(s) {verb}.", messages.SUCCESS)

    @admin.action(description="Mark selected refunds as processing")
    def mark_processing(self, request, queryset):
        self._apply(request, queryset, lambda s, rid: s.advance_to_processing(rid), "marked processing")

    @admin.action(description="Approve selected refunds")
    def approve(self, request, queryset):
        self._apply(request, queryset, lambda s, rid: s.approve(rid), "approved")

    @admin.action(description="Deny selected refunds")
    def deny(self, request, queryset):
        reason = request.POST.get("reason", "").strip()
        if "apply" in request.POST and reason:
            self._apply(request, queryset, lambda s, rid: s.deny(rid, reason), "denied")
            return None
        context = {
            **self.admin_site.each_context(request),
            "title": "Deny refunds",
            "opts": self.model._meta,
            "queryset": queryset,
            "action_checkbox_name": helpers.ACTION_CHECKBOX_NAME,
            "missing_reason": "apply" in request.POST,
        }
        return TemplateResponse(request, "admin/refunds/refundrequest/deny_selected.html", context)
