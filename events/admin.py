from django.contrib import admin

from events.models import Discount, Event, Ticket, TicketTier


class TicketTierInline(admin.TabularInline):
    model = TicketTier
    extra = 1
    readonly_fields = ["stock_sold"]



class DiscountInline(admin.TabularInline):
    model = Discount
    extra = 0
    readonly_fields = ["used_count"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "start_at", "capacity_enabled", "capacity_max", "tickets_sold"]
    search_fields = ["name", "booker_id"]
    readonly_fields = ["tickets_sold", "total_revenue"]
    inlines = [TicketTierInline, DiscountInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["reference", "event", "tier_policy", "total_paid", "purchased_at", "verified"]
    list_filter = ["event", "verified"]
    search_fields = ["reference", "owner_id"]
    readonly_fields = ["reference", "event", "owner_id", "tier_policy", "price", "total_paid", "purchased_at", "discount_code"]
