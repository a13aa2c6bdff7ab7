from django.contrib import admin

from modules.orders.models import Order, OrderedService


class OrderedServiceInline(admin.TabularInline):
    model = OrderedService
    extra = 0
    can_delete = False
    readonly_fields = ("service", "position", "items")

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "status", "total_amount", "pickup_date", "expires_at")
    list_filter = ("status", "pickup_date")
    search_fields = ("id", "user__email", "order_person_name", "phone_number")
    readonly_fields = ("created_at", "updated_at", "expires_at")
    inlines = [OrderedServiceInline]
