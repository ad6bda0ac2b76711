from django.contrib import admin

from orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("line_total",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "customer_name", "status", "payment_status", "total_price", "created_at")
    list_filter = ("status", "payment_status", "created_at")
    search_fields = ("order_number", "customer_email", "customer_last_name", "payment_id")
    readonly_fields = ("id", "payment_id", "payment_synced_at", "paid_at", "created_at", "updated_at")
    inlines = [OrderItemInline]
    ordering = ("-created_at",)
