from django.contrib import admin

from payments.models import PaymentEvent


@admin.register(PaymentEvent)
class PaymentEventAdmin(admin.ModelAdmin):
    list_display = ("payment_id", "provider_status", "outcome", "order", "provider_updated_at", "received_at")
    list_filter = ("outcome", "provider_status")
    search_fields = ("payment_id", "external_reference", "dedupe_key")
    readonly_fields = [f.name for f in PaymentEvent._meta.fields]
    ordering = ("-received_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
