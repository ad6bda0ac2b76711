from django.urls import path

from payments.views.webhook import MercadoPagoWebhookView

app_name = "payments"

urlpatterns = [
    path("mercadopago/webhook/", MercadoPagoWebhookView.as_view(), name="mercadopago-webhook"),
]
