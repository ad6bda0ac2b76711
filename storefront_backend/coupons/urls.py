# coupons/urls.py

from django.urls import path

from coupons.views import (
    CouponBulkDeleteView,
    CouponDetailView,
    CouponListCreateView,
    CouponStatusView,
)

app_name = "coupons"

urlpatterns = [
    path("", CouponListCreateView.as_view(), name="coupon-list"),
    path("bulk/", CouponBulkDeleteView.as_view(), name="coupon-bulk-delete"),
    path("<str:code>/", CouponDetailView.as_view(), name="coupon-detail"),
    path("<str:code>/status/", CouponStatusView.as_view(), name="coupon-status"),
]
