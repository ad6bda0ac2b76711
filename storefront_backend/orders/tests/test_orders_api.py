from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from orders.tests.helpers import make_order


class PublicOrderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.order = make_order(user_id="user_123")

    def test_order_detail(self):
        res = self.client.get(reverse("orders:order-detail", args=[self.order.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["order_number"], self.order.order_number)
        self.assertEqual(len(res.data["items"]), 1)

    def test_order_detail_unknown(self):
        res = self.client.get(reverse("orders:order-detail", args=["00000000-0000-0000-0000-000000000000"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_customer_orders_newest_first(self):
        newer = make_order(user_id="user_123")
        make_order(user_id="someone_else")

        res = self.client.get(reverse("orders:customer-orders"), {"user_id": "user_123"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([o["id"] for o in res.data], [str(newer.id), str(self.order.id)])

    def test_customer_orders_requires_user_id(self):
        res = self.client.get(reverse("orders:customer-orders"))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_track_hides_private_fields(self):
        res = self.client.get(reverse("order-track", args=[self.order.order_number.lower()]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["order_number"], self.order.order_number)
        self.assertEqual(res.data["city"], "Curitiba")
        for field in ("customer_document", "customer_email", "customer_phone", "user_id", "shipping_address"):
            self.assertNotIn(field, res.data)

    def test_track_unknown(self):
        res = self.client.get(reverse("order-track", args=["V-000000"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
