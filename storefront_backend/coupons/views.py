# coupons/views.py

"""
COUPON API

- GET    /api/coupons/                 (admin)  list
- POST   /api/coupons/                 (admin)  create
- DELETE /api/coupons/bulk/            (admin)  bulk delete
- GET    /api/coupons/<code>/          (public) validate code
- DELETE /api/coupons/<code>/          (admin)  delete
- PATCH  /api/coupons/<code>/status/   (admin)  activate / deactivate
"""

from __future__ import annotations

import logging

from django.db import transaction
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from coupons.models import Coupon, normalize_coupon_code
from coupons.serializers import (
    CouponBulkDeleteSerializer,
    CouponSerializer,
    CouponStatusSerializer,
)
from coupons.services import CouponError, CouponNotFoundError, get_valid_coupon

logger = logging.getLogger(__name__)


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


class CouponListCreateView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(tags=["Coupons"], responses={200: CouponSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        coupons = Coupon.objects.all()
        return Response(CouponSerializer(coupons, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Coupons"],
        request=CouponSerializer,
        responses={201: CouponSerializer, 400: OpenApiResponse(description="Validation error / duplicate")},
    )
    def post(self, request, *args, **kwargs):
        s = CouponSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        code = s.validated_data["code"]
        if Coupon.objects.filter(code=code).exists():
            return error_response(
                code="coupon_exists",
                message="Cupom já existe",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        coupon = s.save()
        logger.info("Coupon created", extra={"code": coupon.code})
        return Response(CouponSerializer(coupon).data, status=status.HTTP_201_CREATED)


class CouponDetailView(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAdminUser()]

    @extend_schema(
        tags=["Coupons"],
        responses={
            200: CouponSerializer,
            400: OpenApiResponse(description="Inactive or expired"),
            404: OpenApiResponse(description="Unknown coupon"),
        },
        description="Validate a coupon code typed at checkout.",
    )
    def get(self, request, code, *args, **kwargs):
        try:
            coupon = get_valid_coupon(code)
        except CouponNotFoundError as exc:
            return error_response(code="coupon_not_found", message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        except CouponError as exc:
            return error_response(code="coupon_invalid", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        return Response({"coupon": CouponSerializer(coupon).data}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Coupons"], responses={204: None, 404: OpenApiResponse(description="Unknown coupon")})
    def delete(self, request, code, *args, **kwargs):
        deleted, _ = Coupon.objects.filter(code=normalize_coupon_code(code)).delete()
        if not deleted:
            return error_response(
                code="coupon_not_found",
                message="Cupom não encontrado",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        logger.info("Coupon deleted", extra={"code": normalize_coupon_code(code)})
        return Response(status=status.HTTP_204_NO_CONTENT)


class CouponStatusView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(tags=["Coupons"], request=CouponStatusSerializer, responses={200: CouponSerializer})
    def patch(self, request, code, *args, **kwargs):
        s = CouponStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        coupon = Coupon.objects.filter(code=normalize_coupon_code(code)).first()
        if coupon is None:
            return error_response(
                code="coupon_not_found",
                message="Cupom não encontrado",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        coupon.is_active = s.validated_data["is_active"]
        coupon.save(update_fields=["is_active", "updated_at"])

        return Response({"success": True, "coupon": CouponSerializer(coupon).data}, status=status.HTTP_200_OK)


class CouponBulkDeleteView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        tags=["Coupons"],
        request=CouponBulkDeleteSerializer,
        responses={200: OpenApiResponse(description="{success, deleted_count}")},
    )
    @transaction.atomic
    def delete(self, request, *args, **kwargs):
        s = CouponBulkDeleteSerializer(data=request.data)
        if not s.is_valid():
            return error_response(
                code="no_coupons",
                message="Nenhum cupom especificado",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        codes = {normalize_coupon_code(c) for c in s.validated_data["codes"]}
        qs = Coupon.objects.filter(code__in=codes)
        if not qs.exists():
            return error_response(
                code="coupon_not_found",
                message="Nenhum cupom encontrado",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        deleted_count, _ = qs.delete()
        logger.info("Coupons deleted in bulk", extra={"deleted_count": deleted_count})
        return Response({"success": True, "deleted_count": deleted_count}, status=status.HTTP_200_OK)
