"""HTTP handlers for refund requests.

Ticket owners create and track their requests; staff move them through
processing to a decision.
"""

from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain.errors import DomainError
from events.handlers.errors import error_response
from refunds.handlers import deps
from refunds.handlers.serializers import (
    EligibilitySerializer,
    RefundCreateInputSerializer,
    RefundDenyInputSerializer,
    RefundRequestSerializer,
)


def caller_id(request: Request) -> str:
    return str(request.user.pk)


class RefundEligibilityView(APIView):
    """Handler for GET /api/tickets/{ticket_id}/refund-eligibility"""

    def get(self, request: Request, ticket_id: str) -> Response:
        try:
            eligibility = deps.get_refund_service().get_eligibility(ticket_id, caller_id(request))
        except DomainError as exc:
            return error_response(exc)
        return Response(EligibilitySerializer(eligibility).data)


class RefundListView(APIView):
    """Handler for GET/POST /api/refunds"""

    def get(self, request: Request) -> Response:
        try:
            refunds = deps.get_refund_service().list_refunds_for_owner(caller_id(request))
        except DomainError as exc:
            return error_response(exc)
        return Response(RefundRequestSerializer(refunds, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = RefundCreateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            refund = deps.get_refund_service().create_refund(
                data["ticket_id"],
                caller_id(request),
                reason=data["reason"],
                custom_reason=data["custom_reason"],
                note=data["note"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(RefundRequestSerializer(refund).data, status=status.HTTP_201_CREATED)


class RefundDetailView(APIView):
    """Handler for GET /api/refunds/{refund_id}"""

    def get(self, request: Request, refund_id: str) -> Response:
        try:
            refund = deps.get_refund_service().get_refund(
                refund_id, caller_id(request), is_staff=request.user.is_staff
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(RefundRequestSerializer(refund).data)


class RefundProcessView(APIView):
    """Handler for POST /api/refunds/{refund_id}/process"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, refund_id: str) -> Response:
        try:
            refund = deps.get_refund_service().advance_to_processing(refund_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(RefundRequestSerializer(refund).data)


class RefundApproveView(APIView):
    """Handler for POST /api/refunds/{refund_id}/approve"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, refund_id: str) -> Response:
        try:
            refund = deps.get_refund_service().approve(refund_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(RefundRequestSerializer(refund).data)


class RefundDenyView(APIView):
    """Handler for POST /api/refunds/{refund_id}/deny"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, refund_id: str) -> Response:
        serializer = RefundDenyInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            refund = deps.get_refund_service().deny(refund_id, serializer.validated_data["reason"])
        except DomainError as exc:
            return error_response(exc)
        return Response(RefundRequestSerializer(refund).data)
